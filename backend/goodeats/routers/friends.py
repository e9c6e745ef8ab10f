"""Friends API routes (read-only)."""
from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from goodeats.auth import get_current_user
from goodeats.database import get_db
from goodeats.models.user import User
from goodeats.schemas.friendship import FriendListOut
from goodeats.services import friend_service

router = APIRouter()


@router.get("/", response_model=FriendListOut)
def list_friends(user: User = Depends(get_current_user), db: Session = Depends(get_db)):
    friends = friend_service.list_friends(db, user.user_id)
    return {"count": len(friends), "friends": friends}
