"""User/profile API routes."""
import logging
from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from goodeats.auth import get_current_user
from goodeats.database import get_db
from goodeats.models.user import User
from goodeats.schemas.profile import ProfileOut
from goodeats.schemas.user import UserOut, UserPublic, UserUpdate
from goodeats.services import profile_service

logger = logging.getLogger(__name__)
router = APIRouter()


@router.get("/me", response_model=ProfileOut)
def get_my_profile(user: User = Depends(get_current_user), db: Session = Depends(get_db)):
    """The caller's profile with hosted/attended/friend counts and upcoming events."""
    return {
        "user": user,
        "stats": profile_service.profile_stats(db, user.user_id),
        "upcoming_events": profile_service.upcoming_events(db, user.user_id),
    }


@router.patch("/me", response_model=UserOut)
def update_my_profile(
    payload: UserUpdate,
    user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    """Update profile fields (partial update)."""
    return profile_service.update_profile(db, user, payload.model_dump(exclude_unset=True))


@router.get("/{user_id}", response_model=UserPublic)
def get_user(user_id: str, db: Session = Depends(get_db)):
    """Public profile of any user."""
    return profile_service.get_user(db, user_id)
