"""Feed API routes: posts, likes, comments."""
import logging
from typing import Optional
from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.orm import Session

from goodeats.auth import get_current_user, get_current_user_optional
from goodeats.database import get_db
from goodeats.models.user import User
from goodeats.schemas.post import CommentCreate, CommentOut, LikeOut, PostCreate, PostOut
from goodeats.services import feed_service

logger = logging.getLogger(__name__)
router = APIRouter()


@router.get("/", response_model=list[PostOut])
def list_posts(
    limit: int = Query(20, ge=1, le=100),
    offset: int = Query(0, ge=0),
    viewer: Optional[User] = Depends(get_current_user_optional),
    db: Session = Depends(get_db),
):
    """Newest posts first; ``liked_by_me`` reflects the caller when signed in."""
    posts, liked = feed_service.list_feed(
        db, viewer_id=viewer.user_id if viewer else None, limit=limit, offset=offset,
    )
    out = []
    for post in posts:
        item = PostOut.model_validate(post)
        item.liked_by_me = post.post_id in liked
        out.append(item)
    return out


@router.post("/", response_model=PostOut, status_code=status.HTTP_201_CREATED)
def create_post(
    payload: PostCreate,
    user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    return feed_service.create_post(
        db, user_id=user.user_id, content=payload.content, event_id=payload.event_id, images=payload.images,
    )


@router.post("/{post_id}/like", response_model=LikeOut)
def like_post(post_id: str, user: User = Depends(get_current_user), db: Session = Depends(get_db)):
    post = feed_service.like_post(db, post_id, user.user_id)
    return {"post_id": post.post_id, "liked": True, "likes_count": post.likes_count}


@router.delete("/{post_id}/like", response_model=LikeOut)
def unlike_post(post_id: str, user: User = Depends(get_current_user), db: Session = Depends(get_db)):
    post = feed_service.unlike_post(db, post_id, user.user_id)
    return {"post_id": post.post_id, "liked": False, "likes_count": post.likes_count}


@router.post("/{post_id}/comments", response_model=CommentOut, status_code=status.HTTP_201_CREATED)
def add_comment(
    post_id: str,
    payload: CommentCreate,
    user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    return feed_service.add_comment(db, post_id, user.user_id, payload.content)
