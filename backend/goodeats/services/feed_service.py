"""Feed service: posts, comments, and likes.

likes_count is recomputed from the post_likes rows inside the same
transaction as each like/unlike, so it cannot drift from the join table.
"""
import logging
from typing import Optional

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session, joinedload, selectinload

from goodeats.errors import NotFound, ValidationError
from goodeats.models.event import Event
from goodeats.models.post import Comment, Post, PostLike

logger = logging.getLogger(__name__)


def _require_text(value: str, field: str) -> str:
    value = (value or "").strip()
    if not value:
        raise ValidationError(f"{field} cannot be empty")
    return value


def _get_post(db: Session, post_id: str, lock: bool = False) -> Post:
    query = db.query(Post).filter(Post.post_id == post_id)
    if lock:
        query = query.with_for_update()
    post = query.first()
    if not post:
        raise NotFound("Post")
    return post


def _recount_likes(db: Session, post: Post) -> None:
    db.flush()
    post.likes_count = db.query(PostLike).filter(PostLike.post_id == post.post_id).count()


def list_feed(db: Session, viewer_id: Optional[str] = None, limit: int = 20, offset: int = 0):
    """Newest posts first. Returns (posts, ids of posts the viewer has liked)."""
    posts = (
        db.query(Post)
        .options(
            joinedload(Post.user),
            joinedload(Post.event),
            selectinload(Post.comments).joinedload(Comment.user),
        )
        .order_by(Post.created_at.desc(), Post.post_id)
        .offset(offset)
        .limit(limit)
        .all()
    )
    liked: set[str] = set()
    if viewer_id and posts:
        liked = {
            row.post_id
            for row in db.query(PostLike.post_id).filter(
                PostLike.user_id == viewer_id,
                PostLike.post_id.in_([p.post_id for p in posts]),
            )
        }
    return posts, liked


def create_post(
    db: Session,
    user_id: str,
    content: str,
    event_id: Optional[str] = None,
    images: Optional[list[str]] = None,
) -> Post:
    content = _require_text(content, "content")
    if event_id and not db.query(Event).filter(Event.event_id == event_id).first():
        raise NotFound("Event")
    post = Post(user_id=user_id, event_id=event_id, content=content, images=images or None)
    db.add(post)
    db.commit()
    db.refresh(post)
    logger.info("User %s created post %s", user_id, post.post_id)
    return post


def like_post(db: Session, post_id: str, user_id: str) -> Post:
    """Idempotent: liking an already-liked post leaves the count unchanged."""
    post = _get_post(db, post_id, lock=True)
    existing = (
        db.query(PostLike)
        .filter(PostLike.post_id == post_id, PostLike.user_id == user_id)
        .first()
    )
    if not existing:
        db.add(PostLike(post_id=post_id, user_id=user_id))
    try:
        _recount_likes(db, post)
        db.commit()
    except IntegrityError:
        # A concurrent like from the same user already landed
        db.rollback()
        post = _get_post(db, post_id)
    db.refresh(post)
    logger.info("User %s liked post %s (%d likes)", user_id, post_id, post.likes_count)
    return post


def unlike_post(db: Session, post_id: str, user_id: str) -> Post:
    post = _get_post(db, post_id, lock=True)
    db.query(PostLike).filter(PostLike.post_id == post_id, PostLike.user_id == user_id).delete()
    _recount_likes(db, post)
    db.commit()
    db.refresh(post)
    logger.info("User %s unliked post %s (%d likes)", user_id, post_id, post.likes_count)
    return post


def add_comment(db: Session, post_id: str, user_id: str, content: str) -> Comment:
    content = _require_text(content, "content")
    _get_post(db, post_id)
    comment = Comment(post_id=post_id, user_id=user_id, content=content)
    db.add(comment)
    db.commit()
    db.refresh(comment)
    logger.info("User %s commented on post %s", user_id, post_id)
    return comment
