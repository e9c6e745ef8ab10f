"""Profile service: profile edits and the aggregate counts shown on a profile."""
import logging
from datetime import datetime, timezone
from typing import Any

from sqlalchemy import or_
from sqlalchemy.orm import Session

from goodeats.errors import Conflict, NotFound, ValidationError
from goodeats.models.event import Event
from goodeats.models.friendship import Friendship, FriendshipStatus
from goodeats.models.rsvp import RSVP, RSVPStatus
from goodeats.models.user import User

logger = logging.getLogger(__name__)


def get_user(db: Session, user_id: str) -> User:
    user = db.query(User).filter(User.user_id == user_id).first()
    if not user:
        raise NotFound("User")
    return user


def update_profile(db: Session, user: User, updates: dict[str, Any]) -> User:
    """Partial profile update; username must stay unique and non-blank."""
    if "username" in updates:
        username = (updates["username"] or "").strip()
        if not username:
            raise ValidationError("username cannot be blank")
        taken = (
            db.query(User)
            .filter(User.username == username, User.user_id != user.user_id)
            .first()
        )
        if taken:
            raise Conflict("Username already taken")
        updates["username"] = username
    if "full_name" in updates and not (updates["full_name"] or "").strip():
        raise ValidationError("full_name cannot be blank")

    for field, value in updates.items():
        setattr(user, field, value)
    db.commit()
    db.refresh(user)
    logger.info("Updated profile %s (%s)", user.user_id, ", ".join(sorted(updates)))
    return user


def profile_stats(db: Session, user_id: str) -> dict[str, int]:
    hosted = db.query(Event).filter(Event.host_id == user_id).count()
    attended = (
        db.query(RSVP)
        .filter(RSVP.user_id == user_id, RSVP.status == RSVPStatus.attending)
        .count()
    )
    friends = (
        db.query(Friendship)
        .filter(
            or_(Friendship.user_id == user_id, Friendship.friend_id == user_id),
            Friendship.status == FriendshipStatus.accepted,
        )
        .count()
    )
    return {"events_hosted": hosted, "events_attended": attended, "friends": friends}


def upcoming_events(db: Session, user_id: str, limit: int = 10) -> list[Event]:
    """Events the user is attending that have not started yet, soonest first."""
    return (
        db.query(Event)
        .join(RSVP, RSVP.event_id == Event.event_id)
        .filter(
            RSVP.user_id == user_id,
            RSVP.status == RSVPStatus.attending,
            Event.starts_at_utc >= datetime.now(timezone.utc),
        )
        .order_by(Event.starts_at_utc)
        .limit(limit)
        .all()
    )
