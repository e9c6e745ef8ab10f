"""RSVP/capacity ledger.

Responsibilities:
- Upsert one RSVP per (event, user), keyed by a storage-level unique constraint
- Validate status and party size
- Enforce capacity on every attending submission, new or updated
- Recompute the event's current_attendees from the RSVP rows inside the
  same transaction as the write, with the event row locked
- Build the attending roster and the potluck meal plan
"""
import logging
from dataclasses import dataclass
from datetime import datetime
from typing import Optional

from sqlalchemy import func
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from goodeats.config import settings
from goodeats.database import utcnow
from goodeats.errors import CapacityExceeded, Conflict, NotFound, ValidationError
from goodeats.models.event import Event
from goodeats.models.rsvp import RSVP, RSVPStatus
from goodeats.models.user import User
from goodeats.services.capacity import is_event_full, spots_remaining
from goodeats.services.dish_categorizer import categorize_dishes

logger = logging.getLogger(__name__)

__all__ = [
    "submit_rsvp", "get_rsvp", "get_roster", "get_meal_plan",
    "categorize_dishes", "is_event_full", "attending_guests",
]


@dataclass
class RosterEntry:
    rsvp_id: str
    user_id: str
    username: str
    avatar_url: Optional[str]
    guests_count: int
    bringing_dish: Optional[str]
    dietary_restrictions: Optional[str]
    created_at: datetime


@dataclass
class Roster:
    event_id: str
    max_attendees: int
    total_attending_guests: int
    spots_remaining: int
    is_full: bool
    attendees: list[RosterEntry]


def _parse_status(value) -> RSVPStatus:
    try:
        return RSVPStatus(value)
    except ValueError:
        allowed = ", ".join(s.value for s in RSVPStatus)
        raise ValidationError(f"Invalid RSVP status: {value!r} (expected one of: {allowed})")


def _validate_guests(guests_count) -> int:
    ceiling = settings.MAX_GUESTS_PER_RSVP
    if isinstance(guests_count, bool) or not isinstance(guests_count, int):
        raise ValidationError("guests_count must be an integer")
    if guests_count < 1 or guests_count > ceiling:
        raise ValidationError(f"guests_count must be between 1 and {ceiling}")
    return guests_count


def _clean_text(value: Optional[str]) -> Optional[str]:
    if value is None:
        return None
    value = value.strip()
    return value or None


def _get_event_for_update(db: Session, event_id: str) -> Event:
    """Load the event row with a write lock so capacity checks serialize per event."""
    event = db.query(Event).filter(Event.event_id == event_id).with_for_update().first()
    if not event:
        raise NotFound("Event")
    return event


def attending_guests(db: Session, event_id: str, exclude_user_id: Optional[str] = None) -> int:
    """Sum of guests_count over attending RSVPs, optionally leaving one user out."""
    query = db.query(func.coalesce(func.sum(RSVP.guests_count), 0)).filter(
        RSVP.event_id == event_id,
        RSVP.status == RSVPStatus.attending,
    )
    if exclude_user_id is not None:
        query = query.filter(RSVP.user_id != exclude_user_id)
    return int(query.scalar())


def submit_rsvp(
    db: Session,
    event_id: str,
    user_id: str,
    status,
    guests_count: int = 1,
    bringing_dish: Optional[str] = None,
    dietary_restrictions: Optional[str] = None,
) -> RSVP:
    """Create or update the caller's RSVP and recompute the event's attendance.

    Raises NotFound, ValidationError, CapacityExceeded, or Conflict; on any
    error the transaction is rolled back and nothing changes.
    """
    rsvp_status = _parse_status(status)
    guests_count = _validate_guests(guests_count)
    dish = _clean_text(bringing_dish) if rsvp_status == RSVPStatus.attending else None

    event = _get_event_for_update(db, event_id)

    if rsvp_status == RSVPStatus.attending:
        committed = attending_guests(db, event_id, exclude_user_id=user_id)
        available = spots_remaining(event.max_attendees, committed)
        if guests_count > available:
            db.rollback()
            logger.info(
                "Rejected RSVP from user %s to event %s: %d guests requested, %d spots left",
                user_id, event_id, guests_count, max(available, 0),
            )
            raise CapacityExceeded(requested=guests_count, available=max(available, 0))

    rsvp = (
        db.query(RSVP)
        .filter(RSVP.event_id == event_id, RSVP.user_id == user_id)
        .first()
    )
    created = rsvp is None
    if created:
        rsvp = RSVP(event_id=event_id, user_id=user_id)
        db.add(rsvp)

    rsvp.status = rsvp_status
    rsvp.guests_count = guests_count
    rsvp.bringing_dish = dish
    rsvp.dietary_restrictions = _clean_text(dietary_restrictions)
    rsvp.updated_at = utcnow()

    try:
        db.flush()
        event.current_attendees = attending_guests(db, event_id)
        db.commit()
    except IntegrityError:
        db.rollback()
        logger.warning("Concurrent RSVP write for user %s on event %s", user_id, event_id)
        raise Conflict("Your RSVP changed while saving. Reload the event and try again.")

    db.refresh(rsvp)
    logger.info(
        "%s RSVP %s: user %s -> %s x%d for event %s (now %d/%d)",
        "Created" if created else "Updated", rsvp.rsvp_id, user_id, rsvp_status.value,
        guests_count, event_id, event.current_attendees, event.max_attendees,
    )
    return rsvp


def get_rsvp(db: Session, event_id: str, user_id: str) -> RSVP:
    rsvp = (
        db.query(RSVP)
        .filter(RSVP.event_id == event_id, RSVP.user_id == user_id)
        .first()
    )
    if not rsvp:
        raise NotFound("RSVP")
    return rsvp


def get_roster(db: Session, event_id: str) -> Roster:
    """Attending RSVPs with responder profile fields, oldest first."""
    event = db.query(Event).filter(Event.event_id == event_id).first()
    if not event:
        raise NotFound("Event")

    rows = (
        db.query(RSVP, User)
        .join(User, User.user_id == RSVP.user_id)
        .filter(RSVP.event_id == event_id, RSVP.status == RSVPStatus.attending)
        .order_by(RSVP.created_at, RSVP.rsvp_id)
        .all()
    )
    attendees = [
        RosterEntry(
            rsvp_id=rsvp.rsvp_id,
            user_id=user.user_id,
            username=user.username,
            avatar_url=user.avatar_url,
            guests_count=rsvp.guests_count,
            bringing_dish=rsvp.bringing_dish,
            dietary_restrictions=rsvp.dietary_restrictions,
            created_at=rsvp.created_at,
        )
        for rsvp, user in rows
    ]
    total = sum(entry.guests_count for entry in attendees)
    return Roster(
        event_id=event.event_id,
        max_attendees=event.max_attendees,
        total_attending_guests=total,
        spots_remaining=spots_remaining(event.max_attendees, total),
        is_full=total >= event.max_attendees,
        attendees=attendees,
    )


def get_meal_plan(db: Session, event_id: str) -> dict:
    """Group the roster's dish pledges by course."""
    roster = get_roster(db, event_id)
    buckets = categorize_dishes(entry.bringing_dish for entry in roster.attendees)
    return {
        "event_id": roster.event_id,
        **{category.value: dishes for category, dishes in buckets.items()},
        "without_dish": [entry.username for entry in roster.attendees if not entry.bringing_dish],
    }
