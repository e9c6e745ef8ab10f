"""Event service: creation, host-only updates, and the read views built on events.

Responsibilities:
- Authorization hook: only the host may update an event
- Time zone handling: local date/time + IANA zone -> starts_at_utc (pytz)
- Capacity safety: max_attendees can never drop below current_attendees
- Listing, map pins, and the monthly calendar of hosted/attending events
"""
import calendar
import logging
from datetime import date, datetime, time, timezone
from typing import Any, Optional

import pytz
from sqlalchemy.orm import Session, joinedload

from goodeats.config import settings
from goodeats.errors import Forbidden, NotFound, ValidationError
from goodeats.models.event import Event, EventCategory
from goodeats.models.rsvp import RSVP, RSVPStatus

logger = logging.getLogger(__name__)

_IMMUTABLE_FIELDS = ("event_id", "host_id", "current_attendees", "starts_at_utc", "created_at")
_REQUIRED_FIELDS = (
    "title", "event_type", "date", "time", "duration_hours", "timezone", "location_name",
    "location_address", "latitude", "longitude", "max_attendees", "is_free", "price",
)
_REQUIRED_TEXT_FIELDS = ("title", "location_name", "location_address")


def _resolve_timezone(name: Optional[str]) -> str:
    name = name or settings.DEFAULT_TIMEZONE
    if name not in pytz.all_timezones_set:
        raise ValidationError(f"Unknown time zone: {name}")
    return name


def local_start_to_utc(event_date: date, start_time: time, tz_name: str) -> datetime:
    """Convert a wall-clock start in the event's zone to an aware UTC datetime."""
    tz = pytz.timezone(tz_name)
    local = tz.localize(datetime.combine(event_date, start_time.replace(tzinfo=None)))
    return local.astimezone(pytz.utc)


def _clean_required_text(data: dict[str, Any]) -> None:
    for field in _REQUIRED_TEXT_FIELDS:
        if data.get(field) is None:
            continue
        data[field] = data[field].strip()
        if not data[field]:
            raise ValidationError(f"{field} cannot be blank")


def _normalize_pricing(event: Event) -> None:
    if event.is_free:
        event.price = 0


def _normalize_dietary_options(options: Optional[list[str]]) -> Optional[list[str]]:
    if not options:
        return None
    cleaned = [o.strip() for o in options if o and o.strip()]
    return cleaned or None


def _check_authorization(event: Event, actor_user_id: str) -> None:
    """Only the host may modify an event."""
    if event.host_id != actor_user_id:
        raise Forbidden("Only the host may modify this event.")


def get_event(db: Session, event_id: str) -> Event:
    event = (
        db.query(Event)
        .options(joinedload(Event.host))
        .filter(Event.event_id == event_id)
        .first()
    )
    if not event:
        raise NotFound("Event")
    return event


def create_event(db: Session, host_id: str, data: dict[str, Any]) -> Event:
    """Create an event hosted by ``host_id`` from validated create-payload fields."""
    _clean_required_text(data)
    tz_name = _resolve_timezone(data.pop("timezone", None))
    event = Event(host_id=host_id, timezone=tz_name, current_attendees=0, **data)
    event.dietary_options = _normalize_dietary_options(event.dietary_options)
    _normalize_pricing(event)
    event.starts_at_utc = local_start_to_utc(event.date, event.time, tz_name)

    db.add(event)
    db.commit()
    db.refresh(event)
    logger.info("Created %s event '%s' (%s) by host %s", event.event_type.value, event.title,
                event.event_id, host_id)
    return event


def update_event(db: Session, event_id: str, actor_user_id: str, updates: dict[str, Any]) -> Event:
    """Apply a partial update from the host, keeping capacity and start time consistent."""
    event = db.query(Event).filter(Event.event_id == event_id).with_for_update().first()
    if not event:
        raise NotFound("Event")

    _check_authorization(event, actor_user_id)

    _clean_required_text(updates)
    if updates.get("timezone") is not None:
        updates["timezone"] = _resolve_timezone(updates["timezone"])

    new_max = updates.get("max_attendees")
    if new_max is not None and new_max < event.current_attendees:
        raise ValidationError(
            f"max_attendees cannot be lower than the {event.current_attendees} guests already attending"
        )

    for field, value in updates.items():
        if field in _IMMUTABLE_FIELDS or not hasattr(event, field):
            continue
        if value is None and field in _REQUIRED_FIELDS:
            continue
        setattr(event, field, value)

    event.dietary_options = _normalize_dietary_options(event.dietary_options)
    _normalize_pricing(event)
    event.starts_at_utc = local_start_to_utc(event.date, event.time, event.timezone)
    event.updated_at = datetime.now(timezone.utc)

    db.commit()
    db.refresh(event)
    logger.info("Updated event %s (%s)", event_id, ", ".join(sorted(updates)) or "no fields")
    return event


def list_events(
    db: Session,
    event_type: Optional[EventCategory] = None,
    host_id: Optional[str] = None,
    upcoming_only: bool = False,
    limit: int = 50,
    offset: int = 0,
) -> list[Event]:
    query = db.query(Event).options(joinedload(Event.host))
    if event_type:
        query = query.filter(Event.event_type == event_type)
    if host_id:
        query = query.filter(Event.host_id == host_id)
    if upcoming_only:
        query = query.filter(Event.starts_at_utc >= datetime.now(timezone.utc))
    return query.order_by(Event.date, Event.time, Event.event_id).offset(offset).limit(limit).all()


def map_pins(
    db: Session,
    min_lat: Optional[float] = None,
    max_lat: Optional[float] = None,
    min_lng: Optional[float] = None,
    max_lng: Optional[float] = None,
) -> list[Event]:
    """Upcoming events for the map, optionally clipped to a bounding box."""
    query = db.query(Event).filter(Event.starts_at_utc >= datetime.now(timezone.utc))
    if min_lat is not None:
        query = query.filter(Event.latitude >= min_lat)
    if max_lat is not None:
        query = query.filter(Event.latitude <= max_lat)
    if min_lng is not None:
        query = query.filter(Event.longitude >= min_lng)
    if max_lng is not None:
        query = query.filter(Event.longitude <= max_lng)
    return query.order_by(Event.starts_at_utc).all()


def month_calendar(db: Session, user_id: str, year: int, month: int) -> list[dict[str, Any]]:
    """Events in the given month that the user hosts or is attending.

    An event the user both hosts and attends appears once, flagged as hosted.
    """
    if not 1 <= month <= 12:
        raise ValidationError("month must be between 1 and 12")
    first = date(year, month, 1)
    last = date(year, month, calendar.monthrange(year, month)[1])

    hosted = (
        db.query(Event)
        .filter(Event.host_id == user_id, Event.date >= first, Event.date <= last)
        .all()
    )
    attending = (
        db.query(Event)
        .join(RSVP, RSVP.event_id == Event.event_id)
        .filter(
            RSVP.user_id == user_id,
            RSVP.status == RSVPStatus.attending,
            Event.date >= first,
            Event.date <= last,
        )
        .all()
    )

    entries: dict[str, dict[str, Any]] = {}
    for event, is_host in [(e, True) for e in hosted] + [(e, False) for e in attending]:
        if event.event_id in entries:
            continue
        entries[event.event_id] = {
            "event_id": event.event_id,
            "title": event.title,
            "event_type": event.event_type,
            "date": event.date,
            "time": event.time,
            "location_name": event.location_name,
            "is_host": is_host,
        }
    return sorted(entries.values(), key=lambda e: (e["date"], e["time"], e["event_id"]))
