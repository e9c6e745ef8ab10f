"""Event API routes, including the RSVP ledger endpoints for each event."""
import logging
from typing import Optional
from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.orm import Session

from goodeats.auth import get_current_user
from goodeats.database import get_db
from goodeats.models.event import EventCategory
from goodeats.models.user import User
from goodeats.schemas.event import CalendarEntryOut, EventCreate, EventOut, EventUpdate, MapPinOut
from goodeats.schemas.rsvp import MealPlanOut, RosterOut, RSVPOut, RSVPSubmit
from goodeats.services import event_service, rsvp_service

logger = logging.getLogger(__name__)
router = APIRouter()


@router.post("/", response_model=EventOut, status_code=status.HTTP_201_CREATED)
def create_event(
    payload: EventCreate,
    user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    """Host a new event; the caller becomes its host."""
    return event_service.create_event(db, host_id=user.user_id, data=payload.model_dump())


@router.get("/", response_model=list[EventOut])
def list_events(
    event_type: Optional[EventCategory] = Query(None),
    host_id: Optional[str] = Query(None),
    upcoming_only: bool = Query(False),
    limit: int = Query(50, ge=1, le=200),
    offset: int = Query(0, ge=0),
    db: Session = Depends(get_db),
):
    """List events with optional filters, ordered by date and time."""
    return event_service.list_events(
        db,
        event_type=event_type,
        host_id=host_id,
        upcoming_only=upcoming_only,
        limit=limit,
        offset=offset,
    )


@router.get("/map", response_model=list[MapPinOut])
def map_pins(
    min_lat: Optional[float] = Query(None, ge=-90, le=90),
    max_lat: Optional[float] = Query(None, ge=-90, le=90),
    min_lng: Optional[float] = Query(None, ge=-180, le=180),
    max_lng: Optional[float] = Query(None, ge=-180, le=180),
    db: Session = Depends(get_db),
):
    """Upcoming events as map pins, optionally inside a bounding box."""
    return event_service.map_pins(db, min_lat=min_lat, max_lat=max_lat, min_lng=min_lng, max_lng=max_lng)


@router.get("/calendar", response_model=list[CalendarEntryOut])
def month_calendar(
    year: int = Query(..., ge=1970, le=9999),
    month: int = Query(..., ge=1, le=12),
    user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    """Events the caller hosts or attends in one calendar month."""
    return event_service.month_calendar(db, user.user_id, year, month)


@router.get("/{event_id}", response_model=EventOut)
def get_event(event_id: str, db: Session = Depends(get_db)):
    return event_service.get_event(db, event_id)


@router.patch("/{event_id}", response_model=EventOut)
def update_event(
    event_id: str,
    payload: EventUpdate,
    user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    """Update an event (host only)."""
    return event_service.update_event(
        db,
        event_id=event_id,
        actor_user_id=user.user_id,
        updates=payload.model_dump(exclude_unset=True),
    )


@router.put("/{event_id}/rsvp", response_model=RSVPOut)
def submit_rsvp(
    event_id: str,
    payload: RSVPSubmit,
    user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    """Create or update the caller's RSVP for an event."""
    return rsvp_service.submit_rsvp(
        db,
        event_id=event_id,
        user_id=user.user_id,
        status=payload.status,
        guests_count=payload.guests_count,
        bringing_dish=payload.bringing_dish,
        dietary_restrictions=payload.dietary_restrictions,
    )


@router.get("/{event_id}/rsvp/me", response_model=RSVPOut)
def get_my_rsvp(
    event_id: str,
    user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    return rsvp_service.get_rsvp(db, event_id, user.user_id)


@router.get("/{event_id}/roster", response_model=RosterOut)
def get_roster(event_id: str, db: Session = Depends(get_db)):
    """Who's coming: attending RSVPs with totals and remaining capacity."""
    return rsvp_service.get_roster(db, event_id)


@router.get("/{event_id}/meal-plan", response_model=MealPlanOut)
def get_meal_plan(event_id: str, db: Session = Depends(get_db)):
    """Pledged dishes grouped into appetizer / main / dessert / drink."""
    return rsvp_service.get_meal_plan(db, event_id)
