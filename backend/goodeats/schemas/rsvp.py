"""Pydantic schemas for RSVPs, rosters, and meal plans."""
from datetime import datetime
from typing import Optional
from pydantic import BaseModel, Field

from goodeats.models.rsvp import RSVPStatus


class RSVPSubmit(BaseModel):
    status: str  # attending, maybe, declined
    guests_count: int = 1
    bringing_dish: Optional[str] = Field(None, max_length=255)
    dietary_restrictions: Optional[str] = Field(None, max_length=500)


class RSVPOut(BaseModel):
    rsvp_id: str
    event_id: str
    user_id: str
    status: RSVPStatus
    guests_count: int
    bringing_dish: Optional[str] = None
    dietary_restrictions: Optional[str] = None
    created_at: datetime
    updated_at: datetime

    model_config = {"from_attributes": True}


class RosterEntryOut(BaseModel):
    rsvp_id: str
    user_id: str
    username: str
    avatar_url: Optional[str] = None
    guests_count: int
    bringing_dish: Optional[str] = None
    dietary_restrictions: Optional[str] = None
    created_at: datetime


class RosterOut(BaseModel):
    event_id: str
    max_attendees: int
    total_attending_guests: int
    spots_remaining: int
    is_full: bool
    attendees: list[RosterEntryOut]


class MealPlanOut(BaseModel):
    event_id: str
    appetizer: list[str]
    main: list[str]
    dessert: list[str]
    drink: list[str]
    without_dish: list[str]  # usernames of attendees who have not pledged a dish
