"""Pydantic schemas for the signed-in user's profile page."""
from pydantic import BaseModel

from goodeats.schemas.event import EventSummary
from goodeats.schemas.user import UserOut


class ProfileStats(BaseModel):
    events_hosted: int
    events_attended: int
    friends: int


class ProfileOut(BaseModel):
    user: UserOut
    stats: ProfileStats
    upcoming_events: list[EventSummary] = []
