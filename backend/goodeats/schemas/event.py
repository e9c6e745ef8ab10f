"""Pydantic schemas for Events."""
import datetime as dt
from typing import Optional
from pydantic import BaseModel, Field

from goodeats.models.event import EventCategory
from goodeats.schemas.user import UserPublic


class EventCreate(BaseModel):
    title: str = Field(..., min_length=1, max_length=255)
    description: str = ""
    event_type: EventCategory = EventCategory.potluck
    date: dt.date
    time: dt.time
    duration_hours: float = Field(2, gt=0, le=24)
    timezone: Optional[str] = Field(None, max_length=50)
    location_name: str = Field(..., min_length=1, max_length=255)
    location_address: str = Field(..., min_length=1, max_length=500)
    latitude: float = Field(..., ge=-90, le=90)
    longitude: float = Field(..., ge=-180, le=180)
    max_attendees: int = Field(10, ge=2, le=100)
    cover_image: Optional[str] = Field(None, max_length=500)
    meal_theme: Optional[str] = Field(None, max_length=255)
    is_free: bool = True
    price: float = Field(0, ge=0)
    dietary_options: Optional[list[str]] = None


class EventUpdate(BaseModel):
    title: Optional[str] = Field(None, min_length=1, max_length=255)
    description: Optional[str] = None
    event_type: Optional[EventCategory] = None
    date: Optional[dt.date] = None
    time: Optional[dt.time] = None
    duration_hours: Optional[float] = Field(None, gt=0, le=24)
    timezone: Optional[str] = Field(None, max_length=50)
    location_name: Optional[str] = Field(None, min_length=1, max_length=255)
    location_address: Optional[str] = Field(None, min_length=1, max_length=500)
    latitude: Optional[float] = Field(None, ge=-90, le=90)
    longitude: Optional[float] = Field(None, ge=-180, le=180)
    max_attendees: Optional[int] = Field(None, ge=2, le=100)
    cover_image: Optional[str] = Field(None, max_length=500)
    meal_theme: Optional[str] = Field(None, max_length=255)
    is_free: Optional[bool] = None
    price: Optional[float] = Field(None, ge=0)
    dietary_options: Optional[list[str]] = None


class EventOut(BaseModel):
    event_id: str
    host_id: str
    title: str
    description: str
    event_type: EventCategory
    date: dt.date
    time: dt.time
    duration_hours: float
    timezone: str
    starts_at_utc: dt.datetime
    location_name: str
    location_address: str
    latitude: float
    longitude: float
    max_attendees: int
    current_attendees: int
    is_full: bool
    spots_remaining: int
    cover_image: Optional[str] = None
    meal_theme: Optional[str] = None
    is_free: bool
    price: float
    dietary_options: Optional[list[str]] = None
    created_at: dt.datetime
    updated_at: dt.datetime
    host: Optional[UserPublic] = None

    model_config = {"from_attributes": True}


class MapPinOut(BaseModel):
    event_id: str
    title: str
    event_type: EventCategory
    date: dt.date
    time: dt.time
    location_name: str
    latitude: float
    longitude: float
    is_full: bool

    model_config = {"from_attributes": True}


class CalendarEntryOut(BaseModel):
    event_id: str
    title: str
    event_type: EventCategory
    date: dt.date
    time: dt.time
    location_name: str
    is_host: bool


class EventSummary(BaseModel):
    event_id: str
    title: str
    event_type: EventCategory
    date: dt.date
    time: dt.time
    location_name: str

    model_config = {"from_attributes": True}
