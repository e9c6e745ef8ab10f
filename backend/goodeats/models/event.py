"""Event ORM model."""
import uuid
import enum
from sqlalchemy import (
    Column, String, Text, Date, Time, DateTime, Float, Integer, Boolean, JSON,
    ForeignKey, CheckConstraint, Enum as SAEnum,
)
from sqlalchemy.sql import func
from sqlalchemy.orm import relationship
from goodeats.database import Base
from goodeats.services.capacity import is_event_full, spots_remaining


class EventCategory(str, enum.Enum):
    potluck = "potluck"
    dinner = "dinner"
    cooking_class = "cooking_class"
    picnic = "picnic"
    other = "other"


class Event(Base):
    __tablename__ = "events"
    __table_args__ = (
        CheckConstraint("current_attendees >= 0", name="ck_events_attendees_nonnegative"),
        CheckConstraint("current_attendees <= max_attendees", name="ck_events_within_capacity"),
    )

    event_id = Column(String(36), primary_key=True, default=lambda: str(uuid.uuid4()))
    host_id = Column(String(36), ForeignKey("users.user_id"), nullable=False, index=True)
    title = Column(String(255), nullable=False)
    description = Column(Text, nullable=False, default="")
    event_type = Column(SAEnum(EventCategory), nullable=False, default=EventCategory.potluck)
    date = Column(Date, nullable=False, index=True)
    time = Column(Time, nullable=False)
    duration_hours = Column(Float, nullable=False, default=2)
    timezone = Column(String(50), nullable=False, default="UTC")  # IANA tz
    starts_at_utc = Column(DateTime(timezone=True), nullable=False, index=True)
    location_name = Column(String(255), nullable=False)
    location_address = Column(String(500), nullable=False)
    latitude = Column(Float, nullable=False)
    longitude = Column(Float, nullable=False)
    max_attendees = Column(Integer, nullable=False)
    current_attendees = Column(Integer, nullable=False, default=0)
    cover_image = Column(String(500), nullable=True)
    meal_theme = Column(String(255), nullable=True)
    price = Column(Float, nullable=False, default=0)
    is_free = Column(Boolean, nullable=False, default=True)
    dietary_options = Column(JSON, nullable=True)
    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now())

    host = relationship("User")
    rsvps = relationship("RSVP", back_populates="event", cascade="all, delete-orphan")

    @property
    def is_full(self) -> bool:
        return is_event_full(self)

    @property
    def spots_remaining(self) -> int:
        return spots_remaining(self.max_attendees, self.current_attendees)
