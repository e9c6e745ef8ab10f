"""RSVP ORM model: one response per (event, user)."""
import uuid
import enum
from sqlalchemy import (
    Column, String, Integer, DateTime, ForeignKey, CheckConstraint, UniqueConstraint,
    Enum as SAEnum,
)
from sqlalchemy.orm import relationship
from goodeats.database import Base, utcnow


class RSVPStatus(str, enum.Enum):
    attending = "attending"
    maybe = "maybe"
    declined = "declined"


class RSVP(Base):
    __tablename__ = "rsvps"
    __table_args__ = (
        UniqueConstraint("event_id", "user_id", name="uq_rsvps_event_user"),
        CheckConstraint("guests_count >= 1", name="ck_rsvps_guests_positive"),
    )

    rsvp_id = Column(String(36), primary_key=True, default=lambda: str(uuid.uuid4()))
    event_id = Column(String(36), ForeignKey("events.event_id"), nullable=False, index=True)
    user_id = Column(String(36), ForeignKey("users.user_id"), nullable=False, index=True)
    status = Column(SAEnum(RSVPStatus), nullable=False)
    guests_count = Column(Integer, nullable=False, default=1)
    bringing_dish = Column(String(255), nullable=True)
    dietary_restrictions = Column(String(500), nullable=True)
    created_at = Column(DateTime(timezone=True), nullable=False, default=utcnow)
    updated_at = Column(DateTime(timezone=True), nullable=False, default=utcnow)

    event = relationship("Event", back_populates="rsvps")
    user = relationship("User")
