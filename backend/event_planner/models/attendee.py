"""EventAttendee ORM model — one membership row per (event, user)."""
import enum
from datetime import datetime, timezone

from sqlalchemy import Column, DateTime, ForeignKey, Integer, UniqueConstraint, Enum as SAEnum
from sqlalchemy.orm import relationship
from event_planner.database import Base


class AttendeeRole(str, enum.Enum):
    organizer = "organizer"
    attendee = "attendee"
    collaborator = "collaborator"


class RSVPStatus(str, enum.Enum):
    going = "going"
    maybe = "maybe"
    not_going = "not_going"


class EventAttendee(Base):
    __tablename__ = "event_attendees"
    __table_args__ = (UniqueConstraint("event_id", "user_id", name="uq_event_attendees_event_user"),)

    id = Column(Integer, primary_key=True, autoincrement=True)
    event_id = Column(Integer, ForeignKey("events.id", ondelete="CASCADE"), nullable=False, index=True)
    user_id = Column(Integer, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    role = Column(SAEnum(AttendeeRole, name="attendee_role"), nullable=False, default=AttendeeRole.attendee)
    status = Column(SAEnum(RSVPStatus, name="rsvp_status"), nullable=False, default=RSVPStatus.going)
    created_at = Column(DateTime(timezone=True), nullable=False, default=lambda: datetime.now(timezone.utc))

    event = relationship("Event", back_populates="attendees")
