"""Event ORM model.

`date` and `time` are stored as independent columns; neither implies the other.
"""
from datetime import datetime, timezone

from sqlalchemy import Column, Date, DateTime, ForeignKey, Integer, String, Text, Time
from sqlalchemy.orm import relationship
from event_planner.database import Base


class Event(Base):
    __tablename__ = "events"

    id = Column(Integer, primary_key=True, autoincrement=True)
    title = Column(String(255), nullable=False)
    description = Column(Text, nullable=False, default="")
    date = Column(Date, nullable=False)
    time = Column(Time, nullable=False)
    location = Column(String(500), nullable=False)
    organizer_id = Column(Integer, ForeignKey("users.id"), nullable=False, index=True)
    created_at = Column(DateTime(timezone=True), nullable=False, default=lambda: datetime.now(timezone.utc))

    attendees = relationship(
        "EventAttendee", back_populates="event", cascade="all, delete-orphan"
    )
    invitations = relationship(
        "Invitation", back_populates="event", cascade="all, delete-orphan"
    )
