"""Pydantic schemas for Events and attendance."""
from __future__ import annotations
import datetime as dt
from pydantic import BaseModel

from event_planner.models.attendee import AttendeeRole, RSVPStatus


class EventCreate(BaseModel):
    title: str = ""
    description: str = ""
    date: str = ""  # YYYY-MM-DD
    time: str = ""  # HH:MM:SS
    location: str = ""


class EventUpdate(BaseModel):
    """Partial update: an empty string means "leave unchanged"."""

    title: str = ""
    description: str = ""
    date: str = ""
    time: str = ""
    location: str = ""


class EventOut(BaseModel):
    id: int
    title: str
    description: str
    date: dt.date
    time: dt.time
    location: str
    organizer_id: int
    created_at: dt.datetime

    model_config = {"from_attributes": True}


class EventWithAttendanceOut(EventOut):
    role: AttendeeRole
    status: RSVPStatus


class AttendeeOut(BaseModel):
    id: int
    event_id: int
    user_id: int
    role: AttendeeRole
    status: RSVPStatus
    created_at: dt.datetime

    model_config = {"from_attributes": True}


class AttendancePayload(BaseModel):
    status: str  # going, maybe, not_going


class MembershipGrant(BaseModel):
    user_id: int
    role: str  # attendee, collaborator, organizer
