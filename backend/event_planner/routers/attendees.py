"""Attendee / RSVP API routes, mounted under /api/events."""
import logging
from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from event_planner.auth import Identity, get_current_identity
from event_planner.database import get_db
from event_planner.schemas.event import AttendancePayload, AttendeeOut, MembershipGrant
from event_planner.services import attendee_service

logger = logging.getLogger(__name__)
router = APIRouter()


@router.get("/{event_id}/attendees", response_model=list[AttendeeOut])
def list_attendees(event_id: int, db: Session = Depends(get_db)):
    """All membership records of an event, newest first."""
    return attendee_service.list_attendees(db, event_id)


@router.post("/{event_id}/join", response_model=AttendeeOut)
def join_event(
    event_id: int,
    identity: Identity = Depends(get_current_identity),
    db: Session = Depends(get_db),
):
    """Join an event as an attendee."""
    return attendee_service.join_event(db, identity, event_id)


@router.post("/{event_id}/invite", response_model=AttendeeOut)
def grant_membership(
    event_id: int,
    payload: MembershipGrant,
    identity: Identity = Depends(get_current_identity),
    db: Session = Depends(get_db),
):
    """Add a registered user to the event with a role (organizer only)."""
    return attendee_service.grant_membership(db, identity, event_id, payload.user_id, payload.role)


@router.put("/{event_id}/attendance", response_model=AttendeeOut)
def set_attendance(
    event_id: int,
    payload: AttendancePayload,
    identity: Identity = Depends(get_current_identity),
    db: Session = Depends(get_db),
):
    """Set the caller's own RSVP status for an event."""
    return attendee_service.set_status(db, identity, event_id, payload.status)
