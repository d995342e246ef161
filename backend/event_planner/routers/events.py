"""Event API routes — delegates to event_service for invariant enforcement."""
import logging
from fastapi import APIRouter, Depends, Response, status
from sqlalchemy.orm import Session

from event_planner.auth import Identity, get_current_identity
from event_planner.database import get_db
from event_planner.schemas.event import EventCreate, EventOut, EventUpdate, EventWithAttendanceOut
from event_planner.schemas.invitation import InvitationWithDetailsOut
from event_planner.services import event_service, invitation_service

logger = logging.getLogger(__name__)
router = APIRouter()


@router.get("/", response_model=list[EventOut])
def list_events(db: Session = Depends(get_db)):
    """List every event, latest date first."""
    return event_service.list_events(db)


@router.get("/my/attending", response_model=list[EventWithAttendanceOut])
def my_attending_events(
    identity: Identity = Depends(get_current_identity),
    db: Session = Depends(get_db),
):
    """Events the caller is a member of, with their role and RSVP status."""
    return event_service.list_attending_events(db, identity)


@router.get("/my/organized", response_model=list[EventOut])
def my_organized_events(
    identity: Identity = Depends(get_current_identity),
    db: Session = Depends(get_db),
):
    """Events the caller organizes."""
    return event_service.list_events_by_organizer(db, identity.user_id)


@router.get("/organizer/{organizer_id}", response_model=list[EventOut])
def list_events_by_organizer(organizer_id: int, db: Session = Depends(get_db)):
    return event_service.list_events_by_organizer(db, organizer_id)


@router.post("/", response_model=EventOut, status_code=status.HTTP_201_CREATED)
def create_event(
    payload: EventCreate,
    identity: Identity = Depends(get_current_identity),
    db: Session = Depends(get_db),
):
    """Create a new event; the caller becomes its organizer and first attendee."""
    return event_service.create_event(db, identity, payload)


@router.get("/{event_id}", response_model=EventOut)
def get_event(event_id: int, db: Session = Depends(get_db)):
    """Fetch a single event by ID."""
    return event_service.get_event(db, event_id)


@router.put("/{event_id}", response_model=EventOut)
def update_event(
    event_id: int,
    payload: EventUpdate,
    identity: Identity = Depends(get_current_identity),
    db: Session = Depends(get_db),
):
    """Update an event (organizer only, empty fields are left unchanged)."""
    return event_service.update_event(db, identity, event_id, payload)


@router.delete("/{event_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_event(
    event_id: int,
    identity: Identity = Depends(get_current_identity),
    db: Session = Depends(get_db),
):
    """Delete an event with its attendees and invitations (organizer only)."""
    event_service.delete_event(db, identity, event_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.get("/{event_id}/invitations", response_model=list[InvitationWithDetailsOut])
def list_event_invitations(
    event_id: int,
    identity: Identity = Depends(get_current_identity),
    db: Session = Depends(get_db),
):
    """Invitations sent for an event, newest first."""
    return invitation_service.list_for_event(db, event_id)
