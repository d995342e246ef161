"""Event catalog — create, read, update and delete events.

Responsibilities:
- Organizer auto-registration: the creator is written as an `organizer`
  member in the same transaction as the event row
- Authorization hook: only the organizer may update or delete
- Partial updates: empty fields in an update are left unchanged
"""
import logging
from typing import Any

from sqlalchemy.orm import Session

from event_planner.auth import Identity
from event_planner.models.attendee import AttendeeRole, EventAttendee
from event_planner.models.event import Event
from event_planner.schemas.event import EventCreate, EventUpdate
from event_planner.services import attendee_service
from event_planner.services.authorization import require_organizer
from event_planner.services.error_codes import ErrorCode
from event_planner.services.exceptions import NotFoundError
from event_planner.services.validation import parse_date, parse_time, require_text

logger = logging.getLogger(__name__)


def get_event(db: Session, event_id: int) -> Event:
    event = db.query(Event).filter(Event.id == event_id).first()
    if not event:
        raise NotFoundError(ErrorCode.EVENT_NOT_FOUND.value, "event not found")
    return event


def list_events(db: Session) -> list[Event]:
    return db.query(Event).order_by(Event.date.desc(), Event.id.desc()).all()


def list_events_by_organizer(db: Session, organizer_id: int) -> list[Event]:
    return (
        db.query(Event)
        .filter(Event.organizer_id == organizer_id)
        .order_by(Event.date.desc(), Event.id.desc())
        .all()
    )


def list_attending_events(db: Session, identity: Identity) -> list[dict[str, Any]]:
    """Events the actor holds a membership in, with the actor's role and status."""
    rows = (
        db.query(Event, EventAttendee)
        .join(EventAttendee, EventAttendee.event_id == Event.id)
        .filter(EventAttendee.user_id == identity.user_id)
        .order_by(Event.date.desc(), Event.time.desc(), Event.id.desc())
        .all()
    )
    return [
        {
            "id": event.id,
            "title": event.title,
            "description": event.description,
            "date": event.date,
            "time": event.time,
            "location": event.location,
            "organizer_id": event.organizer_id,
            "created_at": event.created_at,
            "role": membership.role,
            "status": membership.status,
        }
        for event, membership in rows
    ]


def create_event(db: Session, identity: Identity, payload: EventCreate) -> Event:
    """Create an event owned by the actor and register them as its organizer."""
    title = require_text(payload.title, "title")
    location = require_text(payload.location, "location")
    event_date = parse_date(require_text(payload.date, "date"))
    event_time = parse_time(require_text(payload.time, "time"))

    event = Event(
        title=title,
        description=payload.description,
        date=event_date,
        time=event_time,
        location=location,
        organizer_id=identity.user_id,
    )
    db.add(event)
    db.flush()

    attendee_service.upsert_membership(
        db, event.id, identity.user_id, AttendeeRole.organizer, commit=False
    )
    db.commit()
    db.refresh(event)
    logger.info("Created event '%s' (%s) by organizer %s", title, event.id, identity.user_id)
    return event


def update_event(db: Session, identity: Identity, event_id: int, updates: EventUpdate) -> Event:
    """Apply the non-empty fields of `updates`; organizer only."""
    event = get_event(db, event_id)
    require_organizer(identity.user_id, event, "you are not authorized to update this event")

    # Parse everything before touching the row so a bad field leaves it intact.
    new_title = require_text(updates.title, "title") if updates.title else None
    new_location = require_text(updates.location, "location") if updates.location else None
    new_date = parse_date(updates.date) if updates.date else None
    new_time = parse_time(updates.time) if updates.time else None

    if new_title is not None:
        event.title = new_title
    if updates.description:
        event.description = updates.description
    if new_date is not None:
        event.date = new_date
    if new_time is not None:
        event.time = new_time
    if new_location is not None:
        event.location = new_location

    db.commit()
    db.refresh(event)
    logger.info("Updated event %s", event_id)
    return event


def delete_event(db: Session, identity: Identity, event_id: int) -> None:
    """Delete an event with its memberships and invitations; organizer only."""
    event = get_event(db, event_id)
    require_organizer(identity.user_id, event, "you are not authorized to delete this event")

    db.delete(event)
    db.commit()
    logger.info("Deleted event %s by organizer %s", event_id, identity.user_id)
