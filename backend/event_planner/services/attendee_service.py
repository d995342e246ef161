"""Attendee registry — per-event membership (role + RSVP status).

Every path that makes a user a member (organizer registration, direct join,
organizer grant, accepted invitation) goes through `upsert_membership`, which
is a single INSERT ... ON CONFLICT keyed on the (event_id, user_id) unique
constraint. Two concurrent upserts for the same pair therefore never produce
two rows; the last writer's role wins and the RSVP status is left alone.
"""
import logging
from datetime import datetime, timezone
from typing import Any

from sqlalchemy.dialects.postgresql import insert as pg_insert
from sqlalchemy.dialects.sqlite import insert as sqlite_insert
from sqlalchemy.orm import Session

from event_planner.auth import Identity
from event_planner.models.attendee import AttendeeRole, EventAttendee, RSVPStatus
from event_planner.models.event import Event
from event_planner.services.authorization import require_organizer
from event_planner.services.error_codes import ErrorCode
from event_planner.services.exceptions import InternalError, NotFoundError
from event_planner.services.user_service import get_user
from event_planner.services.validation import parse_enum

logger = logging.getLogger(__name__)

_DIALECT_INSERTS = {
    "postgresql": pg_insert,
    "sqlite": sqlite_insert,
}


def _insert_for(db: Session):
    dialect = db.get_bind().dialect.name
    try:
        return _DIALECT_INSERTS[dialect]
    except KeyError:
        raise InternalError(ErrorCode.INTERNAL.value, f"upsert not supported on {dialect}") from None


def _require_event(db: Session, event_id: int) -> Event:
    event = db.query(Event).filter(Event.id == event_id).first()
    if not event:
        raise NotFoundError(ErrorCode.EVENT_NOT_FOUND.value, "event not found")
    return event


def get_membership(db: Session, event_id: int, user_id: int) -> EventAttendee | None:
    return (
        db.query(EventAttendee)
        .filter(EventAttendee.event_id == event_id, EventAttendee.user_id == user_id)
        .populate_existing()
        .first()
    )


def upsert_membership(
    db: Session,
    event_id: int,
    user_id: int,
    role: Any,
    *,
    commit: bool = True,
) -> EventAttendee:
    """Ensure exactly one membership row for (event_id, user_id) carrying `role`.

    A new row starts as `going`; an existing row only has its role overwritten.
    With commit=False the write joins the caller's open transaction.
    """
    role = parse_enum(AttendeeRole, role, "role")
    insert = _insert_for(db)
    stmt = insert(EventAttendee).values(
        event_id=event_id,
        user_id=user_id,
        role=role,
        status=RSVPStatus.going,
        created_at=datetime.now(timezone.utc),
    )
    stmt = stmt.on_conflict_do_update(
        index_elements=["event_id", "user_id"],
        set_={"role": stmt.excluded.role},
    )
    db.execute(stmt)
    if commit:
        db.commit()

    membership = get_membership(db, event_id, user_id)
    logger.info("Upserted membership of user %s in event %s as %s", user_id, event_id, role.value)
    return membership


def join_event(db: Session, identity: Identity, event_id: int) -> EventAttendee:
    _require_event(db, event_id)
    return upsert_membership(db, event_id, identity.user_id, AttendeeRole.attendee)


def grant_membership(db: Session, identity: Identity, event_id: int, user_id: int, role: Any) -> EventAttendee:
    """Organizer adds an already-registered user directly, without an invitation."""
    role = parse_enum(AttendeeRole, role, "role")
    event = _require_event(db, event_id)
    require_organizer(identity.user_id, event, "only the event creator can invite users to this event")
    get_user(db, user_id)
    return upsert_membership(db, event.id, user_id, role)


def set_status(db: Session, identity: Identity, event_id: int, status: Any) -> EventAttendee:
    """Update the actor's own RSVP; there is no RSVP without a membership row."""
    status = parse_enum(RSVPStatus, status, "status")
    membership = get_membership(db, event_id, identity.user_id)
    if not membership:
        raise NotFoundError(ErrorCode.ATTENDANCE_NOT_FOUND.value, "attendance record not found")

    membership.status = status
    db.commit()
    db.refresh(membership)
    logger.info("User %s RSVP'd '%s' to event %s", identity.user_id, status.value, event_id)
    return membership


def list_attendees(db: Session, event_id: int) -> list[EventAttendee]:
    return (
        db.query(EventAttendee)
        .filter(EventAttendee.event_id == event_id)
        .order_by(EventAttendee.created_at.desc(), EventAttendee.id.desc())
        .all()
    )
