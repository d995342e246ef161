"""Invitation workflow — organizer-issued, email-addressed membership offers.

State machine: pending --accepted--> accepted, pending --declined--> declined.
Both targets are terminal. The transition is a single conditional UPDATE on
`status = 'pending'`, so of two concurrent responses at most one wins and the
other observes a conflict.

Accepting also materializes the invitee as a member. That second write is
committed separately; when it fails the invitation stays accepted and the
caller gets a MembershipGrantError to reconcile with.
"""
import logging
from datetime import datetime, timezone
from typing import Any, Optional

from sqlalchemy import update
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from event_planner.auth import Identity
from event_planner.models.event import Event
from event_planner.models.invitation import (
    Invitation,
    InvitationDecision,
    InvitationRole,
    InvitationStatus,
)
from event_planner.models.user import User
from event_planner.schemas.invitation import InvitationCreate
from event_planner.services import attendee_service
from event_planner.services.authorization import require_organizer
from event_planner.services.error_codes import ErrorCode
from event_planner.services.event_service import get_event
from event_planner.services.exceptions import (
    ConflictError,
    InternalError,
    MembershipGrantError,
    NotFoundError,
    PermissionDeniedError,
    ValidationError,
)
from event_planner.services.user_service import resolve_user_id_by_email
from event_planner.services.validation import is_valid_email, parse_enum

logger = logging.getLogger(__name__)

MAX_MESSAGE_LENGTH = 500

_DECISION_STATUS = {
    InvitationDecision.accepted: InvitationStatus.accepted,
    InvitationDecision.declined: InvitationStatus.declined,
}


def _validate_send_request(payload: InvitationCreate) -> tuple[str, InvitationRole]:
    if payload.event_id <= 0:
        raise ValidationError(ErrorCode.INVALID_FIELD.value, "invalid event ID")
    email = payload.invitee_email.strip()
    if not email:
        raise ValidationError(ErrorCode.MISSING_FIELD.value, "invitee email is required")
    if not is_valid_email(email):
        raise ValidationError(ErrorCode.INVALID_FIELD.value, "invalid email format")
    role = parse_enum(InvitationRole, payload.role, "role")
    if len(payload.message) > MAX_MESSAGE_LENGTH:
        raise ValidationError(
            ErrorCode.INVALID_FIELD.value, f"message must not exceed {MAX_MESSAGE_LENGTH} characters"
        )
    return email, role


def send_invitation(db: Session, identity: Identity, payload: InvitationCreate) -> Invitation:
    """Validate, authorize and persist a pending invitation."""
    email, role = _validate_send_request(payload)
    event = get_event(db, payload.event_id)
    require_organizer(identity.user_id, event, "only the event creator can invite users to this event")

    # An unregistered email is fine; the invitation waits for them.
    invitee_id = resolve_user_id_by_email(db, email)

    invitation = Invitation(
        event_id=event.id,
        inviter_id=identity.user_id,
        invitee_email=email,
        invitee_id=invitee_id,
        role=role,
        status=InvitationStatus.pending,
        message=payload.message,
    )
    db.add(invitation)
    db.commit()
    db.refresh(invitation)
    logger.info(
        "Invitation %s sent for event %s to %s by %s", invitation.id, event.id, email, identity.user_id
    )
    return invitation


def get_invitation(db: Session, invitation_id: int) -> Invitation:
    invitation = db.query(Invitation).filter(Invitation.id == invitation_id).first()
    if not invitation:
        raise NotFoundError(ErrorCode.INVITATION_NOT_FOUND.value, "invitation not found")
    return invitation


def mark_responded(
    db: Session,
    invitation_id: int,
    status: InvitationStatus,
    invitee_id: Optional[int],
) -> None:
    """Move a pending invitation to `status`; raises ConflictError if it is no longer pending."""
    result = db.execute(
        update(Invitation)
        .where(Invitation.id == invitation_id, Invitation.status == InvitationStatus.pending)
        .values(status=status, responded_at=datetime.now(timezone.utc), invitee_id=invitee_id)
        .execution_options(synchronize_session=False)
    )
    if result.rowcount == 0:
        db.rollback()
        raise ConflictError(
            ErrorCode.INVITATION_ALREADY_RESPONDED.value, "invitation has already been responded to"
        )
    db.commit()


def respond_to_invitation(db: Session, identity: Identity, invitation_id: int, decision: Any) -> Invitation:
    """Accept or decline an invitation addressed to the actor's email."""
    decision = parse_enum(InvitationDecision, decision, "status")
    invitation = get_invitation(db, invitation_id)

    if invitation.invitee_email != identity.email:
        logger.warning("User %s refused on invitation %s: not the invitee", identity.user_id, invitation_id)
        raise PermissionDeniedError(
            ErrorCode.NOT_INVITEE.value, "you are not authorized to respond to this invitation"
        )
    if invitation.status != InvitationStatus.pending:
        raise ConflictError(
            ErrorCode.INVITATION_ALREADY_RESPONDED.value, "invitation has already been responded to"
        )

    # The actor just proved ownership of the invitee email.
    invitee_id = invitation.invitee_id if invitation.invitee_id is not None else identity.user_id
    new_status = _DECISION_STATUS[decision]
    mark_responded(db, invitation.id, new_status, invitee_id)
    db.refresh(invitation)
    logger.info("Invitation %s %s by user %s", invitation.id, new_status.value, identity.user_id)

    if new_status == InvitationStatus.accepted:
        try:
            attendee_service.upsert_membership(db, invitation.event_id, invitee_id, invitation.role)
        except (SQLAlchemyError, InternalError) as exc:
            db.rollback()
            logger.warning(
                "Invitation %s accepted but membership for user %s in event %s was not written",
                invitation.id,
                invitee_id,
                invitation.event_id,
            )
            raise MembershipGrantError(
                invitation.id,
                invitation.event_id,
                invitee_id,
                "invitation accepted but adding the invitee as attendee failed; join the event to retry",
            ) from exc

    return invitation


def _with_details(rows) -> list[dict[str, Any]]:
    return [
        {
            "id": invitation.id,
            "event_id": invitation.event_id,
            "inviter_id": invitation.inviter_id,
            "invitee_email": invitation.invitee_email,
            "invitee_id": invitation.invitee_id,
            "role": invitation.role,
            "status": invitation.status,
            "message": invitation.message,
            "created_at": invitation.created_at,
            "responded_at": invitation.responded_at,
            "event_title": event.title,
            "event_date": event.date.isoformat(),
            "event_time": event.time.strftime("%H:%M:%S"),
            "event_location": event.location,
            "inviter_email": inviter_email,
        }
        for invitation, event, inviter_email in rows
    ]


def _details_query(db: Session):
    return (
        db.query(Invitation, Event, User.email)
        .join(Event, Invitation.event_id == Event.id)
        .join(User, Invitation.inviter_id == User.id)
    )


def list_for_email(db: Session, email: str) -> list[dict[str, Any]]:
    rows = (
        _details_query(db)
        .filter(Invitation.invitee_email == email)
        .order_by(Invitation.created_at.desc(), Invitation.id.desc())
        .all()
    )
    return _with_details(rows)


def list_for_event(db: Session, event_id: int) -> list[dict[str, Any]]:
    rows = (
        _details_query(db)
        .filter(Invitation.event_id == event_id)
        .order_by(Invitation.created_at.desc(), Invitation.id.desc())
        .all()
    )
    return _with_details(rows)
