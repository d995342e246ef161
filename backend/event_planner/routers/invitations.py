"""Invitation API routes — send, list and respond."""
import logging
from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from event_planner.auth import Identity, get_current_identity
from event_planner.database import get_db
from event_planner.schemas.invitation import (
    InvitationCreate,
    InvitationOut,
    InvitationRespond,
    InvitationWithDetailsOut,
)
from event_planner.services import invitation_service

logger = logging.getLogger(__name__)
router = APIRouter()


@router.post("/", response_model=InvitationOut, status_code=status.HTTP_201_CREATED)
def send_invitation(
    payload: InvitationCreate,
    identity: Identity = Depends(get_current_identity),
    db: Session = Depends(get_db),
):
    """Invite an email address to an event (organizer only)."""
    return invitation_service.send_invitation(db, identity, payload)


@router.get("/my", response_model=list[InvitationWithDetailsOut])
def my_invitations(
    identity: Identity = Depends(get_current_identity),
    db: Session = Depends(get_db),
):
    """Invitations addressed to the caller's email, newest first."""
    return invitation_service.list_for_email(db, identity.email)


@router.put("/{invitation_id}/respond", response_model=InvitationOut)
def respond_to_invitation(
    invitation_id: int,
    payload: InvitationRespond,
    identity: Identity = Depends(get_current_identity),
    db: Session = Depends(get_db),
):
    """Accept or decline a pending invitation.

    A second response to the same invitation is a 409; an accepted invitation
    whose membership could not be written is a 500 with code
    `membership_grant_failed`.
    """
    return invitation_service.respond_to_invitation(db, identity, invitation_id, payload.status)
