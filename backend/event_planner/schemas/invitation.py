"""Pydantic schemas for Invitations."""
from __future__ import annotations
from datetime import datetime
from typing import Optional
from pydantic import BaseModel

from event_planner.models.invitation import InvitationRole, InvitationStatus


class InvitationCreate(BaseModel):
    event_id: int = 0
    invitee_email: str = ""
    role: str = ""
    message: str = ""


class InvitationRespond(BaseModel):
    status: str  # accepted or declined


class InvitationOut(BaseModel):
    id: int
    event_id: int
    inviter_id: int
    invitee_email: str
    invitee_id: Optional[int] = None
    role: InvitationRole
    status: InvitationStatus
    message: str
    created_at: datetime
    responded_at: Optional[datetime] = None

    model_config = {"from_attributes": True}


class InvitationWithDetailsOut(InvitationOut):
    event_title: str
    event_date: str
    event_time: str
    event_location: str
    inviter_email: str
