"""Invitation ORM model — email-addressed offer of membership with a one-shot response."""
import enum
from datetime import datetime, timezone

from sqlalchemy import Column, DateTime, ForeignKey, Integer, String, Enum as SAEnum
from sqlalchemy.orm import relationship
from event_planner.database import Base


class InvitationRole(str, enum.Enum):
    attendee = "attendee"
    collaborator = "collaborator"
    organizer = "organizer"


class InvitationStatus(str, enum.Enum):
    pending = "pending"
    accepted = "accepted"
    declined = "declined"


class InvitationDecision(str, enum.Enum):
    """The only values a respond call may carry; both are terminal."""

    accepted = "accepted"
    declined = "declined"


class Invitation(Base):
    __tablename__ = "invitations"

    id = Column(Integer, primary_key=True, autoincrement=True)
    event_id = Column(Integer, ForeignKey("events.id", ondelete="CASCADE"), nullable=False, index=True)
    inviter_id = Column(Integer, ForeignKey("users.id"), nullable=False)
    invitee_email = Column(String(254), nullable=False, index=True)
    invitee_id = Column(Integer, ForeignKey("users.id"), nullable=True)
    role = Column(SAEnum(InvitationRole, name="invitation_role"), nullable=False)
    status = Column(
        SAEnum(InvitationStatus, name="invitation_status"), nullable=False, default=InvitationStatus.pending
    )
    message = Column(String(500), nullable=False, default="")
    created_at = Column(DateTime(timezone=True), nullable=False, default=lambda: datetime.now(timezone.utc))
    responded_at = Column(DateTime(timezone=True), nullable=True)

    event = relationship("Event", back_populates="invitations")
