"""User ORM model — the user directory invitations resolve emails against."""
from datetime import datetime, timezone

from sqlalchemy import Column, Integer, String, DateTime
from event_planner.database import Base


class User(Base):
    __tablename__ = "users"

    id = Column(Integer, primary_key=True, autoincrement=True)
    email = Column(String(254), nullable=False, unique=True, index=True)
    display_name = Column(String(100), nullable=False, default="")
    created_at = Column(DateTime(timezone=True), nullable=False, default=lambda: datetime.now(timezone.utc))
