"""User directory — registration records and email lookup."""
import logging
from typing import Optional

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from event_planner.models.user import User
from event_planner.services.error_codes import ErrorCode
from event_planner.services.exceptions import ConflictError, NotFoundError, ValidationError
from event_planner.services.validation import is_valid_email

logger = logging.getLogger(__name__)


def create_user(db: Session, email: str, display_name: str = "") -> User:
    email = email.strip()
    if not is_valid_email(email):
        raise ValidationError(ErrorCode.INVALID_FIELD.value, "invalid email format")

    user = User(email=email, display_name=display_name)
    db.add(user)
    try:
        db.commit()
    except IntegrityError as exc:
        db.rollback()
        raise ConflictError(ErrorCode.EMAIL_TAKEN.value, "email already registered") from exc
    db.refresh(user)
    logger.info("Created user %s (%s)", user.id, user.email)
    return user


def get_user(db: Session, user_id: int) -> User:
    user = db.query(User).filter(User.id == user_id).first()
    if not user:
        raise NotFoundError(ErrorCode.USER_NOT_FOUND.value, "user not found")
    return user


def list_users(db: Session) -> list[User]:
    return db.query(User).order_by(User.id).all()


def resolve_user_id_by_email(db: Session, email: str) -> Optional[int]:
    """Return the id registered for `email`, or None when nobody has it yet."""
    return db.query(User.id).filter(User.email == email).scalar()
