"""Input parsing shared by the services; every failure names the offending field."""
import re
from datetime import date, datetime, time
from enum import Enum
from typing import TypeVar

from email_validator import EmailNotValidError, validate_email

from event_planner.services.error_codes import ErrorCode
from event_planner.services.exceptions import ValidationError

E = TypeVar("E", bound=Enum)

DATE_FORMAT = "%Y-%m-%d"
TIME_FORMAT = "%H:%M:%S"
MAX_EMAIL_LENGTH = 254

# strptime accepts unpadded fields ("2026-1-5"), so the shape is checked first.
_DATE_SHAPE = re.compile(r"^[0-9]{4}-[0-9]{2}-[0-9]{2}$")
_TIME_SHAPE = re.compile(r"^[0-9]{2}:[0-9]{2}:[0-9]{2}$")
_TLD = re.compile(r"^[a-zA-Z]{2,}$")


def parse_enum(enum_cls: type[E], value, field: str) -> E:
    if isinstance(value, Enum):
        value = value.value
    try:
        return enum_cls(value)
    except ValueError:
        allowed = ", ".join(f"'{member.value}'" for member in enum_cls)
        raise ValidationError(
            ErrorCode.INVALID_FIELD.value, f"invalid {field}: must be one of {allowed}"
        ) from None


def parse_date(value: str, field: str = "date") -> date:
    try:
        if not _DATE_SHAPE.match(value):
            raise ValueError(value)
        return datetime.strptime(value, DATE_FORMAT).date()
    except ValueError:
        raise ValidationError(
            ErrorCode.INVALID_FIELD.value, f"invalid {field} format, use YYYY-MM-DD"
        ) from None


def parse_time(value: str, field: str = "time") -> time:
    try:
        if not _TIME_SHAPE.match(value):
            raise ValueError(value)
        return datetime.strptime(value, TIME_FORMAT).time()
    except ValueError:
        raise ValidationError(
            ErrorCode.INVALID_FIELD.value, f"invalid {field} format, use HH:MM:SS"
        ) from None


def require_text(value: str, field: str) -> str:
    if not value or not value.strip():
        raise ValidationError(ErrorCode.MISSING_FIELD.value, f"{field} is required")
    return value


def is_valid_email(email: str) -> bool:
    """Syntax check only; no DNS lookups. The top-level domain must be alphabetic."""
    email = email.strip()
    if len(email) > MAX_EMAIL_LENGTH:
        return False
    try:
        info = validate_email(email, check_deliverability=False)
    except EmailNotValidError:
        return False
    return _TLD.match(info.ascii_domain.rsplit(".", 1)[-1]) is not None
