"""Authorization guard for organizer-only event operations."""
import logging

from event_planner.models.event import Event
from event_planner.services.error_codes import ErrorCode
from event_planner.services.exceptions import PermissionDeniedError

logger = logging.getLogger(__name__)


def is_organizer(acting_user_id: int, event: Event) -> bool:
    return event.organizer_id == acting_user_id


def require_organizer(acting_user_id: int, event: Event, message: str) -> None:
    """Raise PermissionDeniedError unless the actor organizes the event."""
    if not is_organizer(acting_user_id, event):
        logger.warning("User %s refused on event %s: %s", acting_user_id, event.id, message)
        raise PermissionDeniedError(ErrorCode.NOT_EVENT_ORGANIZER.value, message)
