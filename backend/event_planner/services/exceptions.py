"""Service-layer error taxonomy; mapped to HTTP statuses in event_planner.errors."""

from event_planner.services.error_codes import ErrorCode


class ServiceError(Exception):
    def __init__(self, code: str, message: str | None = None) -> None:
        self.code = code
        self.message = message or code
        super().__init__(self.message)


class UnauthorizedError(ServiceError):
    pass


class PermissionDeniedError(ServiceError):
    pass


class ValidationError(ServiceError):
    pass


class NotFoundError(ServiceError):
    pass


class ConflictError(ServiceError):
    pass


class InternalError(ServiceError):
    pass


class MembershipGrantError(InternalError):
    """The invitation was accepted but the membership row could not be written.

    The invitation is already terminal, so replaying the response only yields a
    conflict; callers reconcile by re-joining the event.
    """

    def __init__(self, invitation_id: int, event_id: int, user_id: int, message: str | None = None) -> None:
        self.invitation_id = invitation_id
        self.event_id = event_id
        self.user_id = user_id
        super().__init__(ErrorCode.MEMBERSHIP_GRANT_FAILED.value, message)
