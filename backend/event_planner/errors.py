from fastapi import HTTPException

from event_planner.services.exceptions import (
    ConflictError,
    MembershipGrantError,
    NotFoundError,
    PermissionDeniedError,
    ServiceError,
    UnauthorizedError,
    ValidationError,
)


def http_error_from_service(err: ServiceError) -> HTTPException:
    headers = None
    if isinstance(err, UnauthorizedError):
        status = 401
        headers = {"WWW-Authenticate": "Bearer"}
    elif isinstance(err, PermissionDeniedError):
        status = 403
    elif isinstance(err, ValidationError):
        status = 400
    elif isinstance(err, NotFoundError):
        status = 404
    elif isinstance(err, ConflictError):
        status = 409
    else:
        status = 500

    detail = {"code": err.code, "message": err.message}
    if isinstance(err, MembershipGrantError):
        detail.update(invitation_id=err.invitation_id, event_id=err.event_id, user_id=err.user_id)

    return HTTPException(
        status_code=status,
        detail=detail,
        headers=headers,
    )
