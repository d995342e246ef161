from enum import Enum


class ErrorCode(str, Enum):
    UNAUTHORIZED = "unauthorized"
    INTERNAL = "internal"

    INVALID_FIELD = "invalid_field"
    MISSING_FIELD = "missing_field"

    USER_NOT_FOUND = "user_not_found"
    EMAIL_TAKEN = "email_taken"

    EVENT_NOT_FOUND = "event_not_found"
    NOT_EVENT_ORGANIZER = "not_event_organizer"

    ATTENDANCE_NOT_FOUND = "attendance_not_found"

    INVITATION_NOT_FOUND = "invitation_not_found"
    NOT_INVITEE = "not_invitee"
    INVITATION_ALREADY_RESPONDED = "invitation_already_responded"
    MEMBERSHIP_GRANT_FAILED = "membership_grant_failed"
