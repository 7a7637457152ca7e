"""
Domain Errors
Failure taxonomy raised by services and translated to HTTP responses in main
"""

from fastapi import status


class DomainError(Exception):
    """Base class for every expected business failure"""

    status_code: int = status.HTTP_400_BAD_REQUEST
    default_message: str = "Request failed"

    def __init__(self, message: str = None):
        self.message = message or self.default_message
        super().__init__(self.message)


class ValidationFailed(DomainError):
    status_code = status.HTTP_400_BAD_REQUEST
    default_message = "Validation failed"


class Unauthorized(DomainError):
    status_code = status.HTTP_401_UNAUTHORIZED
    default_message = "Invalid credentials"


class Forbidden(DomainError):
    status_code = status.HTTP_403_FORBIDDEN
    default_message = "Not authorized"


class NotFound(DomainError):
    status_code = status.HTTP_404_NOT_FOUND
    default_message = "Not found"


class Conflict(DomainError):
    status_code = status.HTTP_409_CONFLICT
    default_message = "Resource already exists"


class PolicyViolation(DomainError):
    status_code = status.HTTP_400_BAD_REQUEST
    default_message = "Request violates a business rule"


# Event registration rejections

class EventNotFound(NotFound):
    default_message = "Event not found"


class InvalidEventCode(NotFound):
    default_message = "Invalid event code"


class EventCodeRequired(Forbidden):
    default_message = "This is a private event. Join it with its event code"


class DeadlineExpired(PolicyViolation):
    default_message = "Registration deadline has passed"


class AlreadyRegistered(Conflict):
    default_message = "Already registered for this event"


class EventFull(PolicyViolation):
    default_message = "Event is full"


class NotAMember(Forbidden):
    default_message = "Student does not belong to the event's organization"
