"""Domain error codes for the eventease app."""

from dataclasses import dataclass
from enum import Enum


class ErrorCode(Enum):
    """Domain error codes."""

    EVENT_NOT_FOUND = "EVENT_NOT_FOUND"
    ATTENDEE_NOT_FOUND = "ATTENDEE_NOT_FOUND"
    CAPACITY_EXCEEDED = "CAPACITY_EXCEEDED"
    VALIDATION_FAILED = "VALIDATION_FAILED"
    PERSISTENCE_FAILED = "PERSISTENCE_FAILED"


@dataclass(eq=False)
class DomainError(Exception):
    """Base domain error with code and user-safe message."""

    code: ErrorCode
    message: str

    def __str__(self) -> str:
        return f"{self.code.value}: {self.message}"


class EventNotFoundError(DomainError):
    """Raised when an event is not found."""

    def __init__(self, event_id: int) -> None:
        super().__init__(
            code=ErrorCode.EVENT_NOT_FOUND,
            message="Event not found",
        )
        self.event_id = event_id


class AttendeeNotFoundError(DomainError):
    """Raised when no attendee matches the given ids."""

    def __init__(self, attendee_id: int, event_id: int | None = None) -> None:
        super().__init__(
            code=ErrorCode.ATTENDEE_NOT_FOUND,
            message="Attendee not found",
        )
        self.attendee_id = attendee_id
        self.event_id = event_id


class CapacityExceededError(DomainError):
    """Raised when an event is full or no longer accepting registrations."""

    def __init__(self, event_id: int) -> None:
        super().__init__(
            code=ErrorCode.CAPACITY_EXCEEDED,
            message="Event is full or not accepting registrations",
        )
        self.event_id = event_id


class ValidationFailureError(DomainError):
    """Raised when input is malformed."""

    def __init__(self, message: str) -> None:
        super().__init__(code=ErrorCode.VALIDATION_FAILED, message=message)


class PersistenceFailureError(DomainError):
    """Raised by key/value stores when a read or write fails."""

    def __init__(self, key: str, reason: str = "") -> None:
        super().__init__(
            code=ErrorCode.PERSISTENCE_FAILED,
            message=f"Storage operation failed for {key}",
        )
        self.key = key
        self.reason = reason
