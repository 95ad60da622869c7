"""Domain error codes for the registrations module."""

from dataclasses import dataclass
from enum import Enum


class ErrorCode(Enum):
    """Domain error codes."""

    INVALID_REGISTRATION = "INVALID_REGISTRATION"
    INVALID_PHONE = "INVALID_PHONE"
    DUPLICATE_REGISTRANT = "DUPLICATE_REGISTRANT"
    REGISTRANT_CONFLICT = "REGISTRANT_CONFLICT"
    TICKETS_EXHAUSTED = "TICKETS_EXHAUSTED"
    COUNTER_NOT_FOUND = "COUNTER_NOT_FOUND"
    STORE_UNAVAILABLE = "STORE_UNAVAILABLE"


@dataclass(frozen=True)
class DomainError(Exception):
    """Base domain error with code and user-safe message."""

    code: ErrorCode
    message: str

    def __str__(self) -> str:
        return f"{self.code.value}: {self.message}"


class InvalidRegistrationError(DomainError):
    """Raised when required registration fields are missing or blank."""

    def __init__(self, message: str = "Name and phone number are required") -> None:
        super().__init__(code=ErrorCode.INVALID_REGISTRATION, message=message)


class InvalidPhoneError(DomainError):
    """Raised when a phone number cannot be normalized."""

    def __init__(
        self, message: str = "Phone number must be 8-15 digits long after country code"
    ) -> None:
        super().__init__(code=ErrorCode.INVALID_PHONE, message=message)


class DuplicateRegistrantError(DomainError):
    """Raised when the email is already registered."""

    def __init__(self, email: str) -> None:
        super().__init__(
            code=ErrorCode.DUPLICATE_REGISTRANT,
            message="This email is already registered",
        )
        object.__setattr__(self, "email", email)


class RegistrantConflictError(DomainError):
    """Raised when the store rejects a registrant on a uniqueness constraint."""

    def __init__(self) -> None:
        super().__init__(
            code=ErrorCode.REGISTRANT_CONFLICT,
            message="This registration conflicts with an existing one",
        )


class TicketsExhaustedError(DomainError):
    """Raised when every ticket has been claimed."""

    def __init__(self, counter_key: str) -> None:
        super().__init__(
            code=ErrorCode.TICKETS_EXHAUSTED,
            message="No tickets left - event is fully booked",
        )
        object.__setattr__(self, "counter_key", counter_key)


class CounterNotFoundError(DomainError):
    """Raised when the ticket counter record does not exist."""

    def __init__(self, counter_key: str) -> None:
        super().__init__(
            code=ErrorCode.COUNTER_NOT_FOUND,
            message="Failed to fetch ticket info",
        )
        object.__setattr__(self, "counter_key", counter_key)


class StoreUnavailableError(DomainError):
    """Raised when the underlying store fails."""

    def __init__(self, operation: str) -> None:
        super().__init__(
            code=ErrorCode.STORE_UNAVAILABLE,
            message="Server error - please try again or contact support",
        )
        object.__setattr__(self, "operation", operation)
