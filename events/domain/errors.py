"""Domain error codes shared by the events and refunds modules."""

from dataclasses import dataclass
from enum import Enum


class ErrorCode(Enum):
    """Domain error codes."""

    VALIDATION_ERROR = "VALIDATION_ERROR"
    INVALID_ID = "INVALID_ID"
    TIER_NOT_FOUND = "TIER_NOT_FOUND"
    EVENT_NOT_FOUND = "EVENT_NOT_FOUND"
    TICKET_NOT_FOUND = "TICKET_NOT_FOUND"
    REFUND_NOT_FOUND = "REFUND_NOT_FOUND"
    NOT_TICKET_OWNER = "NOT_TICKET_OWNER"
    NOT_ELIGIBLE = "NOT_ELIGIBLE"
    REFUND_ALREADY_OPEN = "REFUND_ALREADY_OPEN"
    INVALID_TRANSITION = "INVALID_TRANSITION"
    DUPLICATE_REFERENCE = "DUPLICATE_REFERENCE"
    CAPACITY_EXCEEDED = "CAPACITY_EXCEEDED"
    DEPENDENCY_FAILURE = "DEPENDENCY_FAILURE"
    INTEGRITY_VIOLATION = "INTEGRITY_VIOLATION"
    DISCOUNT_NOT_FOUND = "DISCOUNT_NOT_FOUND"
    INVALID_DISCOUNT = "INVALID_DISCOUNT"
    TICKET_ALREADY_REFUNDED = "TICKET_ALREADY_REFUNDED"


@dataclass(frozen=True)
class DomainError(Exception):
    """Base domain error with code and user-safe message."""

    code: ErrorCode
    message: str

    def __str__(self) -> str:
        return f"{self.code.value}: {self.message}"


class ValidationError(DomainError):
    """Raised when caller input is malformed."""

    def __init__(self, message: str, code: ErrorCode = ErrorCode.VALIDATION_ERROR) -> None:
        super().__init__(code=code, message=message)


class InvalidIdError(ValidationError):
    """Raised when an identifier is not a valid UUID."""

    def __init__(self, kind: str = "ID") -> None:
        super().__init__(f"Invalid {kind} format", code=ErrorCode.INVALID_ID)


class TierNotFoundError(ValidationError):
    """Raised when the requested ticket tier does not exist on the event."""

    def __init__(self, tier_policy: str) -> None:
        super().__init__("Ticket tier not available for this event", code=ErrorCode.TIER_NOT_FOUND)
        object.__setattr__(self, "tier_policy", tier_policy)


class EventNotFoundError(DomainError):
    """Raised when an event is not found."""

    def __init__(self, event_id: str) -> None:
        super().__init__(
            code=ErrorCode.EVENT_NOT_FOUND,
            message="Event not found",
        )
        object.__setattr__(self, "event_id", event_id)


class TicketNotFoundError(DomainError):
    """Raised when a ticket is not found."""

    def __init__(self, ticket_id: str) -> None:
        super().__init__(
            code=ErrorCode.TICKET_NOT_FOUND,
            message="Ticket not found",
        )
        object.__setattr__(self, "ticket_id", ticket_id)


class CapacityExceededError(DomainError):
    """Raised when a purchase is blocked, before or at the atomic write."""

    def __init__(self, block_reason) -> None:
        super().__init__(
            code=ErrorCode.CAPACITY_EXCEEDED,
            message="Tickets are no longer available",
        )
        object.__setattr__(self, "block_reason", block_reason)


class DependencyFailureError(DomainError):
    """Raised when a persistence collaborator fails."""

    def __init__(self, message: str = "Storage is unavailable") -> None:
        super().__init__(code=ErrorCode.DEPENDENCY_FAILURE, message=message)


class IntegrityViolationError(DependencyFailureError):
    """Raised when stored counters break sold <= max."""

    def __init__(self, detail: str) -> None:
        super().__init__("Stored data is inconsistent")
        object.__setattr__(self, "code", ErrorCode.INTEGRITY_VIOLATION)
        object.__setattr__(self, "detail", detail)


class DuplicateReferenceError(DomainError):
    """Raised when a payment reference was already used for another ticket."""

    def __init__(self, reference: str) -> None:
        super().__init__(
            code=ErrorCode.DUPLICATE_REFERENCE,
            message="Payment reference already used",
        )
        object.__setattr__(self, "reference", reference)


class DiscountNotFoundError(DomainError):
    """Raised when a discount code does not exist for the event."""

    def __init__(self, discount_code: str) -> None:
        super().__init__(
            code=ErrorCode.DISCOUNT_NOT_FOUND,
            message="Invalid discount code",
        )
        object.__setattr__(self, "discount_code", discount_code)


class InvalidDiscountError(DomainError):
    """Raised when a discount code is inactive or used up."""

    def __init__(self, discount_code: str, message: str) -> None:
        super().__init__(code=ErrorCode.INVALID_DISCOUNT, message=message)
        object.__setattr__(self, "discount_code", discount_code)
