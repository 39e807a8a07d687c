"""Refund-specific domain errors."""

from events.domain.errors import DomainError, ErrorCode, ValidationError


class MissingReasonError(ValidationError):
    """Raised when a required reason is absent."""

    def __init__(self, message: str = "A reason is required") -> None:
        super().__init__(message)


class RefundNotFoundError(DomainError):
    """Raised when a refund request is not found."""

    def __init__(self, refund_id: str) -> None:
        super().__init__(
            code=ErrorCode.REFUND_NOT_FOUND,
            message="Refund request not found",
        )
        object.__setattr__(self, "refund_id", refund_id)


class NotTicketOwnerError(DomainError):
    """Raised when the caller does not own the ticket or refund."""

    def __init__(self) -> None:
        super().__init__(
            code=ErrorCode.NOT_TICKET_OWNER,
            message="You do not own this ticket",
        )


class NotEligibleError(DomainError):
    """Raised when a refund is requested outside the eligibility window."""

    def __init__(self, verdict, boundary_date) -> None:
        super().__init__(
            code=ErrorCode.NOT_ELIGIBLE,
            message="Ticket is not eligible for refund",
        )
        object.__setattr__(self, "verdict", verdict)
        object.__setattr__(self, "boundary_date", boundary_date)


class RefundAlreadyOpenError(DomainError):
    """Raised when a ticket already has a requested or processing refund."""

    def __init__(self, ticket_id: str) -> None:
        super().__init__(
            code=ErrorCode.REFUND_ALREADY_OPEN,
            message="A refund request for this ticket is already open",
        )
        object.__setattr__(self, "ticket_id", ticket_id)


class InvalidTransitionError(DomainError):
    """Raised when a refund cannot move from its current status."""

    def __init__(self, current_status, target_status) -> None:
        super().__init__(
            code=ErrorCode.INVALID_TRANSITION,
            message=f"Cannot move refund from {current_status.value} to {target_status.value}",
        )
        object.__setattr__(self, "current_status", current_status)
        object.__setattr__(self, "target_status", target_status)


class TicketAlreadyRefundedError(DomainError):
    """Raised when a ticket already has a refunded request."""

    def __init__(self, ticket_id: str | None = None) -> None:
        super().__init__(
            code=ErrorCode.TICKET_ALREADY_REFUNDED,
            message="This ticket has already been refunded",
        )
        object.__setattr__(self, "ticket_id", ticket_id)
