"""Store interfaces (repository pattern) for refund requests."""

from abc import ABC, abstractmethod
from datetime import datetime

from events.domain import TicketId
from refunds.domain import RefundId, RefundRequest, RefundStatus


class RefundStore(ABC):
    """Interface for refund persistence operations."""

    @abstractmethod
    def create_refund(self, refund: RefundRequest) -> RefundId:
        """Persist a new request.

        Raises:
            RefundAlreadyOpenError: If the ticket already has an open request.
        """
        ...

    @abstractmethod
    def has_refunded(self, ticket_id: TicketId) -> bool:
        """Return True if any request for the ticket reached refunded."""
        ...

    @abstractmethod
    def get_refund(self, refund_id: RefundId) -> RefundRequest | None:
        """Return a refund request by ID, or None if not found."""
        ...

    @abstractmethod
    def cas_transition(
        self,
        refund_id: RefundId,
        expected: RefundStatus,
        new: RefundStatus,
        at: datetime,
        status_reason: str | None = None,
    ) -> bool:
        """Move to `new` only if the stored status is still `expected`.

        Raises:
            TicketAlreadyRefundedError: If `new` is refunded and another
                request for the same ticket is already refunded.
        """
        ...

    @abstractmethod
    def list_refunds_for_owner(self, owner_id: str) -> list[RefundRequest]:
        """Return an owner's requests ordered by requested_at descending."""
        ...
