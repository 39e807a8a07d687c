"""Store interfaces (repository pattern).

Stores must be swappable and return domain models.
"""

from abc import ABC, abstractmethod
from datetime import datetime
from decimal import Decimal

from events.domain import Discount, Event, EventId, Ticket, TicketId


class EventStore(ABC):
    """Interface for event persistence operations."""

    @abstractmethod
    def get_event(self, event_id: EventId) -> Event | None:
        """Return an event with its tiers, or None if not found."""
        ...

    @abstractmethod
    def event_exists(self, event_id: EventId) -> bool:
        """Check if an event exists."""
        ...

    @abstractmethod
    def try_increment(
        self, event_id: EventId, tier_policy: str | None, discount_code: str | None = None
    ) -> bool:
        """Atomically count one sale against the event and the tier.

        Each counter is incremented only if it stays within its max. When a
        discount code is given, one redemption is counted in the same write
        and only while the code is active and under its usage limit. Returns
        False, with nothing changed, when any limit would be exceeded.
        tier_policy is None for free admission.
        """
        ...

    @abstractmethod
    def issue_ticket(
        self,
        event_id: EventId,
        owner_id: str,
        reference: str,
        tier_policy: str,
        price: Decimal,
        total_paid: Decimal,
        purchased_at: datetime,
        discount_code: str | None = None,
    ) -> Ticket:
        """Persist a newly issued ticket and add its price to event revenue."""
        ...

    @abstractmethod
    def get_discount(self, event_id: EventId, code: str) -> Discount | None:
        """Return an event's discount by exact code, or None if not found."""
        ...

    @abstractmethod
    def get_ticket_by_reference(self, reference: str) -> Ticket | None:
        """Return the ticket issued for a payment reference, if any."""
        ...


class TicketStore(ABC):
    """Interface for reading issued tickets."""

    @abstractmethod
    def get_ticket(self, ticket_id: TicketId) -> Ticket | None:
        """Return a ticket by ID, or None if not found."""
        ...

    @abstractmethod
    def list_tickets_for_owner(self, owner_id: str) -> list[Ticket]:
        """Return an owner's tickets ordered by purchased_at descending."""
        ...
