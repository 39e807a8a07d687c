"""Domain models representing persisted state.

These are pure domain objects with no API input rules.
Django ORM models are in events/models.py (persistence layer).
"""

from dataclasses import dataclass
from datetime import datetime
from decimal import Decimal

from events.domain.value_objects import ClockTime, EventId, Money, TicketId

FREE_ADMISSION = "Free Admission"


@dataclass(frozen=True)
class EventCapacity:
    """Event-wide ticket limit."""

    enabled: bool
    max: int
    sold: int

    def __post_init__(self) -> None:
        if self.max < 0 or self.sold < 0:
            raise ValueError("Capacity counters cannot be negative")

    @property
    def remaining(self) -> int:
        return max(0, self.max - self.sold)


@dataclass(frozen=True)
class SaleWindow:
    """Optional deadline after which sales stop."""

    enabled: bool
    stop_at: datetime | None


@dataclass(frozen=True)
class TierStock:
    """Independent stock limit for a single tier."""

    max: int
    sold: int

    def __post_init__(self) -> None:
        if self.max < 0 or self.sold < 0:
            raise ValueError("Stock counters cannot be negative")

    @property
    def remaining(self) -> int:
        return max(0, self.max - self.sold)

    @property
    def exhausted(self) -> bool:
        return self.sold >= self.max


@dataclass(frozen=True)
class TicketTier:
    """Domain representation of a ticket tier."""

    policy: str
    price: Money
    stock: TierStock | None = None


@dataclass(frozen=True)
class Event:
    """Domain representation of an Event."""

    id: EventId
    name: str
    booker_id: str
    start_at: datetime
    end_at: datetime | None = None
    start_time: ClockTime | None = None
    end_time: ClockTime | None = None
    is_free: bool = False
    capacity: EventCapacity | None = None
    sale_window: SaleWindow | None = None
    tiers: tuple[TicketTier, ...] = ()
    total_revenue: Money = Money(Decimal("0"))

    def find_tier(self, policy: str) -> TicketTier | None:
        for tier in self.tiers:
            if tier.policy == policy:
                return tier
        return None


@dataclass(frozen=True)
class Ticket:
    """Domain representation of an issued ticket."""

    id: TicketId
    reference: str
    event_id: EventId
    owner_id: str
    tier_policy: str
    price: Money
    total_paid: Money
    purchased_at: datetime
    verified: bool = False
    discount_code: str | None = None
