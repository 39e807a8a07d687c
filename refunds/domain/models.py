"""Refund domain models."""

from dataclasses import dataclass
from datetime import datetime
from decimal import Decimal
from enum import Enum
from typing import Self
from uuid import UUID

from events.domain import EventId, TicketId


@dataclass(frozen=True)
class RefundId:
    """Unique identifier for a RefundRequest."""

    value: UUID

    @classmethod
    def from_string(cls, value: str) -> Self:
        return cls(value=UUID(value))

    def __str__(self) -> str:
        return str(self.value)


class RefundStatus(Enum):
    REQUESTED = "requested"
    PROCESSING = "processing"
    REFUNDED = "refunded"
    DENIED = "denied"

    @property
    def is_open(self) -> bool:
        return self in OPEN_STATUSES

    @property
    def is_terminal(self) -> bool:
        return self in TERMINAL_STATUSES


OPEN_STATUSES = frozenset({RefundStatus.REQUESTED, RefundStatus.PROCESSING})
TERMINAL_STATUSES = frozenset({RefundStatus.REFUNDED, RefundStatus.DENIED})


class RefundReason(Enum):
    """Closed set of reasons offered on the refund form."""

    CHANGED_MIND = "changed_mind"
    NEED_MONEY = "need_money"
    SUSPECTED_SCAM = "suspected_scam"
    WRONG_TICKET = "wrong_ticket"
    DISLIKE_ORGANIZER = "dislike_organizer"
    OTHER = "other"

    @property
    def label(self) -> str:
        return REASON_LABELS[self]


REASON_LABELS = {
    RefundReason.CHANGED_MIND: "I changed my mind",
    RefundReason.NEED_MONEY: "I need the money back",
    RefundReason.SUSPECTED_SCAM: "The event is likely a scam",
    RefundReason.WRONG_TICKET: "I purchased the wrong ticket",
    RefundReason.DISLIKE_ORGANIZER: "I don't like the organizer",
    RefundReason.OTHER: "Other",
}


@dataclass(frozen=True)
class RefundRequest:
    """Domain representation of a refund request."""

    id: RefundId
    ticket_id: TicketId
    ticket_reference: str
    event_id: EventId
    owner_id: str
    refundable_amount: Decimal
    reason: RefundReason
    status: RefundStatus
    requested_at: datetime
    custom_reason: str | None = None
    note: str | None = None
    status_reason: str | None = None
    updated_at: datetime | None = None

    @property
    def display_reason(self) -> str:
        if self.reason is RefundReason.OTHER and self.custom_reason:
            return self.custom_reason
        return self.reason.label
