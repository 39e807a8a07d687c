from events.domain.discounts import Discount, DiscountKind, PriceQuote, quote_price
from events.domain.models import (
    FREE_ADMISSION,
    Event,
    EventCapacity,
    SaleWindow,
    Ticket,
    TicketTier,
    TierStock,
)
from events.domain.purchase import BlockReason, PurchaseDecision, decide_purchase
from events.domain.status import EventStatus, evaluate_event_status
from events.domain.value_objects import ClockTime, EventId, Money, TicketId

__all__ = [
    "Event",
    "EventCapacity",
    "SaleWindow",
    "TicketTier",
    "TierStock",
    "Ticket",
    "FREE_ADMISSION",
    "EventId",
    "TicketId",
    "Money",
    "ClockTime",
    "EventStatus",
    "evaluate_event_status",
    "BlockReason",
    "PurchaseDecision",
    "decide_purchase",
    "Discount",
    "DiscountKind",
    "PriceQuote",
    "quote_price",
]
