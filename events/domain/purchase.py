"""Purchase gating.

The decision is advisory: it is computed from a snapshot and must be
confirmed by the store's atomic increment at write time.
"""

from dataclasses import dataclass
from datetime import datetime, tzinfo
from enum import Enum
from typing import Self

from events.domain.models import Event, TicketTier
from events.domain.status import EventStatus, evaluate_event_status


class BlockReason(Enum):
    PASSED = "passed"
    SOLD_OUT = "sold_out"
    SALE_ENDED = "sale_ended"
    TIER_SOLD_OUT = "tier_sold_out"


@dataclass(frozen=True)
class PurchaseDecision:
    allowed: bool
    block_reason: BlockReason | None = None

    @classmethod
    def allow(cls) -> Self:
        return cls(allowed=True)

    @classmethod
    def block(cls, reason: BlockReason) -> Self:
        return cls(allowed=False, block_reason=reason)


def decide_from_status(status: EventStatus, tier: TicketTier | None) -> PurchaseDecision:
    """Apply the gate to already-evaluated status facts.

    Order matters: a passed event can never be bought, whatever else is true.
    """
    if status.is_passed:
        return PurchaseDecision.block(BlockReason.PASSED)
    if status.is_sold_out:
        return PurchaseDecision.block(BlockReason.SOLD_OUT)
    if status.is_sale_ended:
        return PurchaseDecision.block(BlockReason.SALE_ENDED)
    if tier is not None and tier.stock is not None and tier.stock.exhausted:
        return PurchaseDecision.block(BlockReason.TIER_SOLD_OUT)
    return PurchaseDecision.allow()


def decide_purchase(
    event: Event, tier: TicketTier | None, now: datetime, tz: tzinfo
) -> PurchaseDecision:
    """Decide whether `tier` (None for free admission) can be bought now."""
    return decide_from_status(evaluate_event_status(event, now, tz), tier)
