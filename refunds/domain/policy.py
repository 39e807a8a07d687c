"""Refund policy constants and fee math."""

from dataclasses import dataclass
from decimal import Decimal
from typing import Final

DEFAULT_FEE: Final[Decimal] = Decimal("150")
DEFAULT_OPENS_AFTER_DAYS: Final[int] = 2
DEFAULT_CLOSES_AFTER_DAYS: Final[int] = 7


@dataclass(frozen=True)
class RefundPolicy:
    """Non-refundable fee and the day window in which refunds are accepted."""

    fee: Decimal = DEFAULT_FEE
    opens_after_days: int = DEFAULT_OPENS_AFTER_DAYS
    closes_after_days: int = DEFAULT_CLOSES_AFTER_DAYS

    def __post_init__(self) -> None:
        if self.fee < 0:
            raise ValueError("Refund fee cannot be negative")
        if not 0 <= self.opens_after_days <= self.closes_after_days:
            raise ValueError("Refund window must open before it closes")

    @classmethod
    def from_settings(cls, conf: dict) -> "RefundPolicy":
        return cls(
            fee=Decimal(conf.get("FEE", DEFAULT_FEE)),
            opens_after_days=int(conf.get("OPENS_AFTER_DAYS", DEFAULT_OPENS_AFTER_DAYS)),
            closes_after_days=int(conf.get("CLOSES_AFTER_DAYS", DEFAULT_CLOSES_AFTER_DAYS)),
        )

    def refundable_amount(self, total_paid: Decimal) -> Decimal:
        # Not clamped: callers decide what a non-positive amount means.
        return total_paid - self.fee
