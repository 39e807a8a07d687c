"""Discount codes and purchase price quotes.

A code belongs to one event. It reduces the ticket price, never the
platform fee, and each purchase that uses it counts one redemption.
"""

from dataclasses import dataclass
from decimal import Decimal
from enum import Enum

from events.domain.errors import DiscountNotFoundError, InvalidDiscountError

CENT = Decimal("0.01")
ZERO = Decimal("0")


class DiscountKind(Enum):
    PERCENTAGE = "percentage"
    FLAT = "flat"


@dataclass(frozen=True)
class Discount:
    """Domain representation of an event discount code."""

    code: str
    kind: DiscountKind
    value: Decimal
    max_uses: int
    used_count: int = 0
    active: bool = True

    def __post_init__(self) -> None:
        if self.value < 0 or self.max_uses < 0 or self.used_count < 0:
            raise ValueError("Discount values cannot be negative")

    @property
    def exhausted(self) -> bool:
        return self.used_count >= self.max_uses

    def amount_off(self, price: Decimal) -> Decimal:
        """Reduction for a ticket price; never more than the price itself."""
        if self.kind is DiscountKind.PERCENTAGE:
            off = price * min(self.value, Decimal("100")) / 100
        else:
            off = self.value
        return min(off, price).quantize(CENT)


@dataclass(frozen=True)
class PriceQuote:
    """What a buyer pays for one ticket."""

    list_price: Decimal
    discount_amount: Decimal
    platform_fee: Decimal
    discount_code: str | None = None

    @property
    def price(self) -> Decimal:
        return self.list_price - self.discount_amount

    @property
    def total_paid(self) -> Decimal:
        return self.price + self.platform_fee


def ensure_usable(discount: Discount | None, code: str) -> Discount:
    """Return the discount if it can still be redeemed.

    Raises:
        DiscountNotFoundError: If no such code exists for the event.
        InvalidDiscountError: If the code is inactive or used up.
    """
    if discount is None:
        raise DiscountNotFoundError(code)
    if not discount.active:
        raise InvalidDiscountError(code, "This discount code is no longer active")
    if discount.exhausted:
        raise InvalidDiscountError(code, "This discount code has reached its maximum usage limit")
    return discount


def quote_price(
    list_price: Decimal, platform_fee: Decimal, discount: Discount | None = None
) -> PriceQuote:
    """Price a ticket. The fee applies whenever the tier itself is not free."""
    fee = platform_fee if list_price > 0 else ZERO
    if discount is None:
        return PriceQuote(list_price=list_price, discount_amount=ZERO, platform_fee=fee)
    return PriceQuote(
        list_price=list_price,
        discount_amount=discount.amount_off(list_price),
        platform_fee=fee,
        discount_code=discount.code,
    )
