"""Unit tests for domain primitives.

These test invariants that must hold at construction time.
Run with: pytest tests/test_domain.py -v
"""

import uuid
from decimal import Decimal

import pytest

from events.domain import (
    ClockTime,
    Discount,
    DiscountKind,
    EventCapacity,
    EventId,
    Money,
    TierStock,
    quote_price,
)
from refunds.domain import RefundPolicy, RefundStatus


class TestMoney:
    """Tests for Money value object."""

    def test_money_accepts_positive_amount(self):
        """Money can be created with positive amount."""
        assert Money(Decimal("5000")).amount == Decimal("5000")

    def test_money_accepts_zero(self):
        """Money can be created with zero."""
        assert Money(Decimal("0")).amount == 0

    def test_money_rejects_negative_amount(self):
        """Money raises ValueError for negative amount."""
        with pytest.raises(ValueError):
            Money(Decimal("-1"))

    def test_money_str_format(self):
        """Money string representation is formatted to 2 decimal places."""
        assert str(Money(Decimal("150"))) == "150.00"


class TestClockTime:
    def test_parse_hours_and_minutes(self):
        assert ClockTime.parse("21:30") == ClockTime(hour=21, minute=30)

    def test_parse_hour_only(self):
        assert ClockTime.parse("7") == ClockTime(hour=7, minute=0)

    def test_rejects_out_of_range(self):
        with pytest.raises(ValueError):
            ClockTime.parse("25:00")

    def test_str_is_zero_padded(self):
        assert str(ClockTime(hour=9, minute=5)) == "09:05"


class TestCounters:
    def test_capacity_rejects_negative_values(self):
        with pytest.raises(ValueError):
            EventCapacity(enabled=True, max=-1, sold=0)

    def test_capacity_remaining_never_negative(self):
        assert EventCapacity(enabled=True, max=5, sold=5).remaining == 0

    def test_tier_stock_exhausted_at_max(self):
        assert TierStock(max=2, sold=2).exhausted
        assert not TierStock(max=2, sold=1).exhausted


class TestEventId:
    """Tests for EventId value object."""

    def test_from_string_valid_uuid(self):
        """EventId.from_string parses valid UUID."""
        raw = uuid.uuid4()
        assert EventId.from_string(str(raw)).value == raw

    def test_from_string_invalid_uuid(self):
        """EventId.from_string raises ValueError for invalid UUID."""
        with pytest.raises(ValueError):
            EventId.from_string("not-a-uuid")


class TestRefundPolicy:
    def test_refundable_amount_subtracts_fee(self):
        assert RefundPolicy().refundable_amount(Decimal("5150")) == Decimal("5000")

    def test_refundable_amount_is_not_clamped(self):
        assert RefundPolicy().refundable_amount(Decimal("100")) == Decimal("-50")

    def test_rejects_inverted_window(self):
        with pytest.raises(ValueError):
            RefundPolicy(opens_after_days=8, closes_after_days=7)

    def test_from_settings_reads_overrides(self):
        policy = RefundPolicy.from_settings({"FEE": "200", "OPENS_AFTER_DAYS": 1, "CLOSES_AFTER_DAYS": 3})
        assert policy == RefundPolicy(fee=Decimal("200"), opens_after_days=1, closes_after_days=3)

    def test_terminal_statuses(self):
        assert RefundStatus.REFUNDED.is_terminal
        assert RefundStatus.DENIED.is_terminal
        assert RefundStatus.PROCESSING.is_open
        assert not RefundStatus.REQUESTED.is_terminal


class TestDiscount:
    def discount(self, kind=DiscountKind.PERCENTAGE, value="20", **kw):
        kw.setdefault("max_uses", 3)
        return Discount(code="EARLY", kind=kind, value=Decimal(value), **kw)

    def test_percentage_is_rounded_to_cents(self):
        assert self.discount(value="33.33").amount_off(Decimal("99.99")) == Decimal("33.33")

    def test_percentage_over_hundred_is_capped(self):
        assert self.discount(value="150").amount_off(Decimal("5000")) == Decimal("5000")

    def test_flat_is_capped_at_price(self):
        flat = self.discount(kind=DiscountKind.FLAT, value="8000")
        assert flat.amount_off(Decimal("5000")) == Decimal("5000")

    def test_exhausted_at_max_uses(self):
        assert self.discount(max_uses=2, used_count=2).exhausted
        assert not self.discount(max_uses=2, used_count=1).exhausted

    def test_negative_value_rejected(self):
        with pytest.raises(ValueError):
            self.discount(value="-1")

    def test_fee_applies_to_fully_discounted_paid_tier(self):
        quote = quote_price(Decimal("5000"), Decimal("150"), self.discount(value="100"))
        assert quote.price == 0
        assert quote.total_paid == Decimal("150")

    def test_free_tier_has_no_fee(self):
        quote = quote_price(Decimal("0"), Decimal("150"))
        assert quote.total_paid == 0
        assert quote.discount_code is None
