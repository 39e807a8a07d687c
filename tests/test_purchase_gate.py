"""Unit tests for the purchase gate.

Run with: pytest tests/test_purchase_gate.py -v
"""

from datetime import timedelta

import pytest

from events.domain import BlockReason, decide_purchase
from tests.builders import LAGOS, NOW, capacity, make_event, make_tier, sale_window

YESTERDAY = NOW - timedelta(days=1)


class TestPurchaseGate:
    def test_allows_open_event(self):
        tier = make_tier()
        decision = decide_purchase(make_event(tiers=[tier]), tier, NOW, LAGOS)
        assert decision.allowed
        assert decision.block_reason is None

    def test_passed_dominates_sold_out(self):
        event = make_event(start_at=YESTERDAY, capacity=capacity(100, 100))
        decision = decide_purchase(event, None, NOW, LAGOS)
        assert decision.block_reason is BlockReason.PASSED

    def test_sold_out_regardless_of_sale_window(self):
        for window in (None, sale_window(NOW + timedelta(days=1)), sale_window(YESTERDAY)):
            event = make_event(capacity=capacity(100, 100), sale_window=window)
            decision = decide_purchase(event, None, NOW, LAGOS)
            assert not decision.allowed
            assert decision.block_reason is BlockReason.SOLD_OUT

    def test_sale_ended_blocks(self):
        event = make_event(sale_window=sale_window(YESTERDAY))
        assert decide_purchase(event, None, NOW, LAGOS).block_reason is BlockReason.SALE_ENDED

    def test_sale_ended_beats_tier_sold_out(self):
        tier = make_tier(stock_max=5, stock_sold=5)
        event = make_event(sale_window=sale_window(YESTERDAY), tiers=[tier])
        assert decide_purchase(event, tier, NOW, LAGOS).block_reason is BlockReason.SALE_ENDED

    @pytest.mark.parametrize("sold,allowed", [(4, True), (5, False)])
    def test_tier_stock(self, sold, allowed):
        tier = make_tier(stock_max=5, stock_sold=sold)
        decision = decide_purchase(make_event(tiers=[tier]), tier, NOW, LAGOS)
        assert decision.allowed is allowed
        if not allowed:
            assert decision.block_reason is BlockReason.TIER_SOLD_OUT

    def test_unlimited_tier_is_never_tier_sold_out(self):
        tier = make_tier(stock_max=None)
        assert decide_purchase(make_event(tiers=[tier]), tier, NOW, LAGOS).allowed

    def test_event_today_can_still_be_bought(self):
        event = make_event(start_at=NOW + timedelta(hours=8))
        assert decide_purchase(event, None, NOW, LAGOS).allowed
