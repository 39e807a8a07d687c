"""Integration tests for the Django ORM stores.

Run with: pytest tests/test_stores.py -v
"""

from datetime import timedelta
from decimal import Decimal
from uuid import uuid4

import pytest
from django.core.exceptions import ValidationError as DjangoValidationError

from events import models as orm
from events.domain import DiscountKind, EventId, TicketId
from events.domain.errors import DuplicateReferenceError, IntegrityViolationError
from events.stores.django_store import DjangoEventStore, DjangoTicketStore, ticket_to_domain
from refunds import models as refund_orm
from refunds.domain import RefundId, RefundReason, RefundRequest, RefundStatus
from refunds.domain.errors import RefundAlreadyOpenError, TicketAlreadyRefundedError
from refunds.stores.django_store import DjangoRefundStore
from tests.builders import (
    NOW,
    create_discount_row,
    create_event_row,
    create_ticket_row,
    create_tier_row,
)


def counters(event_row):
    event_row.refresh_from_db()
    return event_row.tickets_sold, {t.policy: t.stock_sold for t in event_row.tiers.all()}


def open_refund(ticket_row, status=RefundStatus.REQUESTED) -> RefundRequest:
    ticket = ticket_to_domain(ticket_row)
    return RefundRequest(
        id=RefundId(uuid4()),
        ticket_id=ticket.id,
        ticket_reference=ticket.reference,
        event_id=ticket.event_id,
        owner_id=ticket.owner_id,
        refundable_amount=Decimal("5000"),
        reason=RefundReason.CHANGED_MIND,
        status=status,
        requested_at=NOW,
        updated_at=NOW,
    )


@pytest.mark.django_db
class TestDjangoEventStore:
    def test_get_event_maps_counters_and_tiers(self):
        row = create_event_row(capacity_enabled=True, capacity_max=10, tickets_sold=4, end_time="22:00")
        create_tier_row(row, "VIP", price="20000", stock_max=5, stock_sold=2)
        event = DjangoEventStore().get_event(EventId(row.pk))
        assert event.capacity.remaining == 6
        assert str(event.end_time) == "22:00"
        assert event.find_tier("VIP").stock.remaining == 3

    def test_missing_event_is_none(self):
        assert DjangoEventStore().get_event(EventId(uuid4())) is None

    def test_event_exists(self):
        row = create_event_row()
        assert DjangoEventStore().event_exists(EventId(row.pk))
        assert not DjangoEventStore().event_exists(EventId(uuid4()))

    def test_oversold_row_is_reported(self):
        row = create_event_row(capacity_enabled=True, capacity_max=10)
        orm.Event.objects.filter(pk=row.pk).update(tickets_sold=11)
        with pytest.raises(IntegrityViolationError):
            DjangoEventStore().get_event(EventId(row.pk))

    def test_increment_counts_event_and_tier(self):
        row = create_event_row(capacity_enabled=True, capacity_max=2)
        create_tier_row(row, stock_max=2)
        assert DjangoEventStore().try_increment(EventId(row.pk), "Regular")
        assert counters(row) == (1, {"Regular": 1})

    def test_increment_refused_at_event_capacity(self):
        row = create_event_row(capacity_enabled=True, capacity_max=1, tickets_sold=1)
        create_tier_row(row)
        assert not DjangoEventStore().try_increment(EventId(row.pk), "Regular")
        assert counters(row) == (1, {"Regular": 0})

    def test_tier_failure_rolls_back_event_count(self):
        row = create_event_row(capacity_enabled=True, capacity_max=10)
        create_tier_row(row, stock_max=1, stock_sold=1)
        assert not DjangoEventStore().try_increment(EventId(row.pk), "Regular")
        assert counters(row) == (0, {"Regular": 1})

    def test_last_slot_is_sold_once(self):
        """The conditional update refuses every sale past the limit.

        Thread interleaving is exercised against the in-memory store in
        test_services; SQLite serialises writers, so a threaded run here
        would test the database lock rather than the update condition.
        """
        row = create_event_row()
        create_tier_row(row, stock_max=1)
        store = DjangoEventStore()
        results = [store.try_increment(EventId(row.pk), "Regular") for _ in range(3)]
        assert results == [True, False, False]
        assert counters(row) == (1, {"Regular": 1})

    def test_malformed_clock_time_is_reported(self):
        row = create_event_row()
        orm.Event.objects.filter(pk=row.pk).update(start_time="7pm")
        with pytest.raises(IntegrityViolationError):
            DjangoEventStore().get_event(EventId(row.pk))

    def test_clock_time_format_is_validated(self):
        row = create_event_row(start_time="19:30")
        row.end_time = "25:00"
        with pytest.raises(DjangoValidationError) as info:
            row.full_clean()
        assert "end_time" in info.value.message_dict

    def test_increment_redeems_discount(self):
        row = create_event_row()
        create_tier_row(row)
        create_discount_row(row, max_uses=2)
        store = DjangoEventStore()
        assert store.try_increment(EventId(row.pk), "Regular", "EARLY")
        assert store.get_discount(EventId(row.pk), "EARLY").used_count == 1

    def test_used_up_discount_rolls_back_counters(self):
        row = create_event_row(capacity_enabled=True, capacity_max=10)
        create_tier_row(row, stock_max=5)
        create_discount_row(row, max_uses=1, used_count=1)
        assert not DjangoEventStore().try_increment(EventId(row.pk), "Regular", "EARLY")
        assert counters(row) == (0, {"Regular": 0})

    def test_inactive_discount_is_not_redeemed(self):
        row = create_event_row()
        create_tier_row(row)
        create_discount_row(row, active=False)
        assert not DjangoEventStore().try_increment(EventId(row.pk), "Regular", "EARLY")
        assert counters(row)[0] == 0

    def test_discount_lookup_is_per_event(self):
        row = create_event_row()
        create_discount_row(row)
        store = DjangoEventStore()
        assert store.get_discount(EventId(row.pk), "EARLY").kind is DiscountKind.PERCENTAGE
        assert store.get_discount(EventId(create_event_row().pk), "EARLY") is None
        assert store.get_discount(EventId(row.pk), "early") is None

    def test_uncapped_event_keeps_counting(self):
        row = create_event_row(capacity_enabled=False)
        store = DjangoEventStore()
        assert all(store.try_increment(EventId(row.pk), None) for _ in range(3))
        assert counters(row)[0] == 3

    def test_issue_ticket_adds_revenue(self):
        row = create_event_row()
        ticket = DjangoEventStore().issue_ticket(
            EventId(row.pk), "1", "PAY-1", "Regular", Decimal("5000"), Decimal("5150"), NOW
        )
        row.refresh_from_db()
        assert row.total_revenue == Decimal("5000")
        assert DjangoEventStore().get_ticket_by_reference("PAY-1") == ticket

    def test_duplicate_reference_is_rejected(self):
        row = create_event_row()
        store = DjangoEventStore()
        store.issue_ticket(EventId(row.pk), "1", "PAY-1", "Regular", Decimal("0"), Decimal("0"), NOW)
        with pytest.raises(DuplicateReferenceError):
            store.issue_ticket(EventId(row.pk), "2", "PAY-1", "Regular", Decimal("0"), Decimal("0"), NOW)


@pytest.mark.django_db
class TestDjangoTicketStore:
    def test_list_for_owner_newest_first(self):
        row = create_event_row()
        older = create_ticket_row(row, "1", purchased_at=NOW - timedelta(days=1))
        newer = create_ticket_row(row, "1")
        create_ticket_row(row, "2")
        tickets = DjangoTicketStore().list_tickets_for_owner("1")
        assert [t.id.value for t in tickets] == [newer.pk, older.pk]

    def test_get_missing_ticket(self):
        assert DjangoTicketStore().get_ticket(TicketId(uuid4())) is None


@pytest.mark.django_db
class TestDjangoRefundStore:
    @pytest.fixture
    def ticket_row(self):
        return create_ticket_row(create_event_row(), "1")

    def test_create_and_read_back(self, ticket_row):
        store = DjangoRefundStore()
        refund = open_refund(ticket_row)
        store.create_refund(refund)
        assert store.get_refund(refund.id) == refund

    def test_one_open_request_per_ticket(self, ticket_row):
        store = DjangoRefundStore()
        store.create_refund(open_refund(ticket_row))
        with pytest.raises(RefundAlreadyOpenError):
            store.create_refund(open_refund(ticket_row, RefundStatus.PROCESSING))
        assert refund_orm.RefundRequest.objects.count() == 1

    def test_closed_requests_do_not_block(self, ticket_row):
        store = DjangoRefundStore()
        store.create_refund(open_refund(ticket_row, RefundStatus.DENIED))
        store.create_refund(open_refund(ticket_row))
        assert refund_orm.RefundRequest.objects.count() == 2

    def test_cas_transition_checks_expected_status(self, ticket_row):
        store = DjangoRefundStore()
        refund = open_refund(ticket_row)
        store.create_refund(refund)
        later = NOW + timedelta(hours=1)

        assert store.cas_transition(refund.id, RefundStatus.REQUESTED, RefundStatus.DENIED, later, "late")
        assert not store.cas_transition(refund.id, RefundStatus.REQUESTED, RefundStatus.REFUNDED, later)

        stored = store.get_refund(refund.id)
        assert stored.status is RefundStatus.DENIED
        assert stored.status_reason == "late"
        assert stored.updated_at == later

    def test_list_for_owner(self, ticket_row):
        store = DjangoRefundStore()
        refund = open_refund(ticket_row)
        store.create_refund(refund)
        assert store.list_refunds_for_owner("1") == [refund]
        assert store.list_refunds_for_owner("2") == []

    def test_second_refunded_request_is_rejected(self, ticket_row):
        store = DjangoRefundStore()
        store.create_refund(open_refund(ticket_row, RefundStatus.REFUNDED))
        later = open_refund(ticket_row)
        store.create_refund(later)
        assert store.has_refunded(TicketId(ticket_row.pk))
        with pytest.raises(TicketAlreadyRefundedError):
            store.cas_transition(later.id, RefundStatus.REQUESTED, RefundStatus.REFUNDED, NOW)
        assert store.get_refund(later.id).status is RefundStatus.REQUESTED

    def test_has_refunded_ignores_other_statuses(self, ticket_row):
        store = DjangoRefundStore()
        store.create_refund(open_refund(ticket_row, RefundStatus.DENIED))
        assert not store.has_refunded(TicketId(ticket_row.pk))
