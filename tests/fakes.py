"""In-memory store and dispatcher doubles for service tests."""

import threading
from dataclasses import replace
from datetime import datetime
from decimal import Decimal
from uuid import uuid4

from events.domain import Discount, Event, EventId, Money, Ticket, TicketId
from events.domain.errors import DependencyFailureError
from events.stores.interfaces import EventStore, TicketStore
from refunds.domain import RefundId, RefundRequest, RefundStatus
from refunds.domain.errors import RefundAlreadyOpenError, TicketAlreadyRefundedError
from refunds.notifications import NotificationDispatcher, NotificationKind
from refunds.stores.interfaces import RefundStore


class InMemoryEventStore(EventStore, TicketStore):
    def __init__(self, *events: Event) -> None:
        self._lock = threading.Lock()
        self.events: dict[EventId, Event] = {e.id: e for e in events}
        self.tickets: dict[TicketId, Ticket] = {}
        self.discounts: dict[tuple[EventId, str], Discount] = {}
        self.fail = False

    def _check(self) -> None:
        if self.fail:
            raise DependencyFailureError()

    def get_event(self, event_id: EventId) -> Event | None:
        self._check()
        return self.events.get(event_id)

    def event_exists(self, event_id: EventId) -> bool:
        return event_id in self.events

    def try_increment(
        self, event_id: EventId, tier_policy: str | None, discount_code: str | None = None
    ) -> bool:
        with self._lock:
            discount = None
            if discount_code is not None:
                discount = self.discounts.get((event_id, discount_code))
                if discount is None or not discount.active or discount.exhausted:
                    return False
            event = self.events[event_id]
            capacity = event.capacity
            if capacity is not None and capacity.enabled and capacity.sold >= capacity.max:
                return False
            tiers = list(event.tiers)
            if tier_policy is not None:
                index = next(i for i, t in enumerate(tiers) if t.policy == tier_policy)
                stock = tiers[index].stock
                if stock is not None:
                    if stock.sold >= stock.max:
                        return False
                    tiers[index] = replace(tiers[index], stock=replace(stock, sold=stock.sold + 1))
            if capacity is not None:
                capacity = replace(capacity, sold=capacity.sold + 1)
            self.events[event_id] = replace(event, capacity=capacity, tiers=tuple(tiers))
            if discount is not None:
                self.discounts[(event_id, discount_code)] = replace(
                    discount, used_count=discount.used_count + 1
                )
            return True

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
        ticket = Ticket(
            id=TicketId(uuid4()),
            reference=reference,
            event_id=event_id,
            owner_id=owner_id,
            tier_policy=tier_policy,
            price=Money(price),
            total_paid=Money(total_paid),
            purchased_at=purchased_at,
            discount_code=discount_code,
        )
        self.tickets[ticket.id] = ticket
        return ticket

    def add_discount(self, event_id: EventId, discount: Discount) -> Discount:
        self.discounts[(event_id, discount.code)] = discount
        return discount

    def get_discount(self, event_id: EventId, code: str) -> Discount | None:
        return self.discounts.get((event_id, code))

    def add_ticket(self, ticket: Ticket) -> Ticket:
        self.tickets[ticket.id] = ticket
        return ticket

    def get_ticket_by_reference(self, reference: str) -> Ticket | None:
        return next((t for t in self.tickets.values() if t.reference == reference), None)

    def get_ticket(self, ticket_id: TicketId) -> Ticket | None:
        self._check()
        return self.tickets.get(ticket_id)

    def list_tickets_for_owner(self, owner_id: str) -> list[Ticket]:
        owned = [t for t in self.tickets.values() if t.owner_id == owner_id]
        return sorted(owned, key=lambda t: t.purchased_at, reverse=True)


class InMemoryRefundStore(RefundStore):
    def __init__(self) -> None:
        self._lock = threading.Lock()
        self.refunds: dict[RefundId, RefundRequest] = {}

    def create_refund(self, refund: RefundRequest) -> RefundId:
        with self._lock:
            for existing in self.refunds.values():
                if existing.ticket_id == refund.ticket_id and existing.status.is_open:
                    raise RefundAlreadyOpenError(str(refund.ticket_id))
            self.refunds[refund.id] = refund
        return refund.id

    def has_refunded(self, ticket_id: TicketId) -> bool:
        return any(
            r.ticket_id == ticket_id and r.status is RefundStatus.REFUNDED
            for r in self.refunds.values()
        )

    def get_refund(self, refund_id: RefundId) -> RefundRequest | None:
        return self.refunds.get(refund_id)

    def cas_transition(
        self,
        refund_id: RefundId,
        expected: RefundStatus,
        new: RefundStatus,
        at: datetime,
        status_reason: str | None = None,
    ) -> bool:
        with self._lock:
            current = self.refunds.get(refund_id)
            if current is None or current.status is not expected:
                return False
            if new is RefundStatus.REFUNDED and self.has_refunded(current.ticket_id):
                raise TicketAlreadyRefundedError()
            changes = {"status": new, "updated_at": at}
            if status_reason is not None:
                changes["status_reason"] = status_reason
            self.refunds[refund_id] = replace(current, **changes)
            return True

    def list_refunds_for_owner(self, owner_id: str) -> list[RefundRequest]:
        owned = [r for r in self.refunds.values() if r.owner_id == owner_id]
        return sorted(owned, key=lambda r: r.requested_at, reverse=True)


class RecordingDispatcher(NotificationDispatcher):
    def __init__(self) -> None:
        self.sent: list[tuple[NotificationKind, dict]] = []

    def notify(self, kind, payload) -> None:
        self.sent.append((kind, dict(payload)))

    @property
    def kinds(self) -> list[NotificationKind]:
        return [kind for kind, _ in self.sent]


class FailingDispatcher(NotificationDispatcher):
    def notify(self, kind, payload) -> None:
        raise ConnectionError("mail relay down")
