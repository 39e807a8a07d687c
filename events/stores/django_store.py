"""Django ORM implementation of the event and ticket stores."""

import logging
from datetime import datetime
from decimal import Decimal

from django.db import DatabaseError, IntegrityError, transaction
from django.db.models import F, Q

from events import cache
from events import models as orm
from events.domain import (
    ClockTime,
    Discount,
    DiscountKind,
    Event,
    EventCapacity,
    EventId,
    Money,
    SaleWindow,
    Ticket,
    TicketId,
    TicketTier,
    TierStock,
)
from events.domain.errors import (
    DependencyFailureError,
    DuplicateReferenceError,
    IntegrityViolationError,
)
from events.stores.interfaces import EventStore, TicketStore

logger = logging.getLogger(__name__)


def _clock_time(row_id, value: str) -> ClockTime | None:
    if not value:
        return None
    try:
        return ClockTime.parse(value)
    except ValueError as exc:
        raise IntegrityViolationError(f"event {row_id} has malformed clock time {value!r}") from exc


def tier_to_domain(row: orm.TicketTier) -> TicketTier:
    stock = None
    if row.stock_max is not None:
        if row.stock_sold > row.stock_max:
            raise IntegrityViolationError(f"tier {row.pk} sold {row.stock_sold} > max {row.stock_max}")
        stock = TierStock(max=row.stock_max, sold=row.stock_sold)
    return TicketTier(policy=row.policy, price=Money(row.price), stock=stock)


def event_to_domain(row: orm.Event) -> Event:
    if row.capacity_enabled and row.tickets_sold > row.capacity_max:
        raise IntegrityViolationError(
            f"event {row.pk} sold {row.tickets_sold} > max {row.capacity_max}"
        )
    return Event(
        id=EventId(row.pk),
        name=row.name,
        booker_id=row.booker_id,
        start_at=row.start_at,
        end_at=row.end_at,
        start_time=_clock_time(row.pk, row.start_time),
        end_time=_clock_time(row.pk, row.end_time),
        is_free=row.is_free,
        capacity=EventCapacity(
            enabled=row.capacity_enabled, max=row.capacity_max, sold=row.tickets_sold
        ),
        sale_window=SaleWindow(enabled=row.sale_window_enabled, stop_at=row.sale_stop_at),
        tiers=tuple(tier_to_domain(t) for t in row.tiers.all()),
        total_revenue=Money(row.total_revenue),
    )


def ticket_to_domain(row: orm.Ticket) -> Ticket:
    return Ticket(
        id=TicketId(row.pk),
        reference=row.reference,
        event_id=EventId(row.event_id),
        owner_id=row.owner_id,
        tier_policy=row.tier_policy,
        price=Money(row.price),
        total_paid=Money(row.total_paid),
        purchased_at=row.purchased_at,
        verified=row.verified,
        discount_code=row.discount_code or None,
    )


def discount_to_domain(row: orm.Discount) -> Discount:
    return Discount(
        code=row.code,
        kind=DiscountKind(row.kind),
        value=row.value,
        max_uses=row.max_uses,
        used_count=row.used_count,
        active=row.active,
    )


class DjangoEventStore(EventStore):
    """Relational event store using Django ORM."""

    def get_event(self, event_id: EventId) -> Event | None:
        try:
            row = orm.Event.objects.prefetch_related("tiers").filter(pk=event_id.value).first()
        except DatabaseError as exc:
            raise DependencyFailureError() from exc
        return event_to_domain(row) if row is not None else None

    def event_exists(self, event_id: EventId) -> bool:
        try:
            return orm.Event.objects.filter(pk=event_id.value).exists()
        except DatabaseError as exc:
            raise DependencyFailureError() from exc

    def try_increment(
        self, event_id: EventId, tier_policy: str | None, discount_code: str | None = None
    ) -> bool:
        try:
            with transaction.atomic():
                updated = (
                    orm.Event.objects.filter(pk=event_id.value)
                    .filter(Q(capacity_enabled=False) | Q(tickets_sold__lt=F("capacity_max")))
                    .update(tickets_sold=F("tickets_sold") + 1)
                )
                if not updated:
                    return False
                if tier_policy is not None:
                    tier_updated = (
                        orm.TicketTier.objects.filter(event_id=event_id.value, policy=tier_policy)
                        .filter(Q(stock_max__isnull=True) | Q(stock_sold__lt=F("stock_max")))
                        .update(stock_sold=F("stock_sold") + 1)
                    )
                    if not tier_updated:
                        transaction.set_rollback(True)
                        return False
                if discount_code is not None:
                    redeemed = (
                        orm.Discount.objects.filter(
                            event_id=event_id.value,
                            code=discount_code,
                            active=True,
                            used_count__lt=F("max_uses"),
                        )
                        .update(used_count=F("used_count") + 1)
                    )
                    if not redeemed:
                        transaction.set_rollback(True)
                        return False
                # Invalidate only once the new counters are visible to readers.
                transaction.on_commit(lambda: cache.invalidate_event(event_id))
        except DatabaseError as exc:
            raise DependencyFailureError() from exc
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
        try:
            with transaction.atomic():
                row = orm.Ticket.objects.create(
                    event_id=event_id.value,
                    owner_id=owner_id,
                    reference=reference,
                    tier_policy=tier_policy,
                    price=price,
                    total_paid=total_paid,
                    purchased_at=purchased_at,
                    discount_code=discount_code or "",
                )
                orm.Event.objects.filter(pk=event_id.value).update(
                    total_revenue=F("total_revenue") + price
                )
        except IntegrityError as exc:
            raise DuplicateReferenceError(reference) from exc
        except DatabaseError as exc:
            raise DependencyFailureError() from exc
        return ticket_to_domain(row)

    def get_discount(self, event_id: EventId, code: str) -> Discount | None:
        try:
            row = orm.Discount.objects.filter(event_id=event_id.value, code=code).first()
        except DatabaseError as exc:
            raise DependencyFailureError() from exc
        return discount_to_domain(row) if row is not None else None

    def get_ticket_by_reference(self, reference: str) -> Ticket | None:
        try:
            row = orm.Ticket.objects.filter(reference=reference).first()
        except DatabaseError as exc:
            raise DependencyFailureError() from exc
        return ticket_to_domain(row) if row is not None else None


class DjangoTicketStore(TicketStore):
    """Relational ticket store using Django ORM."""

    def get_ticket(self, ticket_id: TicketId) -> Ticket | None:
        try:
            row = orm.Ticket.objects.filter(pk=ticket_id.value).first()
        except DatabaseError as exc:
            raise DependencyFailureError() from exc
        return ticket_to_domain(row) if row is not None else None

    def list_tickets_for_owner(self, owner_id: str) -> list[Ticket]:
        try:
            rows = list(orm.Ticket.objects.filter(owner_id=owner_id).order_by("-purchased_at"))
        except DatabaseError as exc:
            raise DependencyFailureError() from exc
        return [ticket_to_domain(row) for row in rows]
