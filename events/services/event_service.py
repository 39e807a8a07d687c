"""Event service - purchase gating and ticket issuance.

Services:
- Depend only on interfaces (stores, clock)
- Validate domain invariants
- Perform orchestration and error mapping
- Return domain models or domain errors
"""

import logging
from datetime import tzinfo
from decimal import Decimal

from events.domain import (
    FREE_ADMISSION,
    BlockReason,
    Discount,
    Event,
    EventId,
    EventStatus,
    PriceQuote,
    PurchaseDecision,
    Ticket,
    TicketTier,
    decide_purchase,
    evaluate_event_status,
    quote_price,
)
from events.domain.clock import Clock
from events.domain.discounts import ensure_usable
from events.domain.errors import (
    CapacityExceededError,
    DuplicateReferenceError,
    EventNotFoundError,
    InvalidIdError,
    TierNotFoundError,
    ValidationError,
)
from events.stores.interfaces import EventStore, TicketStore

logger = logging.getLogger(__name__)


def parse_event_id(event_id: str) -> EventId:
    try:
        return EventId.from_string(event_id)
    except (ValueError, TypeError, AttributeError):
        raise InvalidIdError("event ID") from None


class EventService:
    """Service for event status and ticket purchases."""

    def __init__(
        self,
        store: EventStore,
        tickets: TicketStore,
        clock: Clock,
        tz: tzinfo,
        platform_fee: Decimal = Decimal("0"),
    ) -> None:
        self._store = store
        self._tickets = tickets
        self._clock = clock
        self._tz = tz
        self._platform_fee = platform_fee

    def get_event(self, event_id: str) -> Event:
        """Return an event by ID.

        Raises:
            InvalidIdError: If the event_id is not a valid UUID.
            EventNotFoundError: If the event does not exist.
        """
        event = self._store.get_event(parse_event_id(event_id))
        if event is None:
            raise EventNotFoundError(event_id)
        return event

    def get_status(self, event_id: str) -> EventStatus:
        event = self.get_event(event_id)
        return evaluate_event_status(event, self._clock.now(), self._tz)

    def resolve_tier(self, event: Event, tier_policy: str) -> TicketTier | None:
        """Map a requested policy to a tier; None means free admission.

        Raises:
            TierNotFoundError: If the policy is unknown for this event.
        """
        if tier_policy == FREE_ADMISSION:
            if not event.is_free:
                raise TierNotFoundError(tier_policy)
            return None
        tier = event.find_tier(tier_policy)
        if tier is None:
            raise TierNotFoundError(tier_policy)
        return tier

    def check_purchase(self, event_id: str, tier_policy: str) -> PurchaseDecision:
        event = self.get_event(event_id)
        tier = self.resolve_tier(event, tier_policy)
        return decide_purchase(event, tier, self._clock.now(), self._tz)

    def quote_purchase(
        self, event_id: str, tier_policy: str, discount_code: str | None = None
    ) -> PriceQuote:
        """Price one ticket for a tier, applying a discount code if given.

        Raises:
            DiscountNotFoundError: If the code does not exist for the event.
            InvalidDiscountError: If the code is inactive or used up.
        """
        event = self.get_event(event_id)
        tier = self.resolve_tier(event, tier_policy)
        return self._quote(event, tier, discount_code)

    def _quote(self, event: Event, tier: TicketTier | None, discount_code: str | None) -> PriceQuote:
        code = (discount_code or "").strip()
        discount = None
        if code:
            if tier is None:
                raise ValidationError("Discount codes do not apply to free admission")
            discount = self._usable_discount(event.id, code)
        list_price = tier.price.amount if tier is not None else Decimal("0")
        return quote_price(list_price, self._platform_fee, discount)

    def _usable_discount(self, event_id: EventId, code: str) -> Discount:
        return ensure_usable(self._store.get_discount(event_id, code), code)

    def purchase_ticket(
        self,
        event_id: str,
        tier_policy: str,
        owner_id: str,
        reference: str,
        discount_code: str | None = None,
    ) -> Ticket:
        """Issue a ticket if the gate allows it and the counters accept the sale.

        A reference already issued to the same owner for the same event
        returns the existing ticket without counting another sale.

        Raises:
            ValidationError: If the reference is blank or the tier is unknown.
            DuplicateReferenceError: If the reference belongs to another owner or event.
            CapacityExceededError: If the gate blocks or the atomic increment loses.
            DiscountNotFoundError: If the discount code is unknown.
            InvalidDiscountError: If the discount code cannot be redeemed.
        """
        if not reference or not reference.strip():
            raise ValidationError("Payment reference is required")
        parsed_id = parse_event_id(event_id)
        existing = self._store.get_ticket_by_reference(reference)
        if existing is not None:
            if existing.owner_id != owner_id or existing.event_id != parsed_id:
                logger.warning(
                    "payment reference reused reference=%s owner=%s event=%s",
                    reference, owner_id, parsed_id,
                )
                raise DuplicateReferenceError(reference)
            logger.info("purchase already processed reference=%s ticket=%s", reference, existing.id)
            return existing

        event = self.get_event(event_id)
        tier = self.resolve_tier(event, tier_policy)
        now = self._clock.now()
        decision = decide_purchase(event, tier, now, self._tz)
        if not decision.allowed:
            raise CapacityExceededError(decision.block_reason)
        quote = self._quote(event, tier, discount_code)

        counted_policy = tier.policy if tier is not None else None
        if not self._store.try_increment(event.id, counted_policy, quote.discount_code):
            if quote.discount_code is not None:
                self._usable_discount(event.id, quote.discount_code)
            reason = self._lost_race_reason(event.id, tier)
            logger.warning(
                "purchase lost increment race event=%s tier=%s reason=%s",
                event.id, tier_policy, reason.value,
            )
            raise CapacityExceededError(reason)

        ticket = self._store.issue_ticket(
            event_id=event.id,
            owner_id=owner_id,
            reference=reference,
            tier_policy=tier_policy,
            price=quote.price,
            total_paid=quote.total_paid,
            purchased_at=now,
            discount_code=quote.discount_code,
        )
        logger.info(
            "ticket issued event=%s tier=%s ticket=%s discount=%s",
            event.id, tier_policy, ticket.id, quote.discount_code,
        )
        return ticket

    def _lost_race_reason(self, event_id: EventId, tier: TicketTier | None) -> BlockReason:
        fresh = self._store.get_event(event_id)
        if fresh is not None:
            fresh_tier = fresh.find_tier(tier.policy) if tier is not None else None
            decision = decide_purchase(fresh, fresh_tier, self._clock.now(), self._tz)
            if decision.block_reason is not None:
                return decision.block_reason
        if tier is not None and tier.stock is not None:
            return BlockReason.TIER_SOLD_OUT
        return BlockReason.SOLD_OUT

    def list_tickets_for_owner(self, owner_id: str) -> list[Ticket]:
        return self._tickets.list_tickets_for_owner(owner_id)
