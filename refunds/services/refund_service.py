"""Refund service - eligibility, creation and staff transitions.

Every status change is a compare-and-swap against the stored status, so
concurrent staff actions on one request have exactly one winner.
"""

import logging
import uuid
from typing import Any

from events.domain import TicketId
from events.domain.clock import Clock
from events.domain.errors import InvalidIdError, TicketNotFoundError, ValidationError
from events.stores.interfaces import TicketStore
from refunds.domain import (
    Eligibility,
    RefundAction,
    RefundId,
    RefundPolicy,
    RefundReason,
    RefundRequest,
    RefundStatus,
    check_refund_eligibility,
    next_status,
)
from refunds.domain.errors import (
    InvalidTransitionError,
    MissingReasonError,
    NotEligibleError,
    NotTicketOwnerError,
    RefundNotFoundError,
    TicketAlreadyRefundedError,
)
from refunds.domain.lifecycle import clean_custom_reason
from refunds.notifications import NotificationDispatcher, NotificationKind
from refunds.stores.interfaces import RefundStore

logger = logging.getLogger(__name__)


def parse_ticket_id(ticket_id: str) -> TicketId:
    try:
        return TicketId.from_string(ticket_id)
    except (ValueError, TypeError, AttributeError):
        raise InvalidIdError("ticket ID") from None


def parse_refund_id(refund_id: str) -> RefundId:
    try:
        return RefundId.from_string(refund_id)
    except (ValueError, TypeError, AttributeError):
        raise InvalidIdError("refund ID") from None


def parse_reason(reason: str | None) -> RefundReason:
    if not reason:
        raise MissingReasonError("Please select a reason for refund")
    try:
        return RefundReason(reason)
    except ValueError:
        raise ValidationError("Unknown refund reason") from None


def notification_payload(refund: RefundRequest) -> dict[str, Any]:
    return {
        "refund_id": str(refund.id),
        "ticket_id": str(refund.ticket_id),
        "ticket_reference": refund.ticket_reference,
        "event_id": str(refund.event_id),
        "owner_id": refund.owner_id,
        "refundable_amount": str(refund.refundable_amount),
        "reason": refund.display_reason,
        "note": refund.note,
        "status": refund.status.value,
        "status_reason": refund.status_reason,
        "requested_at": refund.requested_at.isoformat(),
    }


class RefundService:
    """Service for refund requests."""

    def __init__(
        self,
        refunds: RefundStore,
        tickets: TicketStore,
        notifier: NotificationDispatcher,
        clock: Clock,
        policy: RefundPolicy = RefundPolicy(),
    ) -> None:
        self._refunds = refunds
        self._tickets = tickets
        self._notifier = notifier
        self._clock = clock
        self._policy = policy

    def _owned_ticket(self, ticket_id: str, caller_id: str):
        ticket = self._tickets.get_ticket(parse_ticket_id(ticket_id))
        if ticket is None:
            raise TicketNotFoundError(ticket_id)
        if ticket.owner_id != caller_id:
            raise NotTicketOwnerError()
        return ticket

    def get_eligibility(self, ticket_id: str, caller_id: str) -> Eligibility:
        """Return the eligibility verdict for one of the caller's tickets."""
        ticket = self._owned_ticket(ticket_id, caller_id)
        return check_refund_eligibility(ticket.purchased_at, self._clock.now(), self._policy)

    def create_refund(
        self,
        ticket_id: str,
        caller_id: str,
        reason: str | None,
        custom_reason: str | None = None,
        note: str | None = None,
    ) -> RefundRequest:
        """Open a refund request for an eligible ticket.

        Raises:
            InvalidIdError: If ticket_id is malformed.
            TicketNotFoundError: If the ticket does not exist.
            NotTicketOwnerError: If the caller does not own the ticket.
            ValidationError: If the reason is missing or unknown, or nothing is refundable.
            NotEligibleError: If the ticket is outside the eligibility window.
            RefundAlreadyOpenError: If the ticket already has an open request.
            TicketAlreadyRefundedError: If the ticket was already refunded.
        """
        ticket = self._owned_ticket(ticket_id, caller_id)
        if self._refunds.has_refunded(ticket.id):
            raise TicketAlreadyRefundedError(str(ticket.id))
        parsed_reason = parse_reason(reason)
        custom = clean_custom_reason(parsed_reason, custom_reason)

        now = self._clock.now()
        eligibility = check_refund_eligibility(ticket.purchased_at, now, self._policy)
        if not eligibility.is_eligible:
            raise NotEligibleError(eligibility.verdict, eligibility.boundary_date)

        amount = self._policy.refundable_amount(ticket.total_paid.amount)
        if amount <= 0:
            raise ValidationError("Nothing to refund after the non-refundable fee")

        refund = RefundRequest(
            id=RefundId(uuid.uuid4()),
            ticket_id=ticket.id,
            ticket_reference=ticket.reference,
            event_id=ticket.event_id,
            owner_id=ticket.owner_id,
            refundable_amount=amount,
            reason=parsed_reason,
            status=RefundStatus.REQUESTED,
            requested_at=now,
            custom_reason=custom,
            note=(note or "").strip() or None,
            updated_at=now,
        )
        self._refunds.create_refund(refund)
        logger.info("refund requested refund=%s ticket=%s amount=%s", refund.id, ticket.id, amount)
        self._dispatch(NotificationKind.REFUND_CREATED, refund)
        return refund

    def get_refund(self, refund_id: str, caller_id: str, is_staff: bool = False) -> RefundRequest:
        refund = self._load(parse_refund_id(refund_id))
        if not is_staff and refund.owner_id != caller_id:
            raise NotTicketOwnerError()
        return refund

    def list_refunds_for_owner(self, owner_id: str) -> list[RefundRequest]:
        return self._refunds.list_refunds_for_owner(owner_id)

    def advance_to_processing(self, refund_id: str) -> RefundRequest:
        """Requested -> Processing; a request already processing is returned unchanged."""
        return self._transition(refund_id, RefundAction.PROCESS)

    def approve(self, refund_id: str) -> RefundRequest:
        """Record the refund as paid out. The payout itself happens elsewhere."""
        return self._transition(refund_id, RefundAction.APPROVE)

    def deny(self, refund_id: str, reason: str | None) -> RefundRequest:
        text = (reason or "").strip()
        if not text:
            raise MissingReasonError("A reason is required to deny a refund")
        return self._transition(refund_id, RefundAction.DENY, status_reason=text)

    def _load(self, refund_id: RefundId) -> RefundRequest:
        refund = self._refunds.get_refund(refund_id)
        if refund is None:
            raise RefundNotFoundError(str(refund_id))
        return refund

    def _transition(
        self, refund_id: str, action: RefundAction, status_reason: str | None = None
    ) -> RefundRequest:
        rid = parse_refund_id(refund_id)
        current = self._load(rid)
        if action is RefundAction.PROCESS and current.status is RefundStatus.PROCESSING:
            return current

        target = next_status(current.status, action)
        swapped = self._refunds.cas_transition(
            rid, current.status, target, at=self._clock.now(), status_reason=status_reason
        )
        if not swapped:
            latest = self._load(rid)
            if action is RefundAction.PROCESS and latest.status is RefundStatus.PROCESSING:
                return latest
            logger.warning(
                "refund transition lost race refund=%s from=%s to=%s now=%s",
                rid, current.status.value, target.value, latest.status.value,
            )
            raise InvalidTransitionError(latest.status, target)

        updated = self._load(rid)
        logger.info("refund %s moved %s -> %s", rid, current.status.value, target.value)
        if target is RefundStatus.REFUNDED:
            self._dispatch(NotificationKind.REFUND_APPROVED, updated)
        elif target is RefundStatus.DENIED:
            self._dispatch(NotificationKind.REFUND_DENIED, updated)
        return updated

    def _dispatch(self, kind: NotificationKind, refund: RefundRequest) -> None:
        try:
            self._notifier.notify(kind, notification_payload(refund))
        except Exception:
            logger.exception("notification %s failed for refund %s", kind.value, refund.id)
