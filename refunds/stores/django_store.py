"""Django ORM implementation of the RefundStore."""

from datetime import datetime

from django.db import DatabaseError, IntegrityError, transaction

from events.domain import EventId, TicketId
from events.domain.errors import DependencyFailureError
from refunds import models as orm
from refunds.domain import RefundId, RefundReason, RefundRequest, RefundStatus
from refunds.domain.errors import RefundAlreadyOpenError, TicketAlreadyRefundedError
from refunds.stores.interfaces import RefundStore


def refund_to_domain(row: orm.RefundRequest) -> RefundRequest:
    return RefundRequest(
        id=RefundId(row.pk),
        ticket_id=TicketId(row.ticket_id),
        ticket_reference=row.ticket_reference,
        event_id=EventId(row.event_id),
        owner_id=row.owner_id,
        refundable_amount=row.refundable_amount,
        reason=RefundReason(row.reason),
        status=RefundStatus(row.status),
        requested_at=row.requested_at,
        custom_reason=row.custom_reason or None,
        note=row.note or None,
        status_reason=row.status_reason or None,
        updated_at=row.updated_at,
    )


class DjangoRefundStore(RefundStore):
    """Relational refund store; uniqueness and CAS are enforced by the database."""

    def create_refund(self, refund: RefundRequest) -> RefundId:
        try:
            with transaction.atomic():
                orm.RefundRequest.objects.create(
                    id=refund.id.value,
                    ticket_id=refund.ticket_id.value,
                    ticket_reference=refund.ticket_reference,
                    event_id=refund.event_id.value,
                    owner_id=refund.owner_id,
                    refundable_amount=refund.refundable_amount,
                    reason=refund.reason.value,
                    custom_reason=refund.custom_reason or "",
                    note=refund.note or "",
                    status=refund.status.value,
                    requested_at=refund.requested_at,
                    updated_at=refund.requested_at,
                )
        except IntegrityError as exc:
            raise RefundAlreadyOpenError(str(refund.ticket_id)) from exc
        except DatabaseError as exc:
            raise DependencyFailureError() from exc
        return refund.id

    def has_refunded(self, ticket_id: TicketId) -> bool:
        try:
            return orm.RefundRequest.objects.filter(
                ticket_id=ticket_id.value, status=RefundStatus.REFUNDED.value
            ).exists()
        except DatabaseError as exc:
            raise DependencyFailureError() from exc

    def get_refund(self, refund_id: RefundId) -> RefundRequest | None:
        try:
            row = orm.RefundRequest.objects.filter(pk=refund_id.value).first()
        except DatabaseError as exc:
            raise DependencyFailureError() from exc
        return refund_to_domain(row) if row is not None else None

    def cas_transition(
        self,
        refund_id: RefundId,
        expected: RefundStatus,
        new: RefundStatus,
        at: datetime,
        status_reason: str | None = None,
    ) -> bool:
        changes = {"status": new.value, "updated_at": at}
        if status_reason is not None:
            changes["status_reason"] = status_reason
        try:
            with transaction.atomic():
                updated = orm.RefundRequest.objects.filter(
                    pk=refund_id.value, status=expected.value
                ).update(**changes)
        except IntegrityError as exc:
            raise TicketAlreadyRefundedError() from exc
        except DatabaseError as exc:
            raise DependencyFailureError() from exc
        return updated == 1

    def list_refunds_for_owner(self, owner_id: str) -> list[RefundRequest]:
        try:
            rows = list(
                orm.RefundRequest.objects.filter(owner_id=owner_id).order_by("-requested_at")
            )
        except DatabaseError as exc:
            raise DependencyFailureError() from exc
        return [refund_to_domain(row) for row in rows]
