"""RQ job handlers that deliver refund notifications by email."""

import logging
from typing import Any, Callable, Mapping

from django.conf import settings
from django.contrib.auth import get_user_model
from django.core.mail import send_mail

logger = logging.getLogger("refunds.worker")


def _owner_email(owner_id: str) -> str | None:
    user = get_user_model().objects.filter(pk=owner_id).first()
    return getattr(user, "email", None) or None


def _support_email() -> str:
    return settings.NOTIFICATIONS["SUPPORT_EMAIL"]


def on_refund_created(payload: Mapping[str, Any]) -> None:
    refund_id = payload.get("refund_id")
    body = (
        f"Refund ID: {refund_id}\n"
        f"Ticket reference: {payload.get('ticket_reference')}\n"
        f"Refundable amount: {payload.get('refundable_amount')}\n"
        f"Reason: {payload.get('reason')}\n"
        f"More information: {payload.get('note') or '-'}\n"
        f"Requested at: {payload.get('requested_at')}\n"
    )
    send_mail("New Refund Request", body, None, [_support_email()])
    email = _owner_email(payload.get("owner_id", ""))
    if email:
        send_mail(
            "Refund request received",
            "We will review your request and process it within 3-5 business days.",
            None,
            [email],
        )


def on_refund_approved(payload: Mapping[str, Any]) -> None:
    email = _owner_email(payload.get("owner_id", ""))
    if email:
        send_mail(
            "Your refund has been approved",
            f"{payload.get('refundable_amount')} will be returned for ticket "
            f"{payload.get('ticket_reference')}.",
            None,
            [email],
        )


def on_refund_denied(payload: Mapping[str, Any]) -> None:
    email = _owner_email(payload.get("owner_id", ""))
    if email:
        send_mail(
            "Your refund request was not approved",
            f"Reason: {payload.get('status_reason')}\nPlease contact {_support_email()}.",
            None,
            [email],
        )


EVENT_HANDLERS: dict[str, Callable[[Mapping[str, Any]], None]] = {
    "refund.created": on_refund_created,
    "refund.approved": on_refund_approved,
    "refund.denied": on_refund_denied,
}


def handle_notification(kind: str, payload: Mapping[str, Any] | None = None) -> None:
    handler = EVENT_HANDLERS.get(kind)
    if handler is None:
        logger.warning("unknown notification kind=%s", kind)
        return
    logger.info("delivering notification kind=%s refund=%s", kind, (payload or {}).get("refund_id"))
    handler(payload or {})
