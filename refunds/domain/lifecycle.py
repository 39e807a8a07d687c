"""Refund request state machine.

Requested -> Processing -> Refunded | Denied, with staff allowed to decide
straight from Requested. Refunded and Denied are sinks.
"""

from enum import Enum

from refunds.domain.errors import InvalidTransitionError, MissingReasonError
from refunds.domain.models import RefundReason, RefundStatus


class RefundAction(Enum):
    PROCESS = "process"
    APPROVE = "approve"
    DENY = "deny"


TARGET_STATUS: dict[RefundAction, RefundStatus] = {
    RefundAction.PROCESS: RefundStatus.PROCESSING,
    RefundAction.APPROVE: RefundStatus.REFUNDED,
    RefundAction.DENY: RefundStatus.DENIED,
}

ALLOWED_TRANSITIONS: dict[RefundStatus, set[RefundStatus]] = {
    RefundStatus.REQUESTED: {RefundStatus.PROCESSING, RefundStatus.REFUNDED, RefundStatus.DENIED},
    RefundStatus.PROCESSING: {RefundStatus.REFUNDED, RefundStatus.DENIED},
    RefundStatus.REFUNDED: set(),
    RefundStatus.DENIED: set(),
}


def can_transition(src: RefundStatus, dst: RefundStatus) -> bool:
    return dst in ALLOWED_TRANSITIONS.get(src, set())


def next_status(current: RefundStatus, action: RefundAction) -> RefundStatus:
    """Return the status `action` moves `current` to.

    Raises:
        InvalidTransitionError: If the move is not allowed.
    """
    target = TARGET_STATUS[action]
    if not can_transition(current, target):
        raise InvalidTransitionError(current, target)
    return target


def clean_custom_reason(reason: RefundReason, custom_reason: str | None) -> str | None:
    """Return the custom reason to store, or None when reason is not Other.

    Raises:
        MissingReasonError: If reason is Other and no custom reason is given.
    """
    if reason is not RefundReason.OTHER:
        return None
    text = (custom_reason or "").strip()
    if not text:
        raise MissingReasonError("Please provide a custom reason")
    return text
