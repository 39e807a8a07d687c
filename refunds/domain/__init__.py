from refunds.domain.eligibility import Eligibility, Verdict, check_refund_eligibility
from refunds.domain.lifecycle import RefundAction, can_transition, next_status
from refunds.domain.models import (
    OPEN_STATUSES,
    TERMINAL_STATUSES,
    RefundId,
    RefundReason,
    RefundRequest,
    RefundStatus,
)
from refunds.domain.policy import RefundPolicy

__all__ = [
    "RefundId",
    "RefundReason",
    "RefundRequest",
    "RefundStatus",
    "OPEN_STATUSES",
    "TERMINAL_STATUSES",
    "RefundPolicy",
    "Eligibility",
    "Verdict",
    "check_refund_eligibility",
    "RefundAction",
    "can_transition",
    "next_status",
]
