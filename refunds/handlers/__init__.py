from refunds.handlers.views import (
    RefundApproveView,
    RefundDenyView,
    RefundDetailView,
    RefundEligibilityView,
    RefundListView,
    RefundProcessView,
)

__all__ = [
    "RefundApproveView",
    "RefundDenyView",
    "RefundDetailView",
    "RefundEligibilityView",
    "RefundListView",
    "RefundProcessView",
]
