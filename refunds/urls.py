from django.urls import path

from refunds.handlers import (
    RefundApproveView,
    RefundDenyView,
    RefundDetailView,
    RefundEligibilityView,
    RefundListView,
    RefundProcessView,
)

urlpatterns = [
    path(
        "tickets/<str:ticket_id>/refund-eligibility",
        RefundEligibilityView.as_view(),
        name="refund-eligibility",
    ),
    path("refunds", RefundListView.as_view(), name="refund-list"),
    path("refunds/<str:refund_id>", RefundDetailView.as_view(), name="refund-detail"),
    path("refunds/<str:refund_id>/process", RefundProcessView.as_view(), name="refund-process"),
    path("refunds/<str:refund_id>/approve", RefundApproveView.as_view(), name="refund-approve"),
    path("refunds/<str:refund_id>/deny", RefundDenyView.as_view(), name="refund-deny"),
]
