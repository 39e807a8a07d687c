from django.urls import path

from events.handlers import (
    DiscountCheckView,
    EventDetailView,
    EventStatusView,
    PurchaseCheckView,
    PurchaseView,
    TicketListView,
)

urlpatterns = [
    path("events/<str:event_id>", EventDetailView.as_view(), name="event-detail"),
    path("events/<str:event_id>/status", EventStatusView.as_view(), name="event-status"),
    path(
        "events/<str:event_id>/purchase-check",
        PurchaseCheckView.as_view(),
        name="event-purchase-check",
    ),
    path(
        "events/<str:event_id>/discount-check",
        DiscountCheckView.as_view(),
        name="event-discount-check",
    ),
    path("events/<str:event_id>/purchases", PurchaseView.as_view(), name="event-purchase"),
    path("tickets", TicketListView.as_view(), name="ticket-list"),
]
