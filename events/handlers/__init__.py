from events.handlers.views import (
    DiscountCheckView,
    EventDetailView,
    EventStatusView,
    PurchaseCheckView,
    PurchaseView,
    TicketListView,
)

__all__ = [
    "DiscountCheckView",
    "EventDetailView",
    "EventStatusView",
    "PurchaseCheckView",
    "PurchaseView",
    "TicketListView",
]
