"""Service wiring for refund handlers."""

from django.conf import settings

from events.domain.clock import SystemClock
from events.stores.django_store import DjangoTicketStore
from refunds.domain import RefundPolicy
from refunds.notifications import (
    NotificationDispatcher,
    NullNotificationDispatcher,
    RqNotificationDispatcher,
)
from refunds.services import RefundService
from refunds.stores.django_store import DjangoRefundStore

_dispatcher: NotificationDispatcher | None = None


def get_notification_dispatcher() -> NotificationDispatcher:
    global _dispatcher
    if _dispatcher is None:
        conf = settings.NOTIFICATIONS
        if conf["ENABLED"]:
            _dispatcher = RqNotificationDispatcher(conf["REDIS_URL"], conf["QUEUE"])
        else:
            _dispatcher = NullNotificationDispatcher()
    return _dispatcher


def get_refund_service() -> RefundService:
    return RefundService(
        refunds=DjangoRefundStore(),
        tickets=DjangoTicketStore(),
        notifier=get_notification_dispatcher(),
        clock=SystemClock(),
        policy=RefundPolicy.from_settings(settings.REFUND_POLICY),
    )
