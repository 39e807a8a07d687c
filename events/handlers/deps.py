"""Service wiring for HTTP handlers."""

from zoneinfo import ZoneInfo

from django.conf import settings

from events.domain.clock import SystemClock
from events.services import EventService
from events.stores.django_store import DjangoEventStore, DjangoTicketStore


def local_tz() -> ZoneInfo:
    return ZoneInfo(settings.TIME_ZONE)


def get_event_service() -> EventService:
    return EventService(
        store=DjangoEventStore(),
        tickets=DjangoTicketStore(),
        clock=SystemClock(),
        tz=local_tz(),
        platform_fee=settings.PLATFORM_FEE,
    )
