"""Cache keys for event read models.

Only the event detail payload is cached. Status and purchase decisions are
always computed from fresh store reads.
"""

from django.conf import settings
from django.core.cache import cache


def event_detail_key(event_id) -> str:
    return f"events:{event_id}"


def get_event_detail(event_id) -> dict | None:
    return cache.get(event_detail_key(event_id))


def set_event_detail(event_id, payload: dict) -> None:
    cache.set(event_detail_key(event_id), payload, settings.EVENT_CACHE_TTL)


def invalidate_event(event_id) -> None:
    cache.delete(event_detail_key(event_id))
