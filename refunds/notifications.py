"""Refund notification dispatch.

Dispatch is best effort: a refund's validity never depends on a message
being delivered, so enqueue failures are logged and dropped.
"""

import logging
from abc import ABC, abstractmethod
from enum import Enum
from typing import Any, Mapping

import redis
from rq import Queue, Retry

logger = logging.getLogger(__name__)

HANDLER_PATH = "refunds.workers.handle_notification"


class NotificationKind(Enum):
    REFUND_CREATED = "refund.created"
    REFUND_APPROVED = "refund.approved"
    REFUND_DENIED = "refund.denied"


class NotificationDispatcher(ABC):
    """Interface for fire-and-forget notifications."""

    @abstractmethod
    def notify(self, kind: NotificationKind, payload: Mapping[str, Any]) -> None:
        ...


class NullNotificationDispatcher(NotificationDispatcher):
    """Dispatcher used when notifications are switched off."""

    def notify(self, kind: NotificationKind, payload: Mapping[str, Any]) -> None:
        logger.debug("notifications disabled, dropping %s", kind.value)


class RqNotificationDispatcher(NotificationDispatcher):
    """Enqueue notifications on an RQ queue for the worker to deliver."""

    def __init__(self, redis_url: str, queue_name: str, job_timeout: int = 60) -> None:
        self._redis_url = redis_url
        self._queue_name = queue_name
        self._job_timeout = job_timeout
        self._queue: Queue | None = None

    def _get_queue(self) -> Queue:
        if self._queue is None:
            self._queue = Queue(self._queue_name, connection=redis.from_url(self._redis_url))
        return self._queue

    def notify(self, kind: NotificationKind, payload: Mapping[str, Any]) -> None:
        try:
            job = self._get_queue().enqueue(
                HANDLER_PATH,
                kind.value,
                dict(payload),
                job_timeout=self._job_timeout,
                retry=Retry(max=3, interval=[5, 15, 30]),
            )
        except Exception:
            logger.exception("failed to enqueue notification %s", kind.value)
            return
        logger.info("notification queued kind=%s job=%s", kind.value, job.id)
