"""Event status evaluation.

Every fact is recomputed from the event snapshot and the supplied clock
reading; nothing here reads global state or caches results.
"""

from dataclasses import dataclass
from datetime import date, datetime, time, tzinfo

from events.domain.models import Event


@dataclass(frozen=True)
class EventStatus:
    """Independent status facts; an event can be today and sold out at once."""

    is_today: bool
    is_passed: bool
    is_sold_out: bool
    is_sale_ended: bool

    @property
    def label(self) -> str:
        """Single badge for listings: passed, sold_out, sale_ended, today or upcoming."""
        if self.is_passed:
            return "passed"
        if self.is_sold_out:
            return "sold_out"
        if self.is_sale_ended:
            return "sale_ended"
        return "today" if self.is_today else "upcoming"


def _local_date(moment: datetime, tz: tzinfo) -> date:
    return moment.astimezone(tz).date()


def _end_of_day(day: date, tz: tzinfo) -> datetime:
    return datetime.combine(day, time.max, tzinfo=tz)


def effective_end(event: Event, tz: tzinfo) -> datetime:
    """Moment after which the event counts as passed."""
    if event.end_at is None:
        return _end_of_day(_local_date(event.start_at, tz), tz)
    end_day = _local_date(event.end_at, tz)
    if event.end_time is not None:
        return datetime.combine(end_day, event.end_time.as_time(), tzinfo=tz)
    return _end_of_day(end_day, tz)


def effective_start(event: Event, tz: tzinfo) -> datetime:
    """Start moment with the start_time overlay applied, if any."""
    if event.start_time is None:
        return event.start_at
    start_day = _local_date(event.start_at, tz)
    return datetime.combine(start_day, event.start_time.as_time(), tzinfo=tz)


def is_today(event: Event, now: datetime, tz: tzinfo) -> bool:
    return _local_date(now, tz) == _local_date(effective_start(event, tz), tz)


def is_passed(event: Event, now: datetime, tz: tzinfo) -> bool:
    return now > effective_end(event, tz)


def is_sold_out(event: Event) -> bool:
    capacity = event.capacity
    return capacity is not None and capacity.enabled and capacity.sold >= capacity.max


def is_sale_ended(event: Event, now: datetime) -> bool:
    window = event.sale_window
    if window is None or not window.enabled or window.stop_at is None:
        return False
    return now > window.stop_at


def evaluate_event_status(event: Event, now: datetime, tz: tzinfo) -> EventStatus:
    return EventStatus(
        is_today=is_today(event, now, tz),
        is_passed=is_passed(event, now, tz),
        is_sold_out=is_sold_out(event),
        is_sale_ended=is_sale_ended(event, now),
    )
