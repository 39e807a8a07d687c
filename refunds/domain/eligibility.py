"""Refund eligibility window.

Counting is in whole elapsed days since purchase, so a ticket bought at
10:00 is eligible from 10:00 two days later until the end of the eighth
24-hour period.
"""

from dataclasses import dataclass
from datetime import date, datetime, timedelta
from enum import Enum

from refunds.domain.policy import RefundPolicy

ONE_DAY = timedelta(days=1)


class Verdict(Enum):
    TOO_EARLY = "too_early"
    ELIGIBLE = "eligible"
    EXPIRED = "expired"


@dataclass(frozen=True)
class Eligibility:
    """Outcome of an eligibility check.

    boundary is when requests open (TOO_EARLY) or the last eligible day (ELIGIBLE);
    EXPIRED has none.
    """

    verdict: Verdict
    days_since_purchase: int
    boundary: datetime | None = None

    @property
    def is_eligible(self) -> bool:
        return self.verdict is Verdict.ELIGIBLE

    @property
    def boundary_date(self) -> date | None:
        return self.boundary.date() if self.boundary is not None else None


def days_since(purchased_at: datetime, now: datetime) -> int:
    return (now - purchased_at) // ONE_DAY


def check_refund_eligibility(
    purchased_at: datetime, now: datetime, policy: RefundPolicy = RefundPolicy()
) -> Eligibility:
    days = days_since(purchased_at, now)
    if days < policy.opens_after_days:
        return Eligibility(
            verdict=Verdict.TOO_EARLY,
            days_since_purchase=days,
            boundary=purchased_at + timedelta(days=policy.opens_after_days),
        )
    if days <= policy.closes_after_days:
        return Eligibility(
            verdict=Verdict.ELIGIBLE,
            days_since_purchase=days,
            boundary=purchased_at + timedelta(days=policy.closes_after_days),
        )
    return Eligibility(verdict=Verdict.EXPIRED, days_since_purchase=days)
