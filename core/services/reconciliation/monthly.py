from __future__ import annotations

from dataclasses import dataclass, field
from typing import Iterable

from core.domain import Payment, PaymentType, TimeEntry
from core.services.reconciliation.helpers import (
    date_month_key,
    is_qualifying_payment,
    month_key,
    month_name,
    safe_float,
)
from core.services.reconciliation.models import MonthBucket


@dataclass
class _MonthAccumulator:
    year: int
    month: int
    hours: float = 0.0
    revenue: float = 0.0
    payments: float = 0.0
    recurring_payments: float = 0.0
    evolutive_payments: float = 0.0
    projects: set[str] = field(default_factory=set)

    @property
    def is_inactive(self) -> bool:
        return self.hours == 0.0 and self.payments == 0.0


def build_monthly_buckets(
    *,
    year: int,
    time_entries: Iterable[TimeEntry],
    payments: Iterable[Payment],
) -> list[MonthBucket]:
    """
    Accumulate hours, billed revenue and qualifying payments per calendar month.

    All twelve months are materialised first; only months with neither hours
    nor payments are dropped from the result. Records whose month falls
    outside ``year`` have no bucket and are ignored.
    """
    buckets: dict[str, _MonthAccumulator] = {
        month_key(year, month): _MonthAccumulator(year=year, month=month) for month in range(1, 13)
    }

    for entry in time_entries:
        bucket = buckets.get(date_month_key(entry.entry_date) or "")
        if bucket is None:
            continue
        hours = safe_float(entry.hours_used)
        bucket.hours += hours
        bucket.revenue += hours * safe_float(entry.hourly_rate)
        if entry.project_name:
            bucket.projects.add(str(entry.project_name))

    for payment in payments:
        if not is_qualifying_payment(payment):
            continue
        bucket = buckets.get(date_month_key(payment.payment_date) or "")
        if bucket is None:
            continue
        amount = safe_float(payment.amount)
        bucket.payments += amount
        payment_type = PaymentType.coerce(payment.payment_type)
        if payment_type == PaymentType.RECURRING_SUPPORT:
            bucket.recurring_payments += amount
        elif payment_type == PaymentType.SUPPORT_EVOLUTIVE:
            bucket.evolutive_payments += amount

    out: list[MonthBucket] = []
    for key in sorted(buckets):
        bucket = buckets[key]
        if bucket.is_inactive:
            continue
        out.append(
            MonthBucket(
                month_key=key,
                year=bucket.year,
                month=bucket.month,
                month_name=month_name(bucket.month),
                hours=float(bucket.hours),
                revenue=float(bucket.revenue),
                payments=float(bucket.payments),
                recurring_payments=float(bucket.recurring_payments),
                evolutive_payments=float(bucket.evolutive_payments),
                balance=float(bucket.payments - bucket.revenue),
                projects=sorted(bucket.projects, key=str.lower),
            )
        )
    return out


__all__ = ["build_monthly_buckets"]
