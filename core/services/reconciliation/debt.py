"""
Debt projection for the two payment streams.

This is a heuristic, not a ledger: each stream is expected to receive one
payment per calendar month, and every month without one is valued at the
average amount of the payments the stream did receive. It does not match
payments against contracted monthly fees.
"""

from __future__ import annotations

from datetime import date
from typing import Iterable, Sequence

from core.domain import Payment, PaymentType
from core.services.reconciliation.helpers import (
    YearMonth,
    as_date,
    is_qualifying_payment,
    month_key,
    months_after,
    owed_month_labels,
    parse_month_key,
    payment_sort_key,
    safe_float,
)
from core.services.reconciliation.models import DebtProjection

RECURRING_SUPPORT_STREAM = "recurring_support"
SUPPORT_AND_DEVELOPMENT_STREAM = "support_and_development"

_SUPPORT_AND_DEVELOPMENT_TYPES = frozenset({PaymentType.FIXED, PaymentType.SUPPORT_EVOLUTIVE})


def recurring_support_payments(payments: Iterable[Payment]) -> list[Payment]:
    rows = [
        p
        for p in payments
        if is_qualifying_payment(p) and PaymentType.coerce(p.payment_type) == PaymentType.RECURRING_SUPPORT
    ]
    rows.sort(key=payment_sort_key)
    return rows


def support_and_development_payments(payments: Iterable[Payment]) -> list[Payment]:
    rows = [
        p
        for p in payments
        if is_qualifying_payment(p) and PaymentType.coerce(p.payment_type) in _SUPPORT_AND_DEVELOPMENT_TYPES
    ]
    rows.sort(key=payment_sort_key)
    return rows


def billing_period(payment: Payment) -> YearMonth | None:
    """Billing period tag of a recurring payment, falling back to its payment-date month."""
    tagged = parse_month_key(payment.billing_month)
    if tagged is not None:
        return tagged
    paid_on = as_date(payment.payment_date)
    if paid_on is None:
        return None
    return paid_on.year, paid_on.month


def latest_billing_period(payments: Iterable[Payment]) -> YearMonth | None:
    periods = [period for period in (billing_period(p) for p in payments) if period is not None]
    return max(periods) if periods else None


def latest_payment_period(payments: Iterable[Payment]) -> YearMonth | None:
    dates = [d for d in (as_date(p.payment_date) for p in payments) if d is not None]
    if not dates:
        return None
    latest = max(dates)
    return latest.year, latest.month


def average_payment_amount(payments: Sequence[Payment]) -> float:
    if not payments:
        return 0.0
    return float(sum(safe_float(p.amount) for p in payments) / len(payments))


def estimate_stream_debt(
    *,
    stream: str,
    payments: Sequence[Payment],
    anchor: YearMonth | None,
    as_of: date,
) -> DebtProjection:
    """Count months after ``anchor`` through the ``as_of`` month and value them at the stream average."""
    if not payments or anchor is None:
        return DebtProjection(
            stream=stream,
            missing_months=0,
            owed_month_labels=[],
            estimated_debt_amount=0.0,
            average_payment_amount=0.0,
            anchor_month=None,
            payments_count=len(payments),
            insufficient_data=True,
        )

    owed = months_after(anchor, (as_of.year, as_of.month))
    average = average_payment_amount(payments)
    return DebtProjection(
        stream=stream,
        missing_months=len(owed),
        owed_month_labels=owed_month_labels(owed),
        estimated_debt_amount=float(len(owed) * average),
        average_payment_amount=average,
        anchor_month=month_key(*anchor),
        payments_count=len(payments),
        insufficient_data=False,
    )


def project_recurring_support_debt(payments: Sequence[Payment], *, as_of: date) -> DebtProjection:
    rows = recurring_support_payments(payments)
    return estimate_stream_debt(
        stream=RECURRING_SUPPORT_STREAM,
        payments=rows,
        anchor=latest_billing_period(rows),
        as_of=as_of,
    )


def project_support_and_development_debt(payments: Sequence[Payment], *, as_of: date) -> DebtProjection:
    rows = support_and_development_payments(payments)
    return estimate_stream_debt(
        stream=SUPPORT_AND_DEVELOPMENT_STREAM,
        payments=rows,
        anchor=latest_payment_period(rows),
        as_of=as_of,
    )


__all__ = [
    "RECURRING_SUPPORT_STREAM",
    "SUPPORT_AND_DEVELOPMENT_STREAM",
    "recurring_support_payments",
    "support_and_development_payments",
    "billing_period",
    "latest_billing_period",
    "latest_payment_period",
    "average_payment_amount",
    "estimate_stream_debt",
    "project_recurring_support_debt",
    "project_support_and_development_debt",
]
