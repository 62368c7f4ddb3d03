from __future__ import annotations

from datetime import date
from typing import Sequence

from core.domain import Payment
from core.services.reconciliation.debt import average_payment_amount
from core.services.reconciliation.helpers import as_date, month_abbreviation, safe_float
from core.services.reconciliation.models import MonthPaymentFlag


def should_have_payment(*, month: int, as_of: date, cutoff_day: int) -> bool:
    if month < as_of.month:
        return True
    return month == as_of.month and as_of.day > cutoff_day


def build_missing_payment_calendar(
    *,
    year: int,
    payments: Sequence[Payment],
    as_of: date,
    cutoff_day: int,
    default_placeholder: float,
) -> list[MonthPaymentFlag]:
    """
    Per-month paid totals for one payment stream, flagging months that are
    due but received nothing. Only the ``as_of`` year is checked; earlier or
    later years never flag a month.
    """
    paid = {month: 0.0 for month in range(1, 13)}
    for payment in payments:
        paid_on = as_date(payment.payment_date)
        if paid_on is None or paid_on.year != year:
            continue
        paid[paid_on.month] += safe_float(payment.amount)

    placeholder = average_payment_amount(payments) if payments else float(default_placeholder)
    check_year = year == as_of.year

    flags: list[MonthPaymentFlag] = []
    for month in range(1, 13):
        missing = (
            check_year
            and should_have_payment(month=month, as_of=as_of, cutoff_day=cutoff_day)
            and paid[month] == 0.0
        )
        flags.append(
            MonthPaymentFlag(
                month=month,
                label=month_abbreviation(month),
                paid=float(paid[month]),
                is_missing=missing,
                placeholder_amount=float(placeholder) if missing else 0.0,
            )
        )
    return flags


__all__ = ["should_have_payment", "build_missing_payment_calendar"]
