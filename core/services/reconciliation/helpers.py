from __future__ import annotations

import math
from datetime import date, datetime

from core.domain import QUALIFYING_PAYMENT_STATUSES, Payment, PaymentStatus

MONTH_NAMES_ES = (
    "enero",
    "febrero",
    "marzo",
    "abril",
    "mayo",
    "junio",
    "julio",
    "agosto",
    "septiembre",
    "octubre",
    "noviembre",
    "diciembre",
)

MONTH_ABBREVIATIONS_ES = (
    "Ene",
    "Feb",
    "Mar",
    "Abr",
    "May",
    "Jun",
    "Jul",
    "Ago",
    "Sep",
    "Oct",
    "Nov",
    "Dic",
)

YearMonth = tuple[int, int]


def safe_float(value: object) -> float:
    """Coerce a possibly missing or malformed numeric field to a finite float (0.0 on failure)."""
    if value is None:
        return 0.0
    try:
        number = float(value)  # type: ignore[arg-type]
    except (TypeError, ValueError):
        return 0.0
    if math.isnan(number) or math.isinf(number):
        return 0.0
    return number


def as_date(value: object) -> date | None:
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if isinstance(value, str):
        try:
            return date.fromisoformat(value.strip()[:10])
        except ValueError:
            return None
    return None


def month_key(year: int, month: int) -> str:
    return f"{year}-{month:02d}"


def date_month_key(value: object) -> str | None:
    d = as_date(value)
    if d is None:
        return None
    return month_key(d.year, d.month)


def parse_month_key(value: object) -> YearMonth | None:
    text = str(value or "").strip()
    if len(text) < 7 or text[4] != "-":
        return None
    try:
        year = int(text[:4])
        month = int(text[5:7])
    except ValueError:
        return None
    if not 1 <= month <= 12:
        return None
    return year, month


def next_month(year: int, month: int) -> YearMonth:
    if month == 12:
        return year + 1, 1
    return year, month + 1


def months_after(anchor: YearMonth, through: YearMonth) -> list[YearMonth]:
    """Calendar months strictly after ``anchor`` up to and including ``through``."""
    out: list[YearMonth] = []
    current = next_month(*anchor)
    while current <= through:
        out.append(current)
        current = next_month(*current)
    return out


def month_abbreviation(month: int) -> str:
    return MONTH_ABBREVIATIONS_ES[month - 1]


def month_name(month: int) -> str:
    return MONTH_NAMES_ES[month - 1]


def owed_month_labels(months: list[YearMonth]) -> list[str]:
    if not months:
        return []
    years = {year for year, _ in months}
    if len(years) == 1:
        return [month_abbreviation(month) for _, month in months]
    return [f"{month_abbreviation(month)} {year}" for year, month in months]


def is_qualifying_payment(payment: Payment) -> bool:
    return PaymentStatus.coerce(payment.status) in QUALIFYING_PAYMENT_STATUSES


def clamp_percent(value: float) -> float:
    return float(min(100.0, max(0.0, value)))


def payment_sort_key(payment: Payment) -> tuple[date, str]:
    return (as_date(payment.payment_date) or date.min, str(payment.id))


__all__ = [
    "MONTH_NAMES_ES",
    "MONTH_ABBREVIATIONS_ES",
    "YearMonth",
    "safe_float",
    "as_date",
    "month_key",
    "date_month_key",
    "parse_month_key",
    "next_month",
    "months_after",
    "month_abbreviation",
    "month_name",
    "owed_month_labels",
    "is_qualifying_payment",
    "clamp_percent",
    "payment_sort_key",
]
