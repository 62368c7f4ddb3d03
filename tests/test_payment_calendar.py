from __future__ import annotations

from datetime import date

from core.domain import Payment, PaymentType
from core.services.reconciliation.payment_calendar import build_missing_payment_calendar, should_have_payment


def _support(amount, on):
    return Payment(
        id=f"rs-{on.isoformat()}",
        amount=amount,
        payment_date=on,
        payment_type=PaymentType.RECURRING_SUPPORT,
    )


def test_current_month_is_due_only_after_cutoff_day():
    assert should_have_payment(month=3, as_of=date(2024, 4, 1), cutoff_day=5) is True
    assert should_have_payment(month=4, as_of=date(2024, 4, 5), cutoff_day=5) is False
    assert should_have_payment(month=4, as_of=date(2024, 4, 6), cutoff_day=5) is True
    assert should_have_payment(month=5, as_of=date(2024, 4, 30), cutoff_day=5) is False


def test_missing_months_use_stream_average_as_placeholder():
    flags = build_missing_payment_calendar(
        year=2024,
        payments=[_support(100.0, date(2024, 1, 3)), _support(300.0, date(2024, 3, 3))],
        as_of=date(2024, 4, 10),
        cutoff_day=5,
        default_placeholder=25_000_000.0,
    )

    assert len(flags) == 12
    missing = [f.label for f in flags if f.is_missing]
    assert missing == ["Feb", "Abr"]
    assert flags[1].placeholder_amount == 200.0
    assert flags[0].paid == 100.0
    assert flags[0].placeholder_amount == 0.0
    assert not any(f.is_missing for f in flags[4:])


def test_stream_without_payments_uses_default_placeholder():
    flags = build_missing_payment_calendar(
        year=2024,
        payments=[],
        as_of=date(2024, 2, 1),
        cutoff_day=5,
        default_placeholder=25_000_000.0,
    )

    assert [f.month for f in flags if f.is_missing] == [1]
    assert flags[0].placeholder_amount == 25_000_000.0


def test_other_years_never_flag_missing_months():
    flags = build_missing_payment_calendar(
        year=2023,
        payments=[],
        as_of=date(2024, 6, 30),
        cutoff_day=5,
        default_placeholder=1.0,
    )

    assert not any(f.is_missing for f in flags)
