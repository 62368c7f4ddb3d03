from __future__ import annotations

from datetime import date

from core.domain import Payment, PaymentStatus, PaymentType
from core.services.reconciliation.debt import (
    RECURRING_SUPPORT_STREAM,
    SUPPORT_AND_DEVELOPMENT_STREAM,
    billing_period,
    estimate_stream_debt,
    project_recurring_support_debt,
    project_support_and_development_debt,
)


def _support(billing_month, amount=1_000_000.0, paid_on=None, status=PaymentStatus.COMPLETED):
    year, month = (int(part) for part in billing_month.split("-"))
    return Payment(
        id=f"rs-{billing_month}",
        amount=amount,
        payment_date=paid_on or date(year, month, 10),
        status=status,
        payment_type=PaymentType.RECURRING_SUPPORT,
        billing_month=billing_month,
    )


def test_recurring_debt_rolls_over_year_boundary():
    debt = project_recurring_support_debt([_support("2024-12")], as_of=date(2025, 2, 1))

    assert debt.stream == RECURRING_SUPPORT_STREAM
    assert debt.missing_months == 2
    assert debt.owed_month_labels == ["Ene", "Feb"]
    assert debt.anchor_month == "2024-12"
    assert debt.insufficient_data is False


def test_recurring_debt_counts_months_after_latest_billing_period():
    payments = [
        _support("2024-01", amount=900_000.0),
        _support("2024-02", amount=1_000_000.0),
        _support("2024-03", amount=1_100_000.0),
    ]

    debt = project_recurring_support_debt(payments, as_of=date(2024, 6, 15))

    assert debt.missing_months == 3
    assert debt.owed_month_labels == ["Abr", "May", "Jun"]
    assert debt.average_payment_amount == 1_000_000.0
    assert debt.estimated_debt_amount == 3_000_000.0
    assert debt.payments_count == 3


def test_anchor_uses_billing_month_not_payment_date():
    # March support paid late in May still anchors on March.
    late = _support("2024-03", paid_on=date(2024, 5, 28))

    debt = project_recurring_support_debt([late], as_of=date(2024, 5, 30))

    assert debt.anchor_month == "2024-03"
    assert debt.owed_month_labels == ["Abr", "May"]


def test_missing_billing_month_falls_back_to_payment_date():
    payment = Payment(
        id="rs-untagged",
        amount=10.0,
        payment_date=date(2024, 8, 3),
        payment_type=PaymentType.RECURRING_SUPPORT,
        billing_month=None,
    )

    assert billing_period(payment) == (2024, 8)


def test_current_stream_reports_zero_months_without_insufficient_data():
    debt = project_recurring_support_debt([_support("2024-06")], as_of=date(2024, 6, 20))

    assert debt.missing_months == 0
    assert debt.owed_month_labels == []
    assert debt.estimated_debt_amount == 0.0
    assert debt.insufficient_data is False


def test_no_qualifying_payments_is_insufficient_data():
    cancelled = _support("2024-01", status=PaymentStatus.OTHER)

    debt = project_recurring_support_debt([cancelled], as_of=date(2024, 6, 15))

    assert debt.insufficient_data is True
    assert debt.missing_months == 0
    assert debt.anchor_month is None
    assert debt.payments_count == 0


def test_support_and_development_uses_latest_payment_date_of_fixed_and_evolutive():
    payments = [
        Payment(id="f", amount=200.0, payment_date=date(2024, 2, 10), payment_type=PaymentType.FIXED),
        Payment(id="e", amount=400.0, payment_date=date(2024, 4, 1), payment_type=PaymentType.SUPPORT_EVOLUTIVE),
        Payment(id="r", amount=9_999.0, payment_date=date(2024, 7, 1), payment_type=PaymentType.RECURRING_SUPPORT),
    ]

    debt = project_support_and_development_debt(payments, as_of=date(2024, 7, 20))

    assert debt.stream == SUPPORT_AND_DEVELOPMENT_STREAM
    assert debt.anchor_month == "2024-04"
    assert debt.owed_month_labels == ["May", "Jun", "Jul"]
    assert debt.average_payment_amount == 300.0
    assert debt.estimated_debt_amount == 900.0


def test_labels_carry_year_when_span_crosses_calendar_years():
    debt = estimate_stream_debt(
        stream="test",
        payments=[_support("2024-11")],
        anchor=(2024, 11),
        as_of=date(2025, 1, 15),
    )

    assert debt.owed_month_labels == ["Dic 2024", "Ene 2025"]
