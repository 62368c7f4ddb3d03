from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import date
from typing import Sequence

from core.domain import Client, Contract, Payment, TimeEntry
from core.exceptions import ValidationError
from core.services.reconciliation.debt import (
    project_recurring_support_debt,
    project_support_and_development_debt,
    recurring_support_payments,
    support_and_development_payments,
)
from core.services.reconciliation.helpers import is_qualifying_payment
from core.services.reconciliation.hours import (
    build_contract_progress,
    equivalent_hours_by_contract,
    hours_remaining,
    resolve_annual_allocation,
    total_raw_hours,
)
from core.services.reconciliation.models import ReconciliationSummary
from core.services.reconciliation.monthly import build_monthly_buckets
from core.services.reconciliation.payment_calendar import build_missing_payment_calendar
from core.services.reconciliation.policy import DEFAULT_POLICY, ReconciliationPolicy

logger = logging.getLogger(__name__)

MIN_YEAR = 1900
MAX_YEAR = 9998


@dataclass(frozen=True)
class ReconciliationInput:
    year: int | None
    time_entries: Sequence[TimeEntry] = ()
    payments: Sequence[Payment] = ()
    contracts: Sequence[Contract] = ()
    client: Client | None = None
    annual_allocation_override: float | None = None
    as_of: date | None = None


def require_year(value: object) -> int:
    if value is None or value == "":
        raise ValidationError("A reconciliation year is required.", code="YEAR_REQUIRED")
    if isinstance(value, bool):
        raise ValidationError(f"Invalid reconciliation year: {value!r}", code="YEAR_INVALID")
    try:
        year = int(value)  # type: ignore[arg-type]
    except (TypeError, ValueError):
        raise ValidationError(f"Invalid reconciliation year: {value!r}", code="YEAR_INVALID") from None
    if not MIN_YEAR <= year <= MAX_YEAR:
        raise ValidationError(f"Invalid reconciliation year: {value!r}", code="YEAR_INVALID")
    return year


def reconcile(
    request: ReconciliationInput,
    *,
    policy: ReconciliationPolicy = DEFAULT_POLICY,
) -> ReconciliationSummary:
    """
    Reconcile one client's time entries and payments for a calendar year.

    The caller supplies records already limited to the year; this function
    only re-keys them by month. ``request.as_of`` drives every date-relative
    figure (debt months, missing-payment flags); when omitted the system
    date is read once here and nowhere else.
    """
    year = require_year(request.year)
    as_of = request.as_of or date.today()
    entries = list(request.time_entries)
    payments = list(request.payments)
    contracts = list(request.contracts)

    months = build_monthly_buckets(year=year, time_entries=entries, payments=payments)

    total_hours = total_raw_hours(entries)
    equivalent_by_contract = equivalent_hours_by_contract(payments=payments, contracts=contracts)
    total_equivalent = float(sum(equivalent_by_contract.values()))
    total_effective = total_hours + total_equivalent
    annual_allocation = resolve_annual_allocation(
        client=request.client,
        override=request.annual_allocation_override,
        policy=policy,
    )

    total_revenue = float(sum(month.revenue for month in months))
    total_paid = float(sum(month.payments for month in months))

    recurring_rows = recurring_support_payments(payments)
    support_rows = support_and_development_payments(payments)

    summary = ReconciliationSummary(
        year=year,
        as_of=as_of,
        months=months,
        total_hours=total_hours,
        total_equivalent_hours=total_equivalent,
        total_effective_hours=total_effective,
        annual_allocation=annual_allocation,
        hours_remaining=hours_remaining(annual_allocation, total_effective),
        average_hours_per_month=total_hours / 12.0,
        total_revenue=total_revenue,
        total_paid=total_paid,
        pending_amount=float(max(0.0, total_revenue - total_paid)),
        recurring_support_debt=project_recurring_support_debt(payments, as_of=as_of),
        support_and_development_debt=project_support_and_development_debt(payments, as_of=as_of),
        recurrent_support_payments=recurring_rows,
        support_and_development_payments=support_rows,
        contracts=build_contract_progress(
            contracts=contracts,
            time_entries=entries,
            payments=payments,
            equivalent_by_contract=equivalent_by_contract,
        ),
        recurring_support_calendar=build_missing_payment_calendar(
            year=year,
            payments=recurring_rows,
            as_of=as_of,
            cutoff_day=policy.missing_payment_cutoff_day,
            default_placeholder=policy.missing_payment_placeholder,
        ),
        support_and_development_calendar=build_missing_payment_calendar(
            year=year,
            payments=support_rows,
            as_of=as_of,
            cutoff_day=policy.missing_payment_cutoff_day,
            default_placeholder=policy.missing_payment_placeholder,
        ),
        notes=[
            "Average hours per month divides the yearly total by 12.",
            "Debt projections assume one payment per month per stream, valued at the stream's average payment.",
        ],
    )
    logger.debug(
        "Reconciled year %s: %s entries, %s payments (%s qualifying), %.2f effective hours",
        year,
        len(entries),
        len(payments),
        sum(1 for p in payments if is_qualifying_payment(p)),
        total_effective,
    )
    return summary


__all__ = ["ReconciliationInput", "reconcile", "require_year"]
