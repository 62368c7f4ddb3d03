from __future__ import annotations

from dataclasses import dataclass
from datetime import date

from core.domain import Payment


@dataclass(frozen=True)
class MonthBucket:
    month_key: str
    year: int
    month: int
    month_name: str
    hours: float
    revenue: float
    payments: float
    recurring_payments: float
    evolutive_payments: float
    balance: float
    projects: list[str]


@dataclass(frozen=True)
class DebtProjection:
    stream: str
    missing_months: int
    owed_month_labels: list[str]
    estimated_debt_amount: float
    average_payment_amount: float
    anchor_month: str | None
    payments_count: int
    insufficient_data: bool


@dataclass(frozen=True)
class ContractProgress:
    contract_id: str
    contract_number: str
    status: str
    total_hours: float
    hourly_rate: float
    direct_hours: float
    equivalent_hours: float
    effective_hours: float
    remaining_hours: float
    hours_progress: float
    budget_total: float
    budget_used: float
    budget_progress: float
    total_paid: float
    pending_amount: float


@dataclass(frozen=True)
class MonthPaymentFlag:
    month: int
    label: str
    paid: float
    is_missing: bool
    placeholder_amount: float


@dataclass(frozen=True)
class ReconciliationSummary:
    year: int
    as_of: date
    months: list[MonthBucket]
    total_hours: float
    total_equivalent_hours: float
    total_effective_hours: float
    annual_allocation: float
    hours_remaining: float
    average_hours_per_month: float
    total_revenue: float
    total_paid: float
    pending_amount: float
    recurring_support_debt: DebtProjection
    support_and_development_debt: DebtProjection
    recurrent_support_payments: list[Payment]
    support_and_development_payments: list[Payment]
    contracts: list[ContractProgress]
    recurring_support_calendar: list[MonthPaymentFlag]
    support_and_development_calendar: list[MonthPaymentFlag]
    notes: list[str]


__all__ = [
    "MonthBucket",
    "DebtProjection",
    "ContractProgress",
    "MonthPaymentFlag",
    "ReconciliationSummary",
]
