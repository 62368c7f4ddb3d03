from __future__ import annotations

from datetime import date
from typing import Iterable, Sequence

from core.domain import Client, Contract, ContractStatus, Payment, PaymentType, TimeEntry
from core.services.reconciliation.helpers import as_date, clamp_percent, is_qualifying_payment, safe_float
from core.services.reconciliation.models import ContractProgress
from core.services.reconciliation.policy import ReconciliationPolicy


def total_raw_hours(time_entries: Iterable[TimeEntry]) -> float:
    return float(sum(safe_float(entry.hours_used) for entry in time_entries))


def equivalent_hours(amount: object, hourly_rate: object) -> float:
    rate = safe_float(hourly_rate)
    if rate <= 0.0:
        return 0.0
    return safe_float(amount) / rate


def default_contract(contracts: Sequence[Contract]) -> Contract | None:
    """Contract that receives payments carrying no explicit contract reference."""
    if not contracts:
        return None
    if len(contracts) == 1:
        return contracts[0]
    active = [c for c in contracts if ContractStatus.coerce(c.status) == ContractStatus.ACTIVE]
    pool = active or list(contracts)
    return max(pool, key=lambda c: (as_date(c.start_date) or date.min, str(c.id)))


def linked_contract_id(payment: Payment) -> str | None:
    """Explicit contract reference, else the contract of the payment's project."""
    return payment.contract_id or payment.project_contract_id or None


def resolve_payment_contract(
    payment: Payment,
    *,
    contracts_by_id: dict[str, Contract],
    fallback: Contract | None,
) -> Contract | None:
    if payment.contract_id:
        return contracts_by_id.get(payment.contract_id)
    if payment.project_contract_id in contracts_by_id:
        return contracts_by_id[payment.project_contract_id]
    return fallback


def equivalent_hours_by_contract(
    *,
    payments: Iterable[Payment],
    contracts: Sequence[Contract],
) -> dict[str, float]:
    contracts_by_id = {c.id: c for c in contracts}
    fallback = default_contract(contracts)
    totals: dict[str, float] = {c.id: 0.0 for c in contracts}
    for payment in payments:
        if not is_qualifying_payment(payment):
            continue
        if PaymentType.coerce(payment.payment_type) != PaymentType.RECURRING_SUPPORT:
            continue
        contract = resolve_payment_contract(payment, contracts_by_id=contracts_by_id, fallback=fallback)
        if contract is None:
            continue
        totals[contract.id] += equivalent_hours(payment.amount, contract.hourly_rate)
    return totals


def build_contract_progress(
    *,
    contracts: Sequence[Contract],
    time_entries: Sequence[TimeEntry],
    payments: Sequence[Payment],
    equivalent_by_contract: dict[str, float],
) -> list[ContractProgress]:
    contracts_by_id = {c.id: c for c in contracts}
    fallback = default_contract(contracts)
    paid: dict[str, float] = {c.id: 0.0 for c in contracts}
    for payment in payments:
        if not is_qualifying_payment(payment):
            continue
        contract = resolve_payment_contract(payment, contracts_by_id=contracts_by_id, fallback=fallback)
        if contract is not None:
            paid[contract.id] += safe_float(payment.amount)

    rows: list[ContractProgress] = []
    ordered = sorted(
        contracts,
        key=lambda c: (as_date(c.start_date) or date.min, str(c.contract_number or "").lower(), str(c.id)),
    )
    for contract in ordered:
        entries = [e for e in time_entries if e.contract_id == contract.id]
        direct_hours = total_raw_hours(entries)
        budget_used = float(sum(safe_float(e.hours_used) * safe_float(e.hourly_rate) for e in entries))
        equivalent = float(equivalent_by_contract.get(contract.id, 0.0))
        effective = direct_hours + equivalent
        total_hours = safe_float(contract.total_hours)
        hourly_rate = safe_float(contract.hourly_rate)
        budget_total = total_hours * hourly_rate
        total_paid = float(paid.get(contract.id, 0.0))
        status = ContractStatus.coerce(contract.status)
        rows.append(
            ContractProgress(
                contract_id=contract.id,
                contract_number=str(contract.contract_number or ""),
                status=status.value,
                total_hours=total_hours,
                hourly_rate=hourly_rate,
                direct_hours=direct_hours,
                equivalent_hours=equivalent,
                effective_hours=effective,
                remaining_hours=float(max(0.0, total_hours - effective)),
                hours_progress=clamp_percent(effective / total_hours * 100.0) if total_hours > 0 else 0.0,
                budget_total=budget_total,
                budget_used=budget_used,
                budget_progress=clamp_percent(budget_used / budget_total * 100.0) if budget_total > 0 else 0.0,
                total_paid=total_paid,
                pending_amount=float(max(0.0, budget_used - total_paid)),
            )
        )
    return rows


def resolve_annual_allocation(
    *,
    client: Client | None,
    override: float | None,
    policy: ReconciliationPolicy,
) -> float:
    if override is not None and safe_float(override) > 0.0:
        return safe_float(override)
    annual = safe_float(getattr(client, "annual_hours", None)) if client is not None else 0.0
    if annual > 0.0:
        return annual
    return float(policy.default_annual_hours)


def hours_remaining(annual_allocation: float, effective_hours: float) -> float:
    return float(max(0.0, annual_allocation - effective_hours))


__all__ = [
    "total_raw_hours",
    "equivalent_hours",
    "default_contract",
    "linked_contract_id",
    "resolve_payment_contract",
    "equivalent_hours_by_contract",
    "build_contract_progress",
    "resolve_annual_allocation",
    "hours_remaining",
]
