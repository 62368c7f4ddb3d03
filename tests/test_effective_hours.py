from __future__ import annotations

import math
from datetime import date

from core.domain import Client, Contract, ContractStatus, Payment, PaymentStatus, PaymentType, TimeEntry
from core.services.reconciliation.hours import (
    build_contract_progress,
    default_contract,
    equivalent_hours,
    equivalent_hours_by_contract,
    linked_contract_id,
    hours_remaining,
    resolve_annual_allocation,
    total_raw_hours,
)
from core.services.reconciliation.policy import DEFAULT_POLICY, ReconciliationPolicy


def _contract(contract_id, rate, total_hours=100.0, start=date(2024, 1, 1), status=ContractStatus.ACTIVE):
    return Contract(
        id=contract_id,
        client_id="c-1",
        contract_number=contract_id.upper(),
        total_hours=total_hours,
        hourly_rate=rate,
        start_date=start,
        status=status,
    )


def _support(amount, contract_id=None, pid="pay-1", status=PaymentStatus.COMPLETED, project_contract_id=None):
    return Payment(
        id=pid,
        amount=amount,
        payment_date=date(2024, 2, 1),
        status=status,
        payment_type=PaymentType.RECURRING_SUPPORT,
        billing_month="2024-02",
        contract_id=contract_id,
        project_contract_id=project_contract_id,
    )


def test_equivalent_hours_is_zero_for_missing_or_zero_rate():
    assert equivalent_hours(1_000_000, 0) == 0.0
    assert equivalent_hours(1_000_000, None) == 0.0
    assert equivalent_hours(1_000_000, -5) == 0.0
    assert equivalent_hours(1_000_000, 100_000) == 10.0


def test_zero_rate_contract_contributes_no_equivalent_hours():
    totals = equivalent_hours_by_contract(
        payments=[_support(1_000_000.0)],
        contracts=[_contract("k-0", rate=0.0)],
    )

    assert totals == {"k-0": 0.0}
    assert not math.isinf(sum(totals.values()))


def test_only_qualifying_recurring_payments_buy_equivalent_hours():
    fixed = Payment(
        id="pay-fixed",
        amount=500_000.0,
        payment_date=date(2024, 3, 1),
        payment_type=PaymentType.FIXED,
    )
    totals = equivalent_hours_by_contract(
        payments=[
            _support(200_000.0, pid="a"),
            _support(300_000.0, pid="b", status=PaymentStatus.OTHER),
            fixed,
        ],
        contracts=[_contract("k-1", rate=100_000.0)],
    )

    assert totals == {"k-1": 2.0}


def test_payments_follow_explicit_contract_or_the_latest_active_one():
    older = _contract("k-old", rate=50_000.0, start=date(2023, 1, 1))
    newer = _contract("k-new", rate=100_000.0, start=date(2024, 1, 1))
    closed = _contract("k-closed", rate=10_000.0, start=date(2024, 6, 1), status=ContractStatus.COMPLETED)

    assert default_contract([older, newer, closed]) is newer

    totals = equivalent_hours_by_contract(
        payments=[
            _support(100_000.0, contract_id="k-old", pid="a"),
            _support(100_000.0, pid="b"),
            _support(100_000.0, contract_id="unknown", pid="c"),
        ],
        contracts=[older, newer, closed],
    )

    assert totals == {"k-old": 2.0, "k-new": 1.0, "k-closed": 0.0}


def test_payments_without_contract_follow_their_projects_contract():
    older = _contract("k-old", rate=50_000.0, start=date(2023, 1, 1))
    newer = _contract("k-new", rate=100_000.0, start=date(2024, 5, 1))
    payments = [
        _support(100_000.0, project_contract_id="k-old", pid="a"),
        _support(100_000.0, contract_id="k-new", project_contract_id="k-old", pid="b"),
        _support(100_000.0, project_contract_id="elsewhere", pid="c"),
    ]

    totals = equivalent_hours_by_contract(payments=payments, contracts=[older, newer])
    rows = build_contract_progress(
        contracts=[older, newer],
        time_entries=[],
        payments=payments,
        equivalent_by_contract=totals,
    )

    assert totals == {"k-old": 2.0, "k-new": 2.0}
    assert {row.contract_id: row.total_paid for row in rows} == {"k-old": 100_000.0, "k-new": 200_000.0}
    assert [linked_contract_id(p) for p in payments] == ["k-old", "k-new", "elsewhere"]


def test_contract_progress_rows_clamp_percentages_and_pending():
    contract = _contract("k-1", rate=100_000.0, total_hours=10.0)
    entries = [
        TimeEntry(
            id=f"te-{i}",
            project_id="p-1",
            hours_used=6.0,
            entry_date=date(2024, 1, 10 + i),
            hourly_rate=100_000.0,
            project_name="Portal",
            contract_id="k-1",
        )
        for i in range(3)
    ]
    payments = [_support(300_000.0, contract_id="k-1")]

    [row] = build_contract_progress(
        contracts=[contract],
        time_entries=entries,
        payments=payments,
        equivalent_by_contract={"k-1": 3.0},
    )

    assert row.direct_hours == 18.0
    assert row.effective_hours == 21.0
    assert row.remaining_hours == 0.0
    assert row.hours_progress == 100.0
    assert row.budget_total == 1_000_000.0
    assert row.budget_used == 1_800_000.0
    assert row.budget_progress == 100.0
    assert row.total_paid == 300_000.0
    assert row.pending_amount == 1_500_000.0
    assert row.status == "active"


def test_contract_progress_handles_empty_contract():
    [row] = build_contract_progress(
        contracts=[_contract("k-1", rate=0.0, total_hours=0.0)],
        time_entries=[],
        payments=[],
        equivalent_by_contract={},
    )

    assert row.hours_progress == 0.0
    assert row.budget_progress == 0.0
    assert row.pending_amount == 0.0


def test_annual_allocation_prefers_override_then_client_then_policy():
    client = Client(id="c-1", name="Acme", annual_hours=500.0)
    policy = ReconciliationPolicy(default_annual_hours=1200.0)

    assert resolve_annual_allocation(client=client, override=80.0, policy=policy) == 80.0
    assert resolve_annual_allocation(client=client, override=0, policy=policy) == 500.0
    assert resolve_annual_allocation(client=Client(id="c-2", name="B"), override=None, policy=policy) == 1200.0
    assert resolve_annual_allocation(client=None, override=None, policy=DEFAULT_POLICY) == 1800.0


def test_hours_remaining_never_negative_and_raw_total_sums_all_entries():
    assert hours_remaining(10.0, 25.0) == 0.0
    assert hours_remaining(10.0, 4.0) == 6.0
    entries = [
        TimeEntry(id="a", project_id="p", hours_used=1.5, entry_date=date(2024, 1, 1)),
        TimeEntry(id="b", project_id="p", hours_used="bad", entry_date=date(2024, 1, 2)),
        TimeEntry(id="c", project_id="p", hours_used=2, entry_date=date(2024, 1, 3)),
    ]
    assert total_raw_hours(entries) == 3.5
