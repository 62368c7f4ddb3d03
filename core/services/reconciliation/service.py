from __future__ import annotations

import logging
from datetime import date

from core.domain import Client, Contract, Payment, TimeEntry, normalize_id
from core.exceptions import DataAccessError, NotFoundError, ValidationError
from core.interfaces import (
    ClientRepository,
    ContractRepository,
    PaymentRepository,
    TimeEntryRepository,
)
from core.services.reconciliation.engine import ReconciliationInput, reconcile, require_year
from core.services.reconciliation.hours import linked_contract_id
from core.services.reconciliation.models import ReconciliationSummary
from core.services.reconciliation.policy import DEFAULT_POLICY, ReconciliationPolicy

logger = logging.getLogger(__name__)


class ReconciliationService:
    """Client portal read model: fetches one client's records and runs the reconciliation engine."""

    def __init__(
        self,
        *,
        client_repo: ClientRepository,
        contract_repo: ContractRepository,
        time_entry_repo: TimeEntryRepository,
        payment_repo: PaymentRepository,
        policy: ReconciliationPolicy | None = None,
    ) -> None:
        self._client_repo: ClientRepository = client_repo
        self._contract_repo: ContractRepository = contract_repo
        self._time_entry_repo: TimeEntryRepository = time_entry_repo
        self._payment_repo: PaymentRepository = payment_repo
        self._policy: ReconciliationPolicy = policy or DEFAULT_POLICY

    @property
    def policy(self) -> ReconciliationPolicy:
        return self._policy

    def get_client_summary(
        self,
        client_id: str,
        year: int,
        *,
        contract_id: str | None = None,
        as_of: date | None = None,
        annual_allocation_override: float | None = None,
    ) -> ReconciliationSummary:
        client_id = normalize_id(client_id)
        if not client_id:
            raise ValidationError("A client is required for reconciliation.", code="CLIENT_REQUIRED")
        year = require_year(year)
        as_of = as_of or date.today()

        client, contracts, entries, payments = self._fetch(client_id, year)
        if client is None:
            raise NotFoundError("Client not found.", code="CLIENT_NOT_FOUND")

        contract_id = normalize_id(contract_id)
        if contract_id:
            contracts = [c for c in contracts if c.id == contract_id]
            if not contracts:
                raise NotFoundError("Contract not found for this client.", code="CONTRACT_NOT_FOUND")
            entries = [e for e in entries if e.contract_id == contract_id]
            payments = [p for p in payments if linked_contract_id(p) == contract_id]

        summary = reconcile(
            ReconciliationInput(
                year=year,
                time_entries=entries,
                payments=payments,
                contracts=contracts,
                client=client,
                annual_allocation_override=annual_allocation_override,
                as_of=as_of,
            ),
            policy=self._policy,
        )
        logger.info(
            "Reconciled client %s year %s: %s active months, %.2f hours remaining, pending %.2f",
            client_id,
            year,
            len(summary.months),
            summary.hours_remaining,
            summary.pending_amount,
        )
        return summary

    def _fetch(
        self,
        client_id: str,
        year: int,
    ) -> tuple[Client | None, list[Contract], list[TimeEntry], list[Payment]]:
        start = date(year, 1, 1)
        end = date(year, 12, 31)
        try:
            client = self._client_repo.get(client_id)
            if client is None:
                return None, [], [], []
            contracts = list(self._contract_repo.list_by_client(client_id))
            entries = list(self._time_entry_repo.list_for_client(client_id, start, end))
            payments = list(self._payment_repo.list_for_client(client_id, start, end))
        except Exception as exc:
            logger.exception("Failed to load billing records for client %s year %s", client_id, year)
            raise DataAccessError(
                f"Could not load billing records for client {client_id}: {exc}",
                code="DATA_ACCESS_FAILED",
            ) from exc
        return client, contracts, entries, payments


__all__ = ["ReconciliationService"]
