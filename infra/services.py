from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from sqlalchemy.orm import Session

from core.services.reconciliation import ReconciliationPolicy, ReconciliationService
from infra.config import load_reconciliation_policy
from infra.db.repositories import (
    SqlAlchemyClientRepository,
    SqlAlchemyContractRepository,
    SqlAlchemyPaymentRepository,
    SqlAlchemyProjectRepository,
    SqlAlchemyTimeEntryRepository,
)


@dataclass(frozen=True)
class ServiceGraph:
    session: Session
    client_repo: SqlAlchemyClientRepository
    contract_repo: SqlAlchemyContractRepository
    project_repo: SqlAlchemyProjectRepository
    time_entry_repo: SqlAlchemyTimeEntryRepository
    payment_repo: SqlAlchemyPaymentRepository
    reconciliation_service: ReconciliationService

    def as_dict(self) -> dict[str, Any]:
        return {
            "session": self.session,
            "client_repo": self.client_repo,
            "contract_repo": self.contract_repo,
            "project_repo": self.project_repo,
            "time_entry_repo": self.time_entry_repo,
            "payment_repo": self.payment_repo,
            "reconciliation_service": self.reconciliation_service,
        }


def build_service_graph(session: Session, policy: ReconciliationPolicy | None = None) -> ServiceGraph:
    client_repo = SqlAlchemyClientRepository(session)
    contract_repo = SqlAlchemyContractRepository(session)
    project_repo = SqlAlchemyProjectRepository(session)
    time_entry_repo = SqlAlchemyTimeEntryRepository(session)
    payment_repo = SqlAlchemyPaymentRepository(session)

    reconciliation_service = ReconciliationService(
        client_repo=client_repo,
        contract_repo=contract_repo,
        time_entry_repo=time_entry_repo,
        payment_repo=payment_repo,
        policy=policy or load_reconciliation_policy(),
    )
    return ServiceGraph(
        session=session,
        client_repo=client_repo,
        contract_repo=contract_repo,
        project_repo=project_repo,
        time_entry_repo=time_entry_repo,
        payment_repo=payment_repo,
        reconciliation_service=reconciliation_service,
    )


def build_services(session: Session, policy: ReconciliationPolicy | None = None) -> dict[str, Any]:
    return build_service_graph(session, policy).as_dict()


__all__ = ["ServiceGraph", "build_service_graph", "build_services"]
