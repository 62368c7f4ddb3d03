from __future__ import annotations

from datetime import date
from typing import List, Optional

from sqlalchemy import or_, select
from sqlalchemy.orm import Session, aliased

from core.domain import Client, Contract, Payment, Project, TimeEntry
from core.interfaces import (
    ClientRepository,
    ContractRepository,
    PaymentRepository,
    ProjectRepository,
    TimeEntryRepository,
)
from infra.db.billing.mapper import (
    client_from_orm,
    client_to_orm,
    contract_from_orm,
    contract_to_orm,
    payment_from_orm,
    payment_to_orm,
    project_from_orm,
    project_to_orm,
    time_entry_from_orm,
    time_entry_to_orm,
)
from infra.db.models import ClientORM, ContractORM, PaymentORM, ProjectORM, TimeEntryORM


class SqlAlchemyClientRepository(ClientRepository):
    def __init__(self, session: Session):
        self.session = session

    def add(self, client: Client) -> None:
        self.session.add(client_to_orm(client))

    def get(self, client_id: str) -> Optional[Client]:
        obj = self.session.get(ClientORM, client_id)
        return client_from_orm(obj) if obj else None

    def list_all(self) -> List[Client]:
        stmt = select(ClientORM).order_by(ClientORM.name)
        rows = self.session.execute(stmt).scalars().all()
        return [client_from_orm(row) for row in rows]


class SqlAlchemyContractRepository(ContractRepository):
    def __init__(self, session: Session):
        self.session = session

    def add(self, contract: Contract) -> None:
        self.session.add(contract_to_orm(contract))

    def get(self, contract_id: str) -> Optional[Contract]:
        obj = self.session.get(ContractORM, contract_id)
        return contract_from_orm(obj) if obj else None

    def list_by_client(self, client_id: str) -> List[Contract]:
        stmt = (
            select(ContractORM)
            .where(ContractORM.client_id == client_id)
            .order_by(ContractORM.start_date, ContractORM.contract_number)
        )
        rows = self.session.execute(stmt).scalars().all()
        return [contract_from_orm(row) for row in rows]


class SqlAlchemyProjectRepository(ProjectRepository):
    def __init__(self, session: Session):
        self.session = session

    def add(self, project: Project) -> None:
        self.session.add(project_to_orm(project))

    def get(self, project_id: str) -> Optional[Project]:
        obj = self.session.get(ProjectORM, project_id)
        return project_from_orm(obj) if obj else None

    def list_by_client(self, client_id: str) -> List[Project]:
        stmt = (
            select(ProjectORM)
            .outerjoin(ContractORM, ProjectORM.contract_id == ContractORM.id)
            .where(or_(ProjectORM.client_id == client_id, ContractORM.client_id == client_id))
            .order_by(ProjectORM.name)
        )
        rows = self.session.execute(stmt).scalars().unique().all()
        return [project_from_orm(row) for row in rows]


class SqlAlchemyTimeEntryRepository(TimeEntryRepository):
    def __init__(self, session: Session):
        self.session = session

    def add(self, entry: TimeEntry) -> None:
        self.session.add(time_entry_to_orm(entry))

    def list_for_client(self, client_id: str, start: date, end: date) -> List[TimeEntry]:
        stmt = (
            select(TimeEntryORM, ProjectORM)
            .join(ProjectORM, TimeEntryORM.project_id == ProjectORM.id)
            .outerjoin(ContractORM, ProjectORM.contract_id == ContractORM.id)
            .where(
                or_(ProjectORM.client_id == client_id, ContractORM.client_id == client_id),
                TimeEntryORM.entry_date >= start,
                TimeEntryORM.entry_date <= end,
            )
            .order_by(TimeEntryORM.entry_date, TimeEntryORM.id)
        )
        rows = self.session.execute(stmt).all()
        return [time_entry_from_orm(entry, project) for entry, project in rows]


class SqlAlchemyPaymentRepository(PaymentRepository):
    def __init__(self, session: Session):
        self.session = session

    def add(self, payment: Payment) -> None:
        self.session.add(payment_to_orm(payment))

    def list_for_client(self, client_id: str, start: date, end: date) -> List[Payment]:
        # One query over every link to the client; a payment tied to both a
        # project and a contract of the client comes back once.
        project_contract = aliased(ContractORM)
        stmt = (
            select(PaymentORM, ProjectORM.contract_id)
            .outerjoin(ProjectORM, PaymentORM.project_id == ProjectORM.id)
            .outerjoin(ContractORM, PaymentORM.contract_id == ContractORM.id)
            .outerjoin(project_contract, ProjectORM.contract_id == project_contract.id)
            .where(
                or_(
                    PaymentORM.client_id == client_id,
                    ProjectORM.client_id == client_id,
                    ContractORM.client_id == client_id,
                    project_contract.client_id == client_id,
                ),
                PaymentORM.payment_date >= start,
                PaymentORM.payment_date <= end,
            )
            .distinct()
            .order_by(PaymentORM.payment_date, PaymentORM.id)
        )
        rows = self.session.execute(stmt).all()
        return [payment_from_orm(payment, project_contract_id) for payment, project_contract_id in rows]


__all__ = [
    "SqlAlchemyClientRepository",
    "SqlAlchemyContractRepository",
    "SqlAlchemyProjectRepository",
    "SqlAlchemyTimeEntryRepository",
    "SqlAlchemyPaymentRepository",
]
