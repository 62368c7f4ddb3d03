from __future__ import annotations

from core.domain import (
    Client,
    Contract,
    ContractStatus,
    Payment,
    PaymentStatus,
    PaymentType,
    Project,
    TimeEntry,
)
from infra.db.models import ClientORM, ContractORM, PaymentORM, ProjectORM, TimeEntryORM


def _enum_value(value: object) -> str:
    return value.value if hasattr(value, "value") else str(value)


def client_to_orm(client: Client) -> ClientORM:
    return ClientORM(
        id=client.id,
        name=client.name,
        email=client.email,
        annual_hours=client.annual_hours,
    )


def client_from_orm(obj: ClientORM) -> Client:
    return Client(
        id=obj.id,
        name=obj.name,
        email=obj.email,
        annual_hours=obj.annual_hours,
    )


def contract_to_orm(contract: Contract) -> ContractORM:
    return ContractORM(
        id=contract.id,
        client_id=contract.client_id,
        contract_number=contract.contract_number,
        description=contract.description,
        total_hours=contract.total_hours,
        hourly_rate=contract.hourly_rate,
        start_date=contract.start_date,
        end_date=contract.end_date,
        status=_enum_value(contract.status),
    )


def contract_from_orm(obj: ContractORM) -> Contract:
    return Contract(
        id=obj.id,
        client_id=obj.client_id,
        contract_number=obj.contract_number,
        description=obj.description or "",
        total_hours=obj.total_hours or 0.0,
        hourly_rate=obj.hourly_rate or 0.0,
        start_date=obj.start_date,
        end_date=obj.end_date,
        status=ContractStatus.coerce(obj.status),
    )


def project_to_orm(project: Project) -> ProjectORM:
    return ProjectORM(
        id=project.id,
        name=project.name,
        client_id=project.client_id,
        contract_id=project.contract_id,
        hourly_rate=project.hourly_rate,
    )


def project_from_orm(obj: ProjectORM) -> Project:
    return Project(
        id=obj.id,
        name=obj.name,
        client_id=obj.client_id,
        contract_id=obj.contract_id,
        hourly_rate=obj.hourly_rate,
    )


def time_entry_to_orm(entry: TimeEntry) -> TimeEntryORM:
    return TimeEntryORM(
        id=entry.id,
        project_id=entry.project_id,
        hours_used=entry.hours_used,
        entry_date=entry.entry_date,
        description=entry.description,
    )


def time_entry_from_orm(obj: TimeEntryORM, project: ProjectORM) -> TimeEntry:
    """Time entries carry the rate, name and contract of the project they were logged on."""
    return TimeEntry(
        id=obj.id,
        project_id=obj.project_id,
        hours_used=obj.hours_used or 0.0,
        entry_date=obj.entry_date,
        hourly_rate=project.hourly_rate,
        project_name=project.name,
        contract_id=project.contract_id,
        description=obj.description or "",
    )


def payment_to_orm(payment: Payment) -> PaymentORM:
    return PaymentORM(
        id=payment.id,
        amount=payment.amount,
        payment_date=payment.payment_date,
        status=_enum_value(payment.status),
        payment_type=_enum_value(payment.payment_type),
        billing_month=payment.billing_month,
        description=payment.description,
        project_id=payment.project_id,
        contract_id=payment.contract_id,
        client_id=payment.client_id,
    )


def payment_from_orm(obj: PaymentORM, project_contract_id: str | None = None) -> Payment:
    return Payment(
        id=obj.id,
        amount=obj.amount or 0.0,
        payment_date=obj.payment_date,
        status=PaymentStatus.coerce(obj.status),
        payment_type=PaymentType.coerce(obj.payment_type),
        billing_month=obj.billing_month,
        description=obj.description or "",
        project_id=obj.project_id,
        contract_id=obj.contract_id,
        client_id=obj.client_id,
        project_contract_id=project_contract_id,
    )


__all__ = [
    "client_to_orm",
    "client_from_orm",
    "contract_to_orm",
    "contract_from_orm",
    "project_to_orm",
    "project_from_orm",
    "time_entry_to_orm",
    "time_entry_from_orm",
    "payment_to_orm",
    "payment_from_orm",
]
