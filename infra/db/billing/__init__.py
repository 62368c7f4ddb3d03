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
from infra.db.billing.repository import (
    SqlAlchemyClientRepository,
    SqlAlchemyContractRepository,
    SqlAlchemyPaymentRepository,
    SqlAlchemyProjectRepository,
    SqlAlchemyTimeEntryRepository,
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
    "SqlAlchemyClientRepository",
    "SqlAlchemyContractRepository",
    "SqlAlchemyProjectRepository",
    "SqlAlchemyTimeEntryRepository",
    "SqlAlchemyPaymentRepository",
]
