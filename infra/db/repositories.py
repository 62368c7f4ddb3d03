# infra/db/repositories.py
from infra.db.billing.repository import (
    SqlAlchemyClientRepository,
    SqlAlchemyContractRepository,
    SqlAlchemyPaymentRepository,
    SqlAlchemyProjectRepository,
    SqlAlchemyTimeEntryRepository,
)

__all__ = [
    "SqlAlchemyClientRepository",
    "SqlAlchemyContractRepository",
    "SqlAlchemyProjectRepository",
    "SqlAlchemyTimeEntryRepository",
    "SqlAlchemyPaymentRepository",
]
