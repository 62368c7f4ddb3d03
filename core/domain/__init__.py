from core.domain.client import Client
from core.domain.contract import Contract
from core.domain.enums import (
    QUALIFYING_PAYMENT_STATUSES,
    ContractStatus,
    PaymentStatus,
    PaymentType,
)
from core.domain.identifiers import generate_id, normalize_id
from core.domain.payment import Payment
from core.domain.project import Project
from core.domain.time_entry import TimeEntry

__all__ = [
    "generate_id",
    "normalize_id",
    "ContractStatus",
    "PaymentStatus",
    "PaymentType",
    "QUALIFYING_PAYMENT_STATUSES",
    "Client",
    "Contract",
    "Project",
    "TimeEntry",
    "Payment",
]
