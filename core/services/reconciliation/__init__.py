from .engine import ReconciliationInput, reconcile
from .models import (
    ContractProgress,
    DebtProjection,
    MonthBucket,
    MonthPaymentFlag,
    ReconciliationSummary,
)
from .policy import DEFAULT_POLICY, ReconciliationPolicy
from .service import ReconciliationService

__all__ = [
    "reconcile",
    "ReconciliationInput",
    "ReconciliationService",
    "ReconciliationPolicy",
    "DEFAULT_POLICY",
    "MonthBucket",
    "DebtProjection",
    "ContractProgress",
    "MonthPaymentFlag",
    "ReconciliationSummary",
]
