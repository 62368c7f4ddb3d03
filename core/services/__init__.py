from .reconciliation import ReconciliationService

__all__ = [
    "ReconciliationService",
]
