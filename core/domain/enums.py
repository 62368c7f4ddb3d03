from __future__ import annotations

from enum import Enum


class PaymentStatus(str, Enum):
    COMPLETED = "completed"
    PENDING = "pending"
    PAID = "paid"
    OTHER = "other"

    @classmethod
    def coerce(cls, value: object) -> "PaymentStatus":
        if isinstance(value, cls):
            return value
        token = str(value or "").strip().lower()
        try:
            return cls(token)
        except ValueError:
            return cls.OTHER


class PaymentType(str, Enum):
    RECURRING_SUPPORT = "recurring_support"
    FIXED = "fixed"
    SUPPORT_EVOLUTIVE = "support_evolutive"
    OTHER = "other"

    @classmethod
    def coerce(cls, value: object) -> "PaymentType":
        if isinstance(value, cls):
            return value
        token = str(value or "").strip().lower()
        try:
            return cls(token)
        except ValueError:
            return cls.OTHER


class ContractStatus(str, Enum):
    ACTIVE = "active"
    COMPLETED = "completed"
    CANCELLED = "cancelled"

    @classmethod
    def coerce(cls, value: object) -> "ContractStatus":
        if isinstance(value, cls):
            return value
        token = str(value or "").strip().lower()
        try:
            return cls(token)
        except ValueError:
            return cls.ACTIVE


# Statuses that count toward totals, debt and calendars.
QUALIFYING_PAYMENT_STATUSES = frozenset(
    {PaymentStatus.COMPLETED, PaymentStatus.PENDING, PaymentStatus.PAID}
)


__all__ = ["PaymentStatus", "PaymentType", "ContractStatus", "QUALIFYING_PAYMENT_STATUSES"]
