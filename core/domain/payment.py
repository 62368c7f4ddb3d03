from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from typing import Optional

from core.domain.enums import PaymentStatus, PaymentType
from core.domain.identifiers import generate_id


@dataclass
class Payment:
    id: str
    amount: float
    payment_date: date
    status: PaymentStatus = PaymentStatus.COMPLETED
    payment_type: PaymentType = PaymentType.OTHER
    billing_month: Optional[str] = None  # "YYYY-MM", recurring support only
    project_id: Optional[str] = None
    contract_id: Optional[str] = None
    client_id: Optional[str] = None
    description: str = ""
    # contract of the linked project, filled in by the repository on read
    project_contract_id: Optional[str] = None

    @staticmethod
    def create(
        amount: float,
        payment_date: date,
        status: PaymentStatus = PaymentStatus.COMPLETED,
        payment_type: PaymentType = PaymentType.OTHER,
        billing_month: Optional[str] = None,
        project_id: Optional[str] = None,
        contract_id: Optional[str] = None,
        client_id: Optional[str] = None,
        description: str = "",
    ) -> "Payment":
        return Payment(
            id=generate_id(),
            amount=amount,
            payment_date=payment_date,
            status=PaymentStatus.coerce(status),
            payment_type=PaymentType.coerce(payment_type),
            billing_month=billing_month,
            project_id=project_id,
            contract_id=contract_id,
            client_id=client_id,
            description=description,
        )


__all__ = ["Payment"]
