from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from typing import Optional

from core.domain.enums import ContractStatus
from core.domain.identifiers import generate_id


@dataclass
class Contract:
    id: str
    client_id: str
    contract_number: str
    total_hours: float = 0.0
    hourly_rate: float = 0.0
    start_date: Optional[date] = None
    end_date: Optional[date] = None
    status: ContractStatus = ContractStatus.ACTIVE
    description: str = ""

    @staticmethod
    def create(
        client_id: str,
        contract_number: str,
        total_hours: float = 0.0,
        hourly_rate: float = 0.0,
        start_date: Optional[date] = None,
        end_date: Optional[date] = None,
        status: ContractStatus = ContractStatus.ACTIVE,
        description: str = "",
    ) -> "Contract":
        return Contract(
            id=generate_id(),
            client_id=client_id,
            contract_number=contract_number,
            total_hours=total_hours,
            hourly_rate=hourly_rate,
            start_date=start_date,
            end_date=end_date,
            status=status,
            description=description,
        )


__all__ = ["Contract"]
