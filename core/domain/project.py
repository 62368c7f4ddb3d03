from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from core.domain.identifiers import generate_id


@dataclass
class Project:
    """
    Billable project. Owned by a client directly or through its contract;
    ``hourly_rate`` prices every time entry logged on it.
    """

    id: str
    name: str
    client_id: Optional[str] = None
    contract_id: Optional[str] = None
    hourly_rate: Optional[float] = None

    @staticmethod
    def create(
        name: str,
        client_id: Optional[str] = None,
        contract_id: Optional[str] = None,
        hourly_rate: Optional[float] = None,
    ) -> "Project":
        return Project(
            id=generate_id(),
            name=name.strip(),
            client_id=client_id,
            contract_id=contract_id,
            hourly_rate=hourly_rate,
        )


__all__ = ["Project"]
