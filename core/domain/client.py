from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from core.domain.identifiers import generate_id


@dataclass
class Client:
    id: str
    name: str
    email: Optional[str] = None
    annual_hours: Optional[float] = None

    @staticmethod
    def create(name: str, email: Optional[str] = None, annual_hours: Optional[float] = None) -> "Client":
        return Client(
            id=generate_id(),
            name=name,
            email=email,
            annual_hours=annual_hours,
        )


__all__ = ["Client"]
