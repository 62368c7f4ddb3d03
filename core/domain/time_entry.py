from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from typing import Optional

from core.domain.identifiers import generate_id


@dataclass
class TimeEntry:
    """Hours logged against a project; ``hourly_rate`` is inherited from the project."""

    id: str
    project_id: str
    hours_used: float
    entry_date: date
    hourly_rate: Optional[float] = None
    project_name: str = ""
    contract_id: Optional[str] = None
    description: str = ""

    @staticmethod
    def create(
        project_id: str,
        hours_used: float,
        entry_date: date,
        description: str = "",
    ) -> "TimeEntry":
        return TimeEntry(
            id=generate_id(),
            project_id=project_id,
            hours_used=hours_used,
            entry_date=entry_date,
            description=description,
        )


__all__ = ["TimeEntry"]
