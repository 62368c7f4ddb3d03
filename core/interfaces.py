# core/interfaces.py
from __future__ import annotations

from abc import ABC, abstractmethod
from datetime import date
from typing import List, Optional

from core.domain import Client, Contract, Payment, Project, TimeEntry


class ClientRepository(ABC):
    @abstractmethod
    def add(self, client: Client) -> None: ...

    @abstractmethod
    def get(self, client_id: str) -> Optional[Client]: ...

    @abstractmethod
    def list_all(self) -> List[Client]: ...


class ContractRepository(ABC):
    @abstractmethod
    def add(self, contract: Contract) -> None: ...

    @abstractmethod
    def get(self, contract_id: str) -> Optional[Contract]: ...

    @abstractmethod
    def list_by_client(self, client_id: str) -> List[Contract]: ...


class ProjectRepository(ABC):
    @abstractmethod
    def add(self, project: Project) -> None: ...

    @abstractmethod
    def get(self, project_id: str) -> Optional[Project]: ...

    @abstractmethod
    def list_by_client(self, client_id: str) -> List[Project]: ...


class TimeEntryRepository(ABC):
    @abstractmethod
    def add(self, entry: TimeEntry) -> None: ...

    @abstractmethod
    def list_for_client(self, client_id: str, start: date, end: date) -> List[TimeEntry]:
        """Entries of the client's projects dated within [start, end], with project rate and name."""


class PaymentRepository(ABC):
    @abstractmethod
    def add(self, payment: Payment) -> None: ...

    @abstractmethod
    def list_for_client(self, client_id: str, start: date, end: date) -> List[Payment]:
        """Distinct payments linked to the client through project, contract or directly."""


__all__ = [
    "ClientRepository",
    "ContractRepository",
    "ProjectRepository",
    "TimeEntryRepository",
    "PaymentRepository",
]
