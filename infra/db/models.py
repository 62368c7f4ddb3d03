# infra/db/models.py
from __future__ import annotations
from datetime import date
from typing import Optional

from sqlalchemy import Date, Float, ForeignKey, Index, String
from sqlalchemy.orm import Mapped, mapped_column

from infra.db.base import Base


class ClientORM(Base):
    __tablename__ = "clients"

    id: Mapped[str] = mapped_column(String, primary_key=True)
    name: Mapped[str] = mapped_column(String, nullable=False)
    email: Mapped[Optional[str]] = mapped_column(String, nullable=True)
    annual_hours: Mapped[Optional[float]] = mapped_column(Float, nullable=True)


class ContractORM(Base):
    __tablename__ = "contracts"

    id: Mapped[str] = mapped_column(String, primary_key=True)
    client_id: Mapped[str] = mapped_column(
        String,
        ForeignKey("clients.id", ondelete="CASCADE"),
        nullable=False,
    )
    contract_number: Mapped[str] = mapped_column(String(50), nullable=False, unique=True)
    description: Mapped[str] = mapped_column(String, default="")
    total_hours: Mapped[float] = mapped_column(Float, default=0.0)
    hourly_rate: Mapped[float] = mapped_column(Float, default=0.0)
    start_date: Mapped[Optional[date]] = mapped_column(Date, nullable=True)
    end_date: Mapped[Optional[date]] = mapped_column(Date, nullable=True)
    status: Mapped[str] = mapped_column(String(20), default="active", nullable=False)
Index("idx_contracts_client_id", ContractORM.client_id)


class ProjectORM(Base):
    __tablename__ = "projects"

    id: Mapped[str] = mapped_column(String, primary_key=True)
    name: Mapped[str] = mapped_column(String, nullable=False)
    client_id: Mapped[Optional[str]] = mapped_column(
        String, ForeignKey("clients.id", ondelete="SET NULL"), nullable=True
    )
    contract_id: Mapped[Optional[str]] = mapped_column(
        String, ForeignKey("contracts.id", ondelete="SET NULL"), nullable=True
    )
    hourly_rate: Mapped[Optional[float]] = mapped_column(Float, nullable=True)
Index("idx_projects_client_id", ProjectORM.client_id)
Index("idx_projects_contract_id", ProjectORM.contract_id)


class TimeEntryORM(Base):
    __tablename__ = "time_entries"

    id: Mapped[str] = mapped_column(String, primary_key=True)
    project_id: Mapped[str] = mapped_column(
        String, ForeignKey("projects.id", ondelete="CASCADE"), nullable=False
    )
    hours_used: Mapped[float] = mapped_column(Float, default=0.0)
    entry_date: Mapped[date] = mapped_column(Date, nullable=False)
    description: Mapped[str] = mapped_column(String, default="")
Index("idx_time_entries_project_date", TimeEntryORM.project_id, TimeEntryORM.entry_date)


class PaymentORM(Base):
    __tablename__ = "payments"

    id: Mapped[str] = mapped_column(String, primary_key=True)
    amount: Mapped[float] = mapped_column(Float, default=0.0)
    payment_date: Mapped[date] = mapped_column(Date, nullable=False)
    status: Mapped[str] = mapped_column(String(20), default="completed", nullable=False)
    payment_type: Mapped[str] = mapped_column(String(32), default="other", nullable=False)
    billing_month: Mapped[Optional[str]] = mapped_column(String(7), nullable=True)
    description: Mapped[str] = mapped_column(String, default="")
    project_id: Mapped[Optional[str]] = mapped_column(
        String, ForeignKey("projects.id", ondelete="SET NULL"), nullable=True
    )
    contract_id: Mapped[Optional[str]] = mapped_column(
        String, ForeignKey("contracts.id", ondelete="SET NULL"), nullable=True
    )
    client_id: Mapped[Optional[str]] = mapped_column(
        String, ForeignKey("clients.id", ondelete="SET NULL"), nullable=True
    )
Index("idx_payments_date", PaymentORM.payment_date)
Index("idx_payments_project_id", PaymentORM.project_id)
Index("idx_payments_contract_id", PaymentORM.contract_id)
