"""create billing tables

Revision ID: 3a9c2e51b7d4
Revises:
Create Date: 2026-10-19
"""

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision = "3a9c2e51b7d4"
down_revision = None
branch_labels = None
depends_on = None


def upgrade() -> None:
    op.create_table(
        "clients",
        sa.Column("id", sa.String(), primary_key=True),
        sa.Column("name", sa.String(), nullable=False),
        sa.Column("email", sa.String(), nullable=True),
        sa.Column("annual_hours", sa.Float(), nullable=True),
    )

    op.create_table(
        "contracts",
        sa.Column("id", sa.String(), primary_key=True),
        sa.Column(
            "client_id",
            sa.String(),
            sa.ForeignKey("clients.id", ondelete="CASCADE"),
            nullable=False,
        ),
        sa.Column("contract_number", sa.String(length=50), nullable=False, unique=True),
        sa.Column("description", sa.String(), nullable=True),
        sa.Column("total_hours", sa.Float(), nullable=True),
        sa.Column("hourly_rate", sa.Float(), nullable=True),
        sa.Column("start_date", sa.Date(), nullable=True),
        sa.Column("end_date", sa.Date(), nullable=True),
        sa.Column("status", sa.String(length=20), nullable=False, server_default="active"),
    )
    op.create_index("idx_contracts_client_id", "contracts", ["client_id"])

    op.create_table(
        "projects",
        sa.Column("id", sa.String(), primary_key=True),
        sa.Column("name", sa.String(), nullable=False),
        sa.Column(
            "client_id",
            sa.String(),
            sa.ForeignKey("clients.id", ondelete="SET NULL"),
            nullable=True,
        ),
        sa.Column(
            "contract_id",
            sa.String(),
            sa.ForeignKey("contracts.id", ondelete="SET NULL"),
            nullable=True,
        ),
        sa.Column("hourly_rate", sa.Float(), nullable=True),
    )
    op.create_index("idx_projects_client_id", "projects", ["client_id"])
    op.create_index("idx_projects_contract_id", "projects", ["contract_id"])

    op.create_table(
        "time_entries",
        sa.Column("id", sa.String(), primary_key=True),
        sa.Column(
            "project_id",
            sa.String(),
            sa.ForeignKey("projects.id", ondelete="CASCADE"),
            nullable=False,
        ),
        sa.Column("hours_used", sa.Float(), nullable=True),
        sa.Column("entry_date", sa.Date(), nullable=False),
        sa.Column("description", sa.String(), nullable=True),
    )
    op.create_index(
        "idx_time_entries_project_date", "time_entries", ["project_id", "entry_date"]
    )

    op.create_table(
        "payments",
        sa.Column("id", sa.String(), primary_key=True),
        sa.Column("amount", sa.Float(), nullable=True),
        sa.Column("payment_date", sa.Date(), nullable=False),
        sa.Column("status", sa.String(length=20), nullable=False, server_default="completed"),
        sa.Column("payment_type", sa.String(length=32), nullable=False, server_default="other"),
        sa.Column("billing_month", sa.String(length=7), nullable=True),
        sa.Column("description", sa.String(), nullable=True),
        sa.Column(
            "project_id",
            sa.String(),
            sa.ForeignKey("projects.id", ondelete="SET NULL"),
            nullable=True,
        ),
        sa.Column(
            "contract_id",
            sa.String(),
            sa.ForeignKey("contracts.id", ondelete="SET NULL"),
            nullable=True,
        ),
        sa.Column(
            "client_id",
            sa.String(),
            sa.ForeignKey("clients.id", ondelete="SET NULL"),
            nullable=True,
        ),
    )
    op.create_index("idx_payments_date", "payments", ["payment_date"])
    op.create_index("idx_payments_project_id", "payments", ["project_id"])
    op.create_index("idx_payments_contract_id", "payments", ["contract_id"])


def downgrade() -> None:
    op.drop_index("idx_payments_contract_id", table_name="payments")
    op.drop_index("idx_payments_project_id", table_name="payments")
    op.drop_index("idx_payments_date", table_name="payments")
    op.drop_table("payments")
    op.drop_index("idx_time_entries_project_date", table_name="time_entries")
    op.drop_table("time_entries")
    op.drop_index("idx_projects_contract_id", table_name="projects")
    op.drop_index("idx_projects_client_id", table_name="projects")
    op.drop_table("projects")
    op.drop_index("idx_contracts_client_id", table_name="contracts")
    op.drop_table("contracts")
    op.drop_table("clients")
