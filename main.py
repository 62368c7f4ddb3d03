# main.py
from __future__ import annotations

import argparse
import logging
import sys
from datetime import date
from pathlib import Path

from alembic.util import CommandError
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from core.exceptions import DataAccessError, DomainError
from core.reporting import generate_csv_summary, generate_excel_report, generate_pdf_report
from core.services.reconciliation import DebtProjection, ReconciliationSummary
from infra.db.base import build_db_url, create_db_engine, create_session_factory
from infra.logging_config import setup_logging
from infra.migrate import run_migrations
from infra.operational_support import bind_trace_id, get_operational_support
from infra.services import build_service_graph

logger = logging.getLogger(__name__)


def _parse_as_of(value: str) -> date:
    try:
        return date.fromisoformat(value)
    except ValueError as exc:
        raise argparse.ArgumentTypeError(f"Invalid date {value!r}, expected YYYY-MM-DD") from exc


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="billing-reconcile",
        description="Reconcile one client's hours, billing and payments for a calendar year.",
    )
    parser.add_argument("client_id", help="Client identifier")
    parser.add_argument("year", type=int, help="Calendar year, e.g. 2024")
    parser.add_argument("--contract", dest="contract_id", default=None, help="Restrict to one contract")
    parser.add_argument("--as-of", dest="as_of", type=_parse_as_of, default=None, help="Reference date (YYYY-MM-DD)")
    parser.add_argument("--csv", dest="csv_path", type=Path, default=None, help="Write the monthly table as CSV")
    parser.add_argument("--xlsx", dest="xlsx_path", type=Path, default=None, help="Write an Excel workbook")
    parser.add_argument("--pdf", dest="pdf_path", type=Path, default=None, help="Write a PDF report")
    parser.add_argument("--db", dest="db_path", type=Path, default=None, help="SQLite database file")
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging")
    return parser


def _debt_line(label: str, debt: DebtProjection) -> str:
    if debt.insufficient_data:
        return f"{label}: insufficient data"
    if not debt.missing_months:
        return f"{label}: up to date (last month {debt.anchor_month})"
    return (
        f"{label}: {debt.missing_months} month(s) owed "
        f"[{', '.join(debt.owed_month_labels)}] ~ {debt.estimated_debt_amount:,.2f}"
    )


def format_summary(summary: ReconciliationSummary, client_name: str = "") -> str:
    lines = [
        f"Reconciliation {summary.year} {client_name}".rstrip() + f" (as of {summary.as_of.isoformat()})",
        "",
        f"{'Month':<8} {'Hours':>9} {'Billed':>16} {'Paid':>16} {'Balance':>16}  Projects",
    ]
    for b in summary.months:
        lines.append(
            f"{b.month_key:<8} {b.hours:>9.2f} {b.revenue:>16,.2f} {b.payments:>16,.2f} "
            f"{b.balance:>16,.2f}  {', '.join(b.projects)}"
        )
    lines += [
        "",
        f"Hours used:        {summary.total_hours:.2f}",
        f"Equivalent hours:  {summary.total_equivalent_hours:.2f}",
        f"Effective hours:   {summary.total_effective_hours:.2f}",
        f"Hours remaining:   {summary.hours_remaining:.2f} of {summary.annual_allocation:.2f}",
        f"Avg hours / month: {summary.average_hours_per_month:.2f}",
        f"Total billed:      {summary.total_revenue:,.2f}",
        f"Total paid:        {summary.total_paid:,.2f}",
        f"Pending amount:    {summary.pending_amount:,.2f}",
        _debt_line("Recurring support", summary.recurring_support_debt),
        _debt_line("Support and development", summary.support_and_development_debt),
    ]
    for c in summary.contracts:
        lines.append(
            f"Contract {c.contract_number} [{c.status}]: {c.effective_hours:.2f}/{c.total_hours:.2f} h "
            f"({c.hours_progress:.1f}%), pending {c.pending_amount:,.2f}"
        )
    lines += [f"Note: {note}" for note in summary.notes]
    return "\n".join(lines)


def _open_session(db_url: str) -> Session:
    try:
        run_migrations(db_url)
        return create_session_factory(create_db_engine(db_url))()
    except (CommandError, RuntimeError, SQLAlchemyError, OSError) as exc:
        logger.exception("Could not open billing database %s", db_url)
        raise DataAccessError("Billing database is unavailable.", code="DATABASE_UNAVAILABLE") from exc


def main(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)
    setup_logging(logging.DEBUG if args.verbose else logging.INFO)
    support = get_operational_support()

    with bind_trace_id() as trace_id:
        session: Session | None = None
        try:
            session = _open_session(build_db_url(args.db_path))
            graph = build_service_graph(session)
            summary = graph.reconciliation_service.get_client_summary(
                args.client_id,
                args.year,
                contract_id=args.contract_id,
                as_of=args.as_of,
            )
            client = graph.client_repo.get(args.client_id)
            client_name = client.name if client else args.client_id

            print(format_summary(summary, client_name))

            written: list[Path] = []
            if args.csv_path:
                written.append(generate_csv_summary(summary, args.csv_path))
            if args.xlsx_path:
                written.append(generate_excel_report(summary, args.xlsx_path, client_name=client_name))
            if args.pdf_path:
                written.append(
                    generate_pdf_report(
                        summary,
                        args.pdf_path,
                        client_name=client_name,
                        temp_dir=args.pdf_path.parent / ".tmp_reports",
                    )
                )
            for path in written:
                print(f"Wrote {path}")
        except DomainError as exc:
            logger.error("Reconciliation failed [%s]: %s", exc.code, exc)
            support.record_failure(exc, client_id=args.client_id, year=args.year)
            print(f"Error: {exc}", file=sys.stderr)
            return 1
        finally:
            if session is not None:
                session.close()

        support.record_reconciliation(summary, client_id=args.client_id, exports=written)
        logger.info("Run %s finished", trace_id)
    return 0


if __name__ == "__main__":
    sys.exit(main())
