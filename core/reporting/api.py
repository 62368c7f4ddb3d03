"""Reporting API wrappers around renderer classes."""

from pathlib import Path
from datetime import date
from contextlib import suppress

from core.exceptions import BusinessRuleError
from core.reporting.renderers.chart import PaymentsChartRenderer
from core.reporting.renderers.csv_table import MonthlyCsvRenderer
from core.reporting.renderers.excel import ExcelReportRenderer
from core.reporting.renderers.pdf import PdfReportRenderer
from core.reporting.contexts import (
    ExcelReportContext,
    PdfReportContext,
)
from core.services.reconciliation.models import ReconciliationSummary


def _ensure_parent(path: Path) -> Path:
    path.parent.mkdir(parents=True, exist_ok=True)
    return path


def _cleanup_temp_artifact(path: Path | None, temp_dir: Path | None = None) -> None:
    if path:
        with suppress(FileNotFoundError, PermissionError, OSError):
            path.unlink()

    parent = temp_dir if temp_dir is not None else (path.parent if path else None)
    if parent is None:
        return
    if parent.exists():
        with suppress(FileNotFoundError, PermissionError, OSError):
            if not any(parent.iterdir()):
                parent.rmdir()


def _require_summary(summary: ReconciliationSummary | None) -> ReconciliationSummary:
    if summary is None:
        raise BusinessRuleError("Nothing to export: run a reconciliation first.", code="NO_SUMMARY")
    return summary


def generate_csv_summary(summary: ReconciliationSummary, output_path: str | Path) -> Path:
    summary = _require_summary(summary)
    return MonthlyCsvRenderer().render(summary.months, _ensure_parent(Path(output_path)))


def generate_payments_chart_png(summary: ReconciliationSummary, output_path: str | Path) -> Path:
    summary = _require_summary(summary)
    return PaymentsChartRenderer().render(summary, _ensure_parent(Path(output_path)))


def generate_excel_report(
    summary: ReconciliationSummary,
    output_path: str | Path,
    client_name: str = "",
    as_of: date | None = None,
) -> Path:
    summary = _require_summary(summary)
    ctx = ExcelReportContext(
        summary=summary,
        client_name=client_name,
        as_of=as_of or summary.as_of,
    )
    return ExcelReportRenderer().render(ctx, _ensure_parent(Path(output_path)))


def generate_pdf_report(
    summary: ReconciliationSummary,
    output_path: str | Path,
    client_name: str = "",
    temp_dir: str | Path = "tmp_reports",
    as_of: date | None = None,
) -> Path:
    summary = _require_summary(summary)
    temp_dir = Path(temp_dir)
    temp_dir.mkdir(parents=True, exist_ok=True)
    chart_path = generate_payments_chart_png(summary, temp_dir / f"payments_{summary.year}.png")

    ctx = PdfReportContext(
        summary=summary,
        client_name=client_name,
        as_of=as_of or summary.as_of,
        chart_png_path=str(chart_path),
    )
    try:
        return PdfReportRenderer().render(ctx, _ensure_parent(Path(output_path)))
    finally:
        _cleanup_temp_artifact(chart_path, temp_dir=temp_dir)


__all__ = [
    "generate_csv_summary",
    "generate_excel_report",
    "generate_payments_chart_png",
    "generate_pdf_report",
]
