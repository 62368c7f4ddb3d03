from dataclasses import dataclass
from datetime import date

from core.services.reconciliation.models import ReconciliationSummary


@dataclass
class ReportExportContext:
    summary: ReconciliationSummary
    client_name: str
    as_of: date


@dataclass
class ExcelReportContext(ReportExportContext):
    pass


@dataclass
class PdfReportContext(ReportExportContext):
    chart_png_path: str
