from core.reporting.api import (
    generate_csv_summary,
    generate_excel_report,
    generate_payments_chart_png,
    generate_pdf_report,
)

__all__ = [
    "generate_csv_summary",
    "generate_excel_report",
    "generate_payments_chart_png",
    "generate_pdf_report",
]
