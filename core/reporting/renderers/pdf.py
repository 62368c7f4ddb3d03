from pathlib import Path
from reportlab.lib.pagesizes import A4, landscape
from reportlab.lib import colors
from reportlab.platypus import (
    SimpleDocTemplate,
    Paragraph,
    Spacer,
    Table,
    TableStyle,
    Image,
)
from reportlab.lib.styles import getSampleStyleSheet

from core.reporting.contexts import PdfReportContext
from core.services.reconciliation.models import DebtProjection

_TABLE_STYLE = TableStyle([
    ("BACKGROUND", (0, 0), (-1, 0), colors.lightgrey),
    ("FONTNAME", (0, 0), (-1, 0), "Helvetica-Bold"),
    ("GRID", (0, 0), (-1, -1), 0.5, colors.grey),
    ("ALIGN", (1, 1), (-1, -1), "RIGHT"),
])


def _money(value: float) -> str:
    return f"{value:,.2f}"


def _debt_row(label: str, projection: DebtProjection) -> list:
    if projection.insufficient_data:
        return [label, "-", "Insufficient data", "-", "-"]
    return [
        label,
        projection.missing_months,
        ", ".join(projection.owed_month_labels) or "Up to date",
        _money(projection.average_payment_amount),
        _money(projection.estimated_debt_amount),
    ]


class PdfReportRenderer:
    def render(self, ctx: PdfReportContext, output_path: Path) -> Path:
        summary = ctx.summary
        doc = SimpleDocTemplate(
            str(output_path),
            pagesize=landscape(A4),
            leftMargin=40,
            rightMargin=40,
            topMargin=40,
            bottomMargin=40,
        )

        styles = getSampleStyleSheet()
        story = []

        # ---------------- Title ----------------
        story.append(Paragraph(f"Client Reconciliation {summary.year} - {ctx.client_name}", styles["Title"]))
        story.append(Spacer(1, 12))

        # ---------------- Summary ----------------
        info = [
            f"As of: {ctx.as_of.isoformat()}",
            f"Hours used: {summary.total_hours:.2f}",
            f"Equivalent hours: {summary.total_equivalent_hours:.2f}",
            f"Effective hours: {summary.total_effective_hours:.2f}",
            f"Annual allocation: {summary.annual_allocation:.2f}",
            f"Hours remaining: {summary.hours_remaining:.2f}",
            f"Average hours per month: {summary.average_hours_per_month:.2f}",
            f"Total billed: {_money(summary.total_revenue)}",
            f"Total paid: {_money(summary.total_paid)}",
            f"Pending amount: {_money(summary.pending_amount)}",
        ]

        for line in info:
            story.append(Paragraph(line, styles["Normal"]))
        for note in summary.notes:
            story.append(Paragraph(f"Note: {note}", styles["Italic"]))

        story.append(Spacer(1, 16))

        # ---------------- Debt ----------------
        story.append(Paragraph("Estimated Debt", styles["Heading2"]))
        story.append(Spacer(1, 8))
        data = [
            ["Stream", "Missing months", "Owed months", "Average payment", "Estimated debt"],
            _debt_row("Recurring support", summary.recurring_support_debt),
            _debt_row("Support and development", summary.support_and_development_debt),
        ]
        table = Table(data, colWidths=[170, 100, 200, 120, 120])
        table.setStyle(_TABLE_STYLE)
        story.append(table)
        story.append(Spacer(1, 16))

        # ---------------- Months ----------------
        if summary.months:
            story.append(Paragraph("Monthly Activity", styles["Heading2"]))
            story.append(Spacer(1, 8))

            data = [["Month", "Hours", "Billed", "Paid", "Balance", "Projects"]]
            for b in summary.months:
                data.append([
                    f"{b.month_name} ({b.month_key})",
                    f"{b.hours:.2f}",
                    _money(b.revenue),
                    _money(b.payments),
                    _money(b.balance),
                    Paragraph(", ".join(b.projects), styles["BodyText"]),
                ])

            table = Table(data, colWidths=[120, 60, 110, 110, 110, 240], repeatRows=1)
            table.setStyle(_TABLE_STYLE)
            story.append(table)
            story.append(Spacer(1, 16))

        # ---------------- Contracts ----------------
        if summary.contracts:
            story.append(Paragraph("Contracts", styles["Heading2"]))
            story.append(Spacer(1, 8))

            data = [["Contract", "Status", "Effective / total hours", "Hours %", "Paid", "Pending"]]
            for c in summary.contracts:
                data.append([
                    c.contract_number,
                    c.status,
                    f"{c.effective_hours:.2f} / {c.total_hours:.2f}",
                    f"{c.hours_progress:.1f}",
                    _money(c.total_paid),
                    _money(c.pending_amount),
                ])

            table = Table(data, colWidths=[140, 90, 150, 70, 120, 120])
            table.setStyle(_TABLE_STYLE)
            story.append(table)
            story.append(Spacer(1, 16))

        # ---------------- Payments chart ----------------
        if ctx.chart_png_path:
            story.append(Paragraph("Payments", styles["Heading2"]))
            story.append(Spacer(1, 8))

            img = Image(ctx.chart_png_path)
            img._restrictSize(720, 240)
            story.append(img)

        doc.build(story)
        return output_path
