from pathlib import Path
from openpyxl import Workbook
from openpyxl.styles import Font, Alignment, PatternFill, Border, Side

from core.reporting.contexts import ExcelReportContext
from core.services.reconciliation.helpers import safe_float
from core.services.reconciliation.models import DebtProjection


def _enum_text(value) -> str:
    return getattr(value, "value", str(value))


class ExcelReportRenderer:
    def render(self, ctx: ExcelReportContext, output_path: Path) -> Path:
        output_path.parent.mkdir(parents=True, exist_ok=True)
        summary = ctx.summary
        wb = Workbook()

        header_font = Font(bold=True)
        title_font = Font(bold=True, size=14)
        center = Alignment(horizontal="center")
        thin_border = Border(
            left=Side(style="thin"),
            right=Side(style="thin"),
            top=Side(style="thin"),
            bottom=Side(style="thin"),
        )
        header_fill = PatternFill("solid", fgColor="DDDDDD")

        def header_row(sheet, headers):
            for col_index, h in enumerate(headers, start=1):
                cell = sheet.cell(row=1, column=col_index, value=h)
                cell.font = header_font
                cell.alignment = center
                cell.fill = header_fill
                cell.border = thin_border

        def data_row(sheet, row_index, values):
            for col_index, v in enumerate(values, start=1):
                sheet.cell(row=row_index, column=col_index, value=v).border = thin_border

        # ---------------- Summary ----------------
        ws = wb.active
        ws.title = "Summary"

        ws["A1"] = f"Reconciliation {summary.year} - {ctx.client_name}"
        ws["A1"].font = title_font

        row = 3

        def kv(key, value):
            nonlocal row
            ws[f"A{row}"] = key
            ws[f"B{row}"] = value
            ws[f"A{row}"].font = header_font
            ws[f"A{row}"].border = thin_border
            ws[f"B{row}"].border = thin_border
            row += 1

        def debt(label: str, projection: DebtProjection):
            if projection.insufficient_data:
                kv(f"{label} - debt", "Insufficient data")
                return
            kv(f"{label} - missing months", projection.missing_months)
            kv(f"{label} - owed months", ", ".join(projection.owed_month_labels))
            kv(f"{label} - estimated debt", projection.estimated_debt_amount)
            kv(f"{label} - average payment", projection.average_payment_amount)

        kv("As of", ctx.as_of.isoformat())
        kv("Year", summary.year)

        row += 1
        kv("Hours used", summary.total_hours)
        kv("Equivalent hours", summary.total_equivalent_hours)
        kv("Effective hours", summary.total_effective_hours)
        kv("Annual allocation", summary.annual_allocation)
        kv("Hours remaining", summary.hours_remaining)
        kv("Average hours per month", summary.average_hours_per_month)

        row += 1
        kv("Total billed", summary.total_revenue)
        kv("Total paid", summary.total_paid)
        kv("Pending amount", summary.pending_amount)

        row += 1
        debt("Recurring support", summary.recurring_support_debt)
        debt("Support and development", summary.support_and_development_debt)

        if summary.notes:
            row += 1
            for note in summary.notes:
                kv("Note", note)

        ws.column_dimensions["A"].width = 36
        ws.column_dimensions["B"].width = 30

        # ---------------- Months ----------------
        ws_months = wb.create_sheet("Months")
        header_row(
            ws_months,
            ["Month", "Name", "Hours", "Billed", "Paid", "Recurring support", "Support and development", "Balance", "Projects"],
        )
        for row_index, bucket in enumerate(summary.months, start=2):
            data_row(
                ws_months,
                row_index,
                [
                    bucket.month_key,
                    bucket.month_name,
                    bucket.hours,
                    bucket.revenue,
                    bucket.payments,
                    bucket.recurring_payments,
                    bucket.evolutive_payments,
                    bucket.balance,
                    "; ".join(bucket.projects),
                ],
            )
        ws_months.column_dimensions["B"].width = 14
        ws_months.column_dimensions["I"].width = 40
        for col_letter in ("A", "C", "D", "E", "F", "G", "H"):
            ws_months.column_dimensions[col_letter].width = 16

        # ---------------- Contracts ----------------
        ws_contracts = wb.create_sheet("Contracts")
        header_row(
            ws_contracts,
            [
                "Contract",
                "Status",
                "Total hours",
                "Rate",
                "Direct hours",
                "Equivalent hours",
                "Effective hours",
                "Remaining hours",
                "Hours %",
                "Budget",
                "Budget used",
                "Budget %",
                "Paid",
                "Pending",
            ],
        )
        for row_index, c in enumerate(summary.contracts, start=2):
            data_row(
                ws_contracts,
                row_index,
                [
                    c.contract_number,
                    c.status,
                    c.total_hours,
                    c.hourly_rate,
                    c.direct_hours,
                    c.equivalent_hours,
                    c.effective_hours,
                    c.remaining_hours,
                    c.hours_progress,
                    c.budget_total,
                    c.budget_used,
                    c.budget_progress,
                    c.total_paid,
                    c.pending_amount,
                ],
            )
        ws_contracts.column_dimensions["A"].width = 20
        for col_letter in "BCDEFGHIJKLMN":
            ws_contracts.column_dimensions[col_letter].width = 15

        # ---------------- Payments ----------------
        ws_pay = wb.create_sheet("Payments")
        header_row(ws_pay, ["Stream", "Date", "Billing month", "Type", "Status", "Amount"])
        streams = [("Recurring support", p) for p in summary.recurrent_support_payments] + [
            ("Support and development", p) for p in summary.support_and_development_payments
        ]
        for row_index, (stream, p) in enumerate(streams, start=2):
            data_row(
                ws_pay,
                row_index,
                [
                    stream,
                    p.payment_date.isoformat() if p.payment_date else "",
                    p.billing_month or "",
                    _enum_text(p.payment_type),
                    _enum_text(p.status),
                    safe_float(p.amount),
                ],
            )
        ws_pay.column_dimensions["A"].width = 26
        for col_letter in ("B", "C", "D", "E", "F"):
            ws_pay.column_dimensions[col_letter].width = 18

        wb.save(output_path)
        return output_path
