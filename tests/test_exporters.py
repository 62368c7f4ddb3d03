from __future__ import annotations

import csv
from datetime import date

import pytest
from openpyxl import load_workbook

from core.domain import Contract, Payment, PaymentType, TimeEntry
from core.exceptions import BusinessRuleError
from core.reporting import api as reporting_api
from core.services.reconciliation import ReconciliationInput, reconcile


def _summary():
    contract = Contract(id="k-1", client_id="c-1", contract_number="CT-1", total_hours=20.0, hourly_rate=100_000.0)
    entries = [
        TimeEntry(
            id="te-1",
            project_id="p-1",
            hours_used=2.0,
            entry_date=date(2024, 3, 10),
            hourly_rate=100_000.0,
            project_name="Portal, phase 2",
            contract_id="k-1",
        ),
        TimeEntry(
            id="te-2",
            project_id="p-2",
            hours_used=1.0,
            entry_date=date(2024, 3, 11),
            hourly_rate=100_000.0,
            project_name="Mobile",
            contract_id="k-1",
        ),
    ]
    payments = [
        Payment(
            id="rs-1",
            amount=1_000_000.0,
            payment_date=date(2024, 1, 5),
            payment_type=PaymentType.RECURRING_SUPPORT,
            billing_month="2024-01",
        ),
        Payment(id="fx-1", amount=250_000.0, payment_date=date(2024, 3, 20), payment_type=PaymentType.FIXED),
    ]
    return reconcile(
        ReconciliationInput(
            year=2024,
            time_entries=entries,
            payments=payments,
            contracts=[contract],
            as_of=date(2024, 4, 10),
        )
    )


def test_csv_export_quotes_project_names_with_commas(tmp_path):
    out = reporting_api.generate_csv_summary(_summary(), tmp_path / "nested" / "summary.csv")

    with out.open(newline="", encoding="utf-8") as handle:
        rows = list(csv.reader(handle))

    assert rows[0] == ["Month", "Hours", "Billed", "Paid", "Balance", "Projects"]
    march = next(r for r in rows if r[0] == "2024-03")
    assert march[1] == "3.00"
    assert march[2] == "300000.00"
    assert march[5] == "Mobile; Portal, phase 2"
    assert '"Mobile; Portal, phase 2"' in out.read_text(encoding="utf-8")


def test_excel_export_writes_expected_sheets(tmp_path):
    out = reporting_api.generate_excel_report(_summary(), tmp_path / "report.xlsx", client_name="Acme")

    wb = load_workbook(out)
    assert wb.sheetnames == ["Summary", "Months", "Contracts", "Payments"]
    assert wb["Summary"]["A1"].value == "Reconciliation 2024 - Acme"
    months = list(wb["Months"].iter_rows(min_row=2, values_only=True))
    assert [row[0] for row in months] == ["2024-01", "2024-03"]
    contracts = list(wb["Contracts"].iter_rows(min_row=2, values_only=True))
    assert contracts[0][0] == "CT-1"
    assert contracts[0][5] == 10.0
    payments = list(wb["Payments"].iter_rows(min_row=2, values_only=True))
    assert {row[0] for row in payments} == {"Recurring support", "Support and development"}


def test_payments_chart_png_is_written(tmp_path):
    out = reporting_api.generate_payments_chart_png(_summary(), tmp_path / "charts" / "payments.png")

    assert out.exists()
    assert out.read_bytes()[:8] == b"\x89PNG\r\n\x1a\n"


def test_pdf_export_writes_pdf_and_cleans_temp_chart(tmp_path):
    temp_dir = tmp_path / "tmp_reports"

    out = reporting_api.generate_pdf_report(
        _summary(),
        tmp_path / "report.pdf",
        client_name="Acme",
        temp_dir=temp_dir,
    )

    assert out.read_bytes()[:4] == b"%PDF"
    assert not temp_dir.exists()


def test_exports_require_a_summary(tmp_path):
    with pytest.raises(BusinessRuleError) as exc_info:
        reporting_api.generate_csv_summary(None, tmp_path / "x.csv")

    assert exc_info.value.code == "NO_SUMMARY"
