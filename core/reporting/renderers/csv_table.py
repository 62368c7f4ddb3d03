import csv
from pathlib import Path

from core.services.reconciliation.models import MonthBucket

CSV_HEADERS = ["Month", "Hours", "Billed", "Paid", "Balance", "Projects"]
PROJECT_SEPARATOR = "; "


def month_row(bucket: MonthBucket) -> list:
    return [
        bucket.month_key,
        f"{bucket.hours:.2f}",
        f"{bucket.revenue:.2f}",
        f"{bucket.payments:.2f}",
        f"{bucket.balance:.2f}",
        PROJECT_SEPARATOR.join(bucket.projects),
    ]


class MonthlyCsvRenderer:
    def render(self, months: list[MonthBucket], output_path: Path) -> Path:
        output_path.parent.mkdir(parents=True, exist_ok=True)
        # Project names may contain commas; the writer quotes those fields.
        with output_path.open("w", newline="", encoding="utf-8") as handle:
            writer = csv.writer(handle, quoting=csv.QUOTE_MINIMAL)
            writer.writerow(CSV_HEADERS)
            for bucket in months:
                writer.writerow(month_row(bucket))
        return output_path
