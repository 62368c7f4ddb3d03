from pathlib import Path

import matplotlib.pyplot as plt

from core.services.reconciliation.models import MonthPaymentFlag, ReconciliationSummary

PAID_COLOR = "#4c9f70"
MISSING_COLOR = "#f3b0a8"


def _plot_stream(ax, title: str, flags: list[MonthPaymentFlag]) -> None:
    xs = list(range(len(flags)))
    paid = [flag.paid for flag in flags]
    missing = [flag.placeholder_amount if flag.is_missing else 0.0 for flag in flags]

    ax.bar(xs, paid, color=PAID_COLOR, edgecolor="black", linewidth=0.4, label="Paid")
    if any(missing):
        ax.bar(
            xs,
            missing,
            color=MISSING_COLOR,
            edgecolor="#c0392b",
            hatch="//",
            linewidth=0.6,
            label="Missing (estimated)",
        )
    ax.set_xticks(xs)
    ax.set_xticklabels([flag.label for flag in flags], fontsize=8)
    ax.set_title(title, fontsize=10)
    ax.grid(True, axis="y", linestyle=":", linewidth=0.6)
    ax.legend(fontsize=8)


class PaymentsChartRenderer:
    def render(self, summary: ReconciliationSummary, output_path: Path) -> Path:
        output_path.parent.mkdir(parents=True, exist_ok=True)

        fig, (ax_support, ax_dev) = plt.subplots(1, 2, figsize=(12, 3.5), sharey=False)
        _plot_stream(ax_support, f"Recurring support {summary.year}", summary.recurring_support_calendar)
        _plot_stream(ax_dev, f"Support and development {summary.year}", summary.support_and_development_calendar)

        fig.tight_layout()
        fig.savefig(output_path, dpi=150)
        plt.close(fig)

        return output_path
