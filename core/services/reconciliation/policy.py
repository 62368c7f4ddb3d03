from __future__ import annotations

from dataclasses import dataclass

DEFAULT_ANNUAL_HOURS = 1800.0
DEFAULT_MISSING_PAYMENT_CUTOFF_DAY = 5
DEFAULT_MISSING_PAYMENT_PLACEHOLDER = 25_000_000.0


@dataclass(frozen=True)
class ReconciliationPolicy:
    """Tunable constants of the reconciliation heuristics."""

    default_annual_hours: float = DEFAULT_ANNUAL_HOURS
    # A month "should have" a payment once the current day passes this day of month.
    missing_payment_cutoff_day: int = DEFAULT_MISSING_PAYMENT_CUTOFF_DAY
    # Bar height for a missing month when the stream has no payment to average.
    missing_payment_placeholder: float = DEFAULT_MISSING_PAYMENT_PLACEHOLDER


DEFAULT_POLICY = ReconciliationPolicy()


__all__ = [
    "DEFAULT_ANNUAL_HOURS",
    "DEFAULT_MISSING_PAYMENT_CUTOFF_DAY",
    "DEFAULT_MISSING_PAYMENT_PLACEHOLDER",
    "DEFAULT_POLICY",
    "ReconciliationPolicy",
]
