# infra/config.py
from __future__ import annotations

import logging
import os

from core.services.reconciliation.policy import (
    DEFAULT_ANNUAL_HOURS,
    DEFAULT_MISSING_PAYMENT_CUTOFF_DAY,
    DEFAULT_MISSING_PAYMENT_PLACEHOLDER,
    ReconciliationPolicy,
)

logger = logging.getLogger(__name__)

ENV_DEFAULT_ANNUAL_HOURS = "BR_DEFAULT_ANNUAL_HOURS"
ENV_MISSING_PAYMENT_CUTOFF_DAY = "BR_MISSING_PAYMENT_CUTOFF_DAY"
ENV_MISSING_PAYMENT_PLACEHOLDER = "BR_MISSING_PAYMENT_PLACEHOLDER"


def _env_float(name: str, default: float, *, minimum: float = 0.0) -> float:
    raw = (os.getenv(name) or "").strip()
    if not raw:
        return default
    try:
        value = float(raw)
    except ValueError:
        logger.warning("Ignoring %s=%r: not a number, using %s", name, raw, default)
        return default
    if value < minimum:
        logger.warning("Ignoring %s=%r: below %s, using %s", name, raw, minimum, default)
        return default
    return value


def _env_int(name: str, default: int, *, minimum: int, maximum: int) -> int:
    raw = (os.getenv(name) or "").strip()
    if not raw:
        return default
    try:
        value = int(raw)
    except ValueError:
        logger.warning("Ignoring %s=%r: not an integer, using %s", name, raw, default)
        return default
    if not minimum <= value <= maximum:
        logger.warning("Ignoring %s=%r: outside %s..%s, using %s", name, raw, minimum, maximum, default)
        return default
    return value


def load_reconciliation_policy() -> ReconciliationPolicy:
    return ReconciliationPolicy(
        default_annual_hours=_env_float(ENV_DEFAULT_ANNUAL_HOURS, DEFAULT_ANNUAL_HOURS, minimum=1.0),
        missing_payment_cutoff_day=_env_int(
            ENV_MISSING_PAYMENT_CUTOFF_DAY,
            DEFAULT_MISSING_PAYMENT_CUTOFF_DAY,
            minimum=0,
            maximum=31,
        ),
        missing_payment_placeholder=_env_float(
            ENV_MISSING_PAYMENT_PLACEHOLDER,
            DEFAULT_MISSING_PAYMENT_PLACEHOLDER,
        ),
    )


__all__ = [
    "ENV_DEFAULT_ANNUAL_HOURS",
    "ENV_MISSING_PAYMENT_CUTOFF_DAY",
    "ENV_MISSING_PAYMENT_PLACEHOLDER",
    "load_reconciliation_policy",
]
