from __future__ import annotations

import logging

from core.services.reconciliation.policy import DEFAULT_POLICY
from infra import path as path_mod
from infra.config import (
    ENV_DEFAULT_ANNUAL_HOURS,
    ENV_MISSING_PAYMENT_CUTOFF_DAY,
    ENV_MISSING_PAYMENT_PLACEHOLDER,
    load_reconciliation_policy,
)
from infra.db.base import build_db_url


def _clear(monkeypatch):
    for name in (ENV_DEFAULT_ANNUAL_HOURS, ENV_MISSING_PAYMENT_CUTOFF_DAY, ENV_MISSING_PAYMENT_PLACEHOLDER):
        monkeypatch.delenv(name, raising=False)


def test_policy_defaults_without_environment(monkeypatch):
    _clear(monkeypatch)

    assert load_reconciliation_policy() == DEFAULT_POLICY


def test_policy_reads_environment_overrides(monkeypatch):
    _clear(monkeypatch)
    monkeypatch.setenv(ENV_DEFAULT_ANNUAL_HOURS, "960")
    monkeypatch.setenv(ENV_MISSING_PAYMENT_CUTOFF_DAY, "10")
    monkeypatch.setenv(ENV_MISSING_PAYMENT_PLACEHOLDER, "1500000")

    policy = load_reconciliation_policy()

    assert policy.default_annual_hours == 960.0
    assert policy.missing_payment_cutoff_day == 10
    assert policy.missing_payment_placeholder == 1_500_000.0


def test_invalid_environment_values_fall_back_with_warning(monkeypatch, caplog):
    _clear(monkeypatch)
    monkeypatch.setenv(ENV_DEFAULT_ANNUAL_HOURS, "lots")
    monkeypatch.setenv(ENV_MISSING_PAYMENT_CUTOFF_DAY, "45")
    monkeypatch.setenv(ENV_MISSING_PAYMENT_PLACEHOLDER, "-1")

    with caplog.at_level(logging.WARNING, logger="infra.config"):
        policy = load_reconciliation_policy()

    assert policy == DEFAULT_POLICY
    assert len([r for r in caplog.records if r.levelno == logging.WARNING]) == 3


def test_db_path_override_is_used_for_db_url(monkeypatch, tmp_path):
    target = tmp_path / "data" / "billing.db"
    monkeypatch.setenv("BR_DB_PATH", str(target))

    assert path_mod.default_db_path() == target
    assert build_db_url() == f"sqlite:///{target.as_posix()}"
    assert target.parent.exists()
