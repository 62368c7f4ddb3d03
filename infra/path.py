# infra/path.py
from __future__ import annotations
import os
import sys
from pathlib import Path

APP_NAME = "BillingReconciliationLite"
COMPANY_NAME = "BillingTools"
ENV_DB_PATH = "BR_DB_PATH"


def _platform_data_root() -> Path:
    if sys.platform.startswith("win"):
        return Path(os.getenv("APPDATA", Path.home() / "AppData" / "Roaming"))
    if sys.platform == "darwin":
        return Path.home() / "Library" / "Application Support"
    return Path(os.getenv("XDG_DATA_HOME", Path.home() / ".local" / "share"))


def user_data_dir() -> Path:
    """
    Per-user home for the billing database, logs and support journal, e.g.
    ``~/.local/share/BillingTools/BillingReconciliationLite`` on Linux.
    Falls back to ``~/.BillingReconciliationLite`` when the platform location
    cannot be created.
    """
    path = _platform_data_root() / COMPANY_NAME / APP_NAME
    try:
        path.mkdir(parents=True, exist_ok=True)
    except OSError:
        path = Path.home() / f".{APP_NAME}"
        path.mkdir(parents=True, exist_ok=True)
    return path


def logs_dir() -> Path:
    path = user_data_dir() / "logs"
    path.mkdir(parents=True, exist_ok=True)
    return path


def support_events_path() -> Path:
    return logs_dir() / "support-events.jsonl"


def default_db_path() -> Path:
    """SQLite billing database: ``BR_DB_PATH`` when set, otherwise ``billing.db`` in the user data dir."""
    override = (os.getenv(ENV_DB_PATH) or "").strip()
    if not override:
        return user_data_dir() / "billing.db"
    path = Path(override).expanduser()
    path.parent.mkdir(parents=True, exist_ok=True)
    return path
