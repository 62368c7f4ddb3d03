from __future__ import annotations

import os
from importlib import metadata
from pathlib import Path

DISTRIBUTION_NAME = "billing-reconciliation-lite"
ENV_APP_VERSION = "BR_APP_VERSION"
_DEFAULT_APP_VERSION = "1.0.0"
_VERSION_FILE = Path(__file__).with_name("app_version.txt")


def _file_version(path: Path) -> str | None:
    try:
        return path.read_text(encoding="utf-8").strip() or None
    except OSError:
        return None


def _installed_version() -> str | None:
    try:
        return metadata.version(DISTRIBUTION_NAME)
    except metadata.PackageNotFoundError:
        return None


def get_app_version() -> str:
    """Env override, then a bundled ``app_version.txt``, then installed metadata."""
    return (
        (os.getenv(ENV_APP_VERSION) or "").strip()
        or _file_version(_VERSION_FILE)
        or _installed_version()
        or _DEFAULT_APP_VERSION
    )


__all__ = ["get_app_version"]
