from __future__ import annotations

import logging
import sys
from pathlib import Path

from alembic import command
from alembic.config import Config

from infra.path import APP_NAME

logger = logging.getLogger(__name__)

MIGRATION_DIR_NAME = "migration"
ALEMBIC_INI_NAME = "alembic.ini"


def _install_root() -> Path:
    """Project root in development; the unpacked bundle or executable folder when frozen."""
    if not getattr(sys, "frozen", False):
        return Path(__file__).resolve().parents[1]
    bundle = getattr(sys, "_MEIPASS", None)
    return Path(bundle).resolve() if bundle else Path(sys.executable).resolve().parent


def migration_candidates(root: Path | None = None) -> list[Path]:
    root = root or _install_root()
    return [
        root / MIGRATION_DIR_NAME,
        root / "_internal" / MIGRATION_DIR_NAME,
        root / APP_NAME / MIGRATION_DIR_NAME,
    ]


def alembic_config(db_url: str, root: Path | None = None) -> Config:
    candidates = migration_candidates(root)
    script_location = next((path for path in candidates if path.is_dir()), None)
    if script_location is None:
        tried = ", ".join(str(path) for path in candidates)
        raise RuntimeError(f"Billing schema migrations not found. Tried: {tried}")

    ini_path = script_location / ALEMBIC_INI_NAME
    if not ini_path.exists():
        raise RuntimeError(f"Alembic config missing: {ini_path}")

    cfg = Config(str(ini_path))
    cfg.set_main_option("script_location", str(script_location))
    cfg.set_main_option("sqlalchemy.url", db_url)
    return cfg


def run_migrations(db_url: str) -> None:
    """Bring the billing database at ``db_url`` up to the latest schema revision."""
    cfg = alembic_config(db_url)
    logger.info("Upgrading billing schema at %s", db_url)
    command.upgrade(cfg, "head")
