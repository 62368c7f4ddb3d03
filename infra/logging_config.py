# infra/logging_config.py
from __future__ import annotations
import logging
import os
from logging.handlers import RotatingFileHandler
from pathlib import Path

from infra.operational_support import TraceIdLogFilter, get_operational_support
from infra.path import logs_dir

ENV_LOG_LEVEL = "BR_LOG_LEVEL"
LOG_FILE_NAME = "reconciliation.log"
FILE_FORMAT = "%(asctime)s [%(levelname)s] trace=%(trace_id)s %(name)s - %(message)s"
CONSOLE_FORMAT = "%(levelname)s [trace=%(trace_id)s]: %(message)s"
MAX_LOG_BYTES = 1_000_000
LOG_BACKUPS = 5

# Chatty third-party loggers kept at WARNING unless debugging.
_NOISY_LOGGERS = ("matplotlib", "PIL", "alembic.runtime.migration")


def resolve_log_level(default: int = logging.INFO) -> int:
    name = (os.getenv(ENV_LOG_LEVEL) or "").strip().upper()
    level = logging.getLevelName(name) if name else default
    return level if isinstance(level, int) else default


def setup_logging(level: int | None = None, log_dir: Path | None = None) -> Path:
    """
    Route all logging to a rotating file plus the console, both stamped with
    the active reconciliation trace id. Returns the log file path.
    """
    level = resolve_log_level() if level is None else level
    log_dir = log_dir or logs_dir()
    log_dir.mkdir(parents=True, exist_ok=True)
    log_file = log_dir / LOG_FILE_NAME

    trace_filter = TraceIdLogFilter()

    file_handler = RotatingFileHandler(log_file, maxBytes=MAX_LOG_BYTES, backupCount=LOG_BACKUPS, encoding="utf-8")
    file_handler.setFormatter(logging.Formatter(FILE_FORMAT))

    console = logging.StreamHandler()
    console.setFormatter(logging.Formatter(CONSOLE_FORMAT))

    root = logging.getLogger()
    root.setLevel(level)
    root.handlers.clear()
    for handler in (file_handler, console):
        handler.addFilter(trace_filter)
        root.addHandler(handler)

    for name in _NOISY_LOGGERS:
        logging.getLogger(name).setLevel(max(level, logging.WARNING))

    root.info("Logging initialized. Log file at %s", log_file)
    get_operational_support().emit_event(
        event_type="app.logging.initialized",
        message=f"Logging initialized at {log_file}",
        data={"log_file": str(log_file), "level": logging.getLevelName(level)},
    )
    return log_file
