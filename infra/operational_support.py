"""
Support journal for reconciliation runs.

Every CLI run is bound to one trace id. Log records carry it through
``TraceIdLogFilter`` and each run appends JSONL events to
``<user data dir>/logs/support-events.jsonl`` so a run can be followed
end to end from a single id. Client e-mail addresses and credential-like
keys are scrubbed before anything is written.
"""

from __future__ import annotations

import json
import logging
import os
import re
import uuid
from contextlib import contextmanager
from contextvars import ContextVar
from dataclasses import asdict, dataclass, field
from datetime import date, datetime, timezone
from pathlib import Path
from threading import Lock
from typing import Any, Iterator, Mapping

from core.exceptions import DomainError
from core.services.reconciliation.models import ReconciliationSummary
from infra.path import support_events_path
from infra.version import get_app_version

REDACTED = "<redacted>"
REDACTED_EMAIL = "<redacted-email>"
TRACE_PREFIX = "rec"

_run_trace: ContextVar[str | None] = ContextVar("reconciliation_trace_id", default=None)
_SECRET_KEY_MARKERS = ("password", "token", "secret", "api_key", "authorization", "cookie")
_EMAIL_RE = re.compile(r"\b[A-Za-z0-9._%+-]+@[A-Za-z0-9.-]+\.[A-Za-z]{2,}\b")


def create_trace_id() -> str:
    stamp = datetime.now(timezone.utc).strftime("%Y%m%d%H%M%S")
    return f"{TRACE_PREFIX}-{stamp}-{uuid.uuid4().hex[:8]}"


def current_trace_id() -> str | None:
    return (_run_trace.get() or "").strip() or None


@contextmanager
def bind_trace_id(trace_id: str | None = None) -> Iterator[str]:
    """Tag every log record and support event emitted inside the block with one trace id."""
    bound = (trace_id or "").strip() or create_trace_id()
    token = _run_trace.set(bound)
    try:
        yield bound
    finally:
        _run_trace.reset(token)


def _looks_secret(key: object) -> bool:
    text = str(key or "").lower().replace("-", "_")
    return any(marker in text for marker in _SECRET_KEY_MARKERS)


def redact_value(value: Any) -> Any:
    if value is None or isinstance(value, (bool, int, float)):
        return value
    if isinstance(value, (datetime, date)):
        return value.isoformat()
    if isinstance(value, Mapping):
        return {str(k): REDACTED if _looks_secret(k) else redact_value(v) for k, v in value.items()}
    if isinstance(value, (list, tuple)):
        return [redact_value(item) for item in value]
    return _EMAIL_RE.sub(REDACTED_EMAIL, str(value))


class TraceIdLogFilter(logging.Filter):
    def filter(self, record: logging.LogRecord) -> bool:
        record.trace_id = current_trace_id() or "-"
        return True


@dataclass(frozen=True)
class SupportEvent:
    event_type: str
    level: str
    trace_id: str
    message: str
    timestamp_utc: str = field(default_factory=lambda: datetime.now(timezone.utc).isoformat())
    app_version: str = field(default_factory=get_app_version)
    pid: int = field(default_factory=os.getpid)
    data: dict[str, Any] | None = None

    def to_json(self) -> str:
        payload = {k: v for k, v in asdict(self).items() if v is not None}
        return json.dumps(payload, ensure_ascii=True, sort_keys=True)


class OperationalSupport:
    """Append-only JSONL log of reconciliation runs and failures for support staff."""

    def __init__(self, events_path: str | Path | None = None) -> None:
        self._events_path = Path(events_path) if events_path is not None else support_events_path()
        self._events_path.parent.mkdir(parents=True, exist_ok=True)
        self._lock = Lock()

    @property
    def events_path(self) -> Path:
        return self._events_path

    def emit_event(
        self,
        *,
        event_type: str,
        message: str,
        level: str = "INFO",
        data: Mapping[str, Any] | None = None,
    ) -> str:
        event = SupportEvent(
            event_type=(event_type or "").strip() or "support.event",
            level=(level or "INFO").strip().upper(),
            trace_id=current_trace_id() or create_trace_id(),
            message=redact_value(message or ""),
            data=redact_value(dict(data)) if data else None,
        )
        with self._lock, self._events_path.open("a", encoding="utf-8") as handle:
            handle.write(event.to_json() + "\n")
        return event.trace_id

    def record_reconciliation(
        self,
        summary: ReconciliationSummary,
        *,
        client_id: str,
        exports: list[Path] | None = None,
    ) -> str:
        return self.emit_event(
            event_type="reconciliation.completed",
            message=f"Reconciled client {client_id} for {summary.year}",
            data={
                "client_id": client_id,
                "year": summary.year,
                "as_of": summary.as_of,
                "months": len(summary.months),
                "pending_amount": summary.pending_amount,
                "recurring_support_missing_months": summary.recurring_support_debt.missing_months,
                "support_and_development_missing_months": summary.support_and_development_debt.missing_months,
                "exports": [str(p) for p in exports or []],
            },
        )

    def record_failure(self, exc: DomainError, *, client_id: str, year: object) -> str:
        return self.emit_event(
            event_type="reconciliation.failed",
            message=str(exc),
            level="ERROR",
            data={"client_id": client_id, "year": year, "code": exc.code, "error": type(exc).__name__},
        )

    def read_events(self, *, trace_id: str | None = None) -> list[dict[str, Any]]:
        if not self._events_path.exists():
            return []
        wanted = (trace_id or "").strip()
        events: list[dict[str, Any]] = []
        with self._events_path.open(encoding="utf-8", errors="ignore") as handle:
            for line in handle:
                if not line.strip():
                    continue
                try:
                    payload = json.loads(line)
                except json.JSONDecodeError:
                    continue
                if wanted and payload.get("trace_id") != wanted:
                    continue
                events.append(payload)
        return events


_support: OperationalSupport | None = None


def get_operational_support() -> OperationalSupport:
    global _support
    if _support is None:
        _support = OperationalSupport()
    return _support


__all__ = [
    "REDACTED",
    "REDACTED_EMAIL",
    "SupportEvent",
    "OperationalSupport",
    "TraceIdLogFilter",
    "bind_trace_id",
    "create_trace_id",
    "current_trace_id",
    "get_operational_support",
    "redact_value",
]
