from __future__ import annotations

import json
import logging
from datetime import date

from core.exceptions import NotFoundError
from core.services.reconciliation import ReconciliationInput, reconcile
from infra.logging_config import setup_logging
from infra.operational_support import (
    REDACTED,
    REDACTED_EMAIL,
    OperationalSupport,
    bind_trace_id,
    current_trace_id,
)
import infra.operational_support as support_mod


def test_operational_support_emits_redacted_structured_event(tmp_path):
    events_path = tmp_path / "support-events.jsonl"
    support = OperationalSupport(events_path=events_path)

    with bind_trace_id("rec-test-123"):
        trace_id = support.emit_event(
            event_type="reconciliation.completed",
            message="Sent summary to alice@example.com",
            data={
                "password": "StrongPass123",
                "contact": "alice@example.com",
                "nested": {"api_token": "secret-value"},
                "year": 2024,
            },
        )

    assert trace_id == "rec-test-123"
    rows = events_path.read_text(encoding="utf-8").splitlines()
    assert len(rows) == 1
    payload = json.loads(rows[0])
    assert payload["trace_id"] == "rec-test-123"
    assert payload["event_type"] == "reconciliation.completed"
    assert "alice@example.com" not in payload["message"]
    assert payload["data"]["password"] == REDACTED
    assert payload["data"]["nested"]["api_token"] == REDACTED
    assert payload["data"]["contact"] == REDACTED_EMAIL
    assert payload["data"]["year"] == 2024


def test_read_events_filters_by_trace_id(tmp_path):
    support = OperationalSupport(events_path=tmp_path / "events.jsonl")
    support.emit_event(event_type="a", message="first")
    with bind_trace_id("rec-b"):
        support.emit_event(event_type="b", message="second", level="error")

    events = support.read_events(trace_id="rec-b")

    assert [e["event_type"] for e in events] == ["b"]
    assert events[0]["level"] == "ERROR"
    assert len(support.read_events()) == 2


def test_bind_trace_id_generates_and_resets():
    assert current_trace_id() is None
    with bind_trace_id() as trace_id:
        assert trace_id.startswith("rec-")
        assert current_trace_id() == trace_id
    assert current_trace_id() is None


def test_setup_logging_writes_trace_ids_to_rotating_file(tmp_path, monkeypatch):
    monkeypatch.setattr(support_mod, "_support", OperationalSupport(tmp_path / "events.jsonl"))
    root = logging.getLogger()
    previous_handlers = list(root.handlers)
    previous_level = root.level
    try:
        log_file = setup_logging(log_dir=tmp_path / "logs")
        with bind_trace_id("rec-log-1"):
            logging.getLogger("tests.logging").info("reconciled")
        for handler in root.handlers:
            handler.flush()
    finally:
        for handler in list(root.handlers):
            handler.close()
        root.handlers[:] = previous_handlers
        root.setLevel(previous_level)

    text = log_file.read_text(encoding="utf-8")
    assert "trace=rec-log-1 tests.logging - reconciled" in text
    events = OperationalSupport(tmp_path / "events.jsonl").read_events()
    assert events[0]["event_type"] == "app.logging.initialized"


def test_reconciliation_events_summarise_run_and_failure(tmp_path):
    support = OperationalSupport(events_path=tmp_path / "events.jsonl")
    summary = reconcile(ReconciliationInput(year=2024, as_of=date(2024, 3, 1)))

    with bind_trace_id("rec-run-1"):
        support.record_reconciliation(summary, client_id="c-1", exports=[tmp_path / "out.csv"])
        support.record_failure(NotFoundError("Client not found.", code="CLIENT_NOT_FOUND"), client_id="c-2", year=2024)

    done, failed = support.read_events(trace_id="rec-run-1")
    assert done["event_type"] == "reconciliation.completed"
    assert done["data"]["as_of"] == "2024-03-01"
    assert done["data"]["exports"] == [str(tmp_path / "out.csv")]
    assert failed["level"] == "ERROR"
    assert failed["data"]["code"] == "CLIENT_NOT_FOUND"
    assert failed["data"]["error"] == "NotFoundError"
