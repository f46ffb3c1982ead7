"""Structured logging - JSON formatter output."""

import json
import logging

from eventdesk.infrastructure.observability import JSONFormatter


def _record(**extra) -> logging.LogRecord:
    record = logging.LogRecord(
        "eventdesk.test", logging.WARNING, __file__, 1, "Event %s", ("saved",), None,
    )
    record.__dict__.update(extra)
    return record


def test_json_formatter_base_fields():
    out = json.loads(JSONFormatter().format(_record()))
    assert out["level"] == "WARNING"
    assert out["logger"] == "eventdesk.test"
    assert out["message"] == "Event saved"
    assert "timestamp" in out


def test_json_formatter_surfaces_extra_fields():
    out = json.loads(JSONFormatter().format(
        _record(error_code="DUPLICATE_SLUG", event_slug="devs-meetup"),
    ))
    assert out["error_code"] == "DUPLICATE_SLUG"
    assert out["event_slug"] == "devs-meetup"
    assert "event_id" not in out
