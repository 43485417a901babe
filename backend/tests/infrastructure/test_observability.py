"""Structured Logging — JSON formatter surfaces registry extra fields."""

import json
import logging

from coldchain.infrastructure.observability import JSONFormatter


def _record(**extra) -> logging.LogRecord:
    record = logging.LogRecord(
        "coldchain.test", logging.WARNING, __file__, 1, "Temperature breach recorded",
        None, None,
    )
    record.__dict__.update(extra)
    return record


def test_json_formatter_includes_extra_fields():
    line = JSONFormatter().format(_record(shipment_id="S1", sequence=2, quality_score=90))
    payload = json.loads(line)
    assert payload["level"] == "WARNING"
    assert payload["message"] == "Temperature breach recorded"
    assert payload["shipment_id"] == "S1"
    assert payload["sequence"] == 2
    assert payload["quality_score"] == 90


def test_json_formatter_omits_missing_fields():
    payload = json.loads(JSONFormatter().format(_record()))
    assert "shipment_id" not in payload
    assert "principal" not in payload
