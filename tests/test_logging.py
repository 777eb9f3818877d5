"""
Tests for structured logging.
"""
import json
import logging

from chartwise.core.logging import CorrelationIdFilter, JSONFormatter, TextFormatter


def _record(**extra):
    record = logging.LogRecord("chartwise.test", logging.INFO, __file__, 10, "Profiled %d columns", (3,), None)
    for key, value in extra.items():
        setattr(record, key, value)
    return record


def test_correlation_filter_sets_default():
    record = _record()

    assert CorrelationIdFilter().filter(record)
    assert record.correlation_id == "system"


def test_json_formatter_includes_extras():
    """Test that extra fields and the correlation ID are emitted."""
    record = _record(correlation_id="req-1", chart_types=["Boxplot"])

    payload = json.loads(JSONFormatter().format(record))

    assert payload["message"] == "Profiled 3 columns"
    assert payload["level"] == "INFO"
    assert payload["correlation_id"] == "req-1"
    assert payload["chart_types"] == ["Boxplot"]
    assert payload["timestamp"].endswith("Z")


def test_text_formatter_without_correlation_id():
    line = TextFormatter().format(_record())

    assert "[system]" in line
    assert "Profiled 3 columns" in line
