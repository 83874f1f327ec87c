"""Tests for logging configuration and formatters."""

import io
import json
import logging

import pytest

from hostel_picker.logging import ComponentLoggerAdapter, get_logger
from hostel_picker.logging.config import (
    ContextualFilter,
    JSONFormatter,
    KeyValueFormatter,
    configure_logging,
)
from hostel_picker.logging.context import log_context


@pytest.fixture
def logger():
    """Create a test logger with handler for capturing output."""
    test_logger = logging.getLogger("test_logger")
    test_logger.setLevel(logging.DEBUG)
    test_logger.handlers.clear()

    yield test_logger

    test_logger.handlers.clear()


def test_json_formatter_basic(logger):
    """Test JSONFormatter produces valid JSON with mandatory fields."""
    formatter = JSONFormatter()
    record = logger.makeRecord("test", logging.INFO, "test.py", 1, "Test message", (), None)

    log_obj = json.loads(formatter.format(record))

    assert log_obj["level"] == "INFO"
    assert log_obj["message"] == "Test message"
    assert log_obj["logger"] == "test"
    assert "timestamp" in log_obj


def test_json_formatter_with_extra_fields(logger):
    """Test JSONFormatter includes extra fields."""
    formatter = JSONFormatter()
    record = logger.makeRecord(
        "test", logging.INFO, "test.py", 1, "Test message", (), None,
        extra={"event": "parsing.table.parsed", "record_count": 42, "flag": True},
    )

    log_obj = json.loads(formatter.format(record))

    assert log_obj["event"] == "parsing.table.parsed"
    assert log_obj["record_count"] == 42
    assert log_obj["flag"] is True
    assert "name" not in log_obj


def test_json_formatter_stringifies_unknown_types(logger):
    formatter = JSONFormatter()
    record = logger.makeRecord(
        "test", logging.INFO, "test.py", 1, "msg", (), None, extra={"values": {1, 2}}
    )

    log_obj = json.loads(formatter.format(record))
    assert isinstance(log_obj["values"], str)


def test_timestamp_format_in_json(logger):
    """Test that JSON formatter produces an ISO-8601 UTC timestamp."""
    record = logger.makeRecord("test", logging.INFO, "test.py", 1, "Test message", (), None)

    timestamp = json.loads(JSONFormatter().format(record))["timestamp"]

    assert timestamp.endswith("Z")
    assert "T" in timestamp
    assert len(timestamp) == 24  # 2025-11-04T10:30:00.123Z


def test_contextual_filter_adds_static_and_context_fields(logger):
    """Test ContextualFilter adds service, environment and context fields."""
    log_filter = ContextualFilter(service="hostel-picker", environment="test")

    with log_context(run_id="abc123", destination="lima"):
        record = logger.makeRecord("test", logging.INFO, "test.py", 1, "msg", (), None)
        log_filter.filter(record)

    assert record.service == "hostel-picker"
    assert record.environment == "test"
    assert record.run_id == "abc123"
    assert record.destination == "lima"


def test_contextual_filter_keeps_explicit_extra(logger):
    """Test that per-call extras win over context fields."""
    log_filter = ContextualFilter()

    with log_context(destination="lima"):
        record = logger.makeRecord(
            "test", logging.INFO, "test.py", 1, "msg", (), None, extra={"destination": "cusco"}
        )
        log_filter.filter(record)

    assert record.destination == "cusco"


def test_key_value_formatter_with_extras(logger):
    """Test KeyValueFormatter includes extra fields as key=value pairs."""
    formatter = KeyValueFormatter("%(levelname)s %(message)s")
    record = logger.makeRecord(
        "test", logging.INFO, "test.py", 1, "Test message", (), None,
        extra={"event": "shortlist.selected", "count": 3, "venue": "Casa Loma",
               "used_fallback": False, "missing": None},
    )
    record.service = "hostel-picker"

    output = formatter.format(record)

    assert output.startswith("INFO Test message")
    assert "event=shortlist.selected" in output
    assert "count=3" in output
    assert 'venue="Casa Loma"' in output
    assert "used_fallback=false" in output
    assert "missing=null" in output
    assert "service=" not in output


def test_configure_logging_invalid_level():
    """Test configure_logging rejects invalid log level."""
    with pytest.raises(ValueError, match="Invalid log level"):
        configure_logging(level="INVALID")


def test_configure_logging_invalid_format():
    """Test configure_logging rejects invalid format type."""
    with pytest.raises(ValueError, match="Invalid log format"):
        configure_logging(format_type="invalid")


@pytest.mark.parametrize(
    "format_type,formatter_class",
    [("json", JSONFormatter), ("key-value", KeyValueFormatter)],
)
def test_configure_logging_formats(format_type, formatter_class):
    """Test that the root handler gets the requested formatter."""
    configure_logging(level="INFO", format_type=format_type, environment="test")

    root_logger = logging.getLogger()
    assert len(root_logger.handlers) == 1
    assert isinstance(root_logger.handlers[0].formatter, formatter_class)
    assert root_logger.level == logging.INFO


def test_configure_logging_end_to_end():
    """Test context, component and event fields in emitted JSON lines."""
    stream = io.StringIO()
    configure_logging(level="DEBUG", format_type="json", environment="test", stream=stream)

    with log_context(run_id="abc123"):
        get_logger("hostel_picker.test", component="parsing").info(
            "Parsed", extra={"event": "parsing.table.parsed"}
        )

    lines = [json.loads(line) for line in stream.getvalue().splitlines()]
    parsed = next(line for line in lines if line.get("event") == "parsing.table.parsed")

    assert parsed["component"] == "parsing"
    assert parsed["run_id"] == "abc123"
    assert parsed["service"] == "hostel-picker"
    assert parsed["environment"] == "test"
    assert lines[0]["event"] == "logging.configured"


def test_get_logger_without_component():
    assert isinstance(get_logger("plain"), logging.Logger)
    assert isinstance(get_logger("tagged", component="x"), ComponentLoggerAdapter)
