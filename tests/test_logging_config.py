"""Tests for logging configuration and formatters."""

import io
import json
import logging

import pytest

from swapmatch.logging import ComponentLoggerAdapter, get_logger
from swapmatch.logging.config import (
    SERVICE_NAME,
    ContextualFilter,
    JSONFormatter,
    KeyValueFormatter,
    configure_logging,
)
from swapmatch.logging.context import clear_log_context, log_context


@pytest.fixture(autouse=True)
def clean_context():
    """Clear logging context before and after each test."""
    clear_log_context()
    yield
    clear_log_context()


@pytest.fixture
def logger():
    """Create a test logger without handlers."""
    test_logger = logging.getLogger("swapmatch.tests")
    original_level = test_logger.level
    test_logger.setLevel(logging.DEBUG)
    test_logger.handlers.clear()

    yield test_logger

    test_logger.handlers.clear()
    test_logger.setLevel(original_level)


@pytest.fixture
def key_value_formatter():
    return KeyValueFormatter(
        "%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )


def make_record(logger, message="Test message", level=logging.INFO, extra=None):
    return logger.makeRecord("test", level, "test.py", 1, message, (), None, extra=extra)


def test_json_formatter_basic(logger):
    """Test JSONFormatter produces valid JSON with mandatory fields."""
    log_obj = json.loads(JSONFormatter().format(make_record(logger)))

    assert log_obj["level"] == "INFO"
    assert log_obj["message"] == "Test message"
    assert log_obj["logger"] == "test"
    assert "timestamp" in log_obj


def test_json_formatter_with_extra_fields(logger):
    """Test JSONFormatter includes extra fields with their JSON types."""
    record = make_record(
        logger,
        extra={"event": "matching.run.completed", "direct_count": 3, "chain_enabled": False},
    )

    log_obj = json.loads(JSONFormatter().format(record))

    assert log_obj["event"] == "matching.run.completed"
    assert log_obj["direct_count"] == 3
    assert log_obj["chain_enabled"] is False


def test_json_formatter_stringifies_unknown_types(logger):
    """Test values JSON cannot encode natively are rendered as strings."""
    record = make_record(logger, extra={"participants": frozenset({"bob"})})

    log_obj = json.loads(JSONFormatter().format(record))

    assert log_obj["participants"] == "frozenset({'bob'})"


def test_json_formatter_no_duplicate_fields(logger):
    """Test that standard record attributes are not repeated as extras."""
    log_obj = json.loads(JSONFormatter().format(make_record(logger, extra={"event": "x"})))

    assert "name" not in log_obj
    assert "levelname" not in log_obj
    assert "event" in log_obj


def test_timestamp_format_in_json(logger):
    """Test that JSON formatter produces ISO-8601 UTC timestamps with milliseconds."""
    timestamp = json.loads(JSONFormatter().format(make_record(logger)))["timestamp"]

    assert timestamp.endswith("Z")
    assert "T" in timestamp
    assert len(timestamp) == 24  # 2026-10-19T10:30:00.123Z


def test_contextual_filter_adds_static_fields(logger):
    """Test ContextualFilter adds service and environment fields."""
    record = make_record(logger)

    ContextualFilter(environment="test").filter(record)

    assert record.service == SERVICE_NAME
    assert record.environment == "test"


def test_contextual_filter_adds_context_fields(logger):
    """Test ContextualFilter copies fields from the active log context."""
    with log_context(run_id="run-1", requester_id="alice"):
        record = make_record(logger)
        ContextualFilter().filter(record)

    assert record.run_id == "run-1"
    assert record.requester_id == "alice"


def test_contextual_filter_keeps_explicit_extra(logger):
    """Test that an explicit extra field wins over a context field of the same name."""
    with log_context(requester_id="from-context"):
        record = make_record(logger, extra={"requester_id": "explicit"})
        ContextualFilter().filter(record)

    assert record.requester_id == "explicit"


def test_json_formatter_with_context(logger):
    """Test full chain: context + filter + JSON formatter."""
    with log_context(run_id="run-1"):
        record = make_record(logger, "Matching run started", extra={"event": "matching.run.started"})
        ContextualFilter(environment="test").filter(record)
        log_obj = json.loads(JSONFormatter().format(record))

    assert log_obj["event"] == "matching.run.started"
    assert log_obj["service"] == SERVICE_NAME
    assert log_obj["environment"] == "test"
    assert log_obj["run_id"] == "run-1"


def test_key_value_formatter_basic(logger, key_value_formatter):
    """Test KeyValueFormatter produces readable output."""
    output = key_value_formatter.format(make_record(logger))

    assert "[INFO]" in output
    assert "test: Test message" in output


def test_key_value_formatter_with_extras(logger, key_value_formatter):
    """Test KeyValueFormatter appends sorted key=value pairs."""
    record = make_record(logger, extra={"event": "matching.direct.completed", "count": 2})

    output = key_value_formatter.format(record)

    assert output.endswith("count=2 event=matching.direct.completed")


def test_key_value_formatter_value_rendering(logger, key_value_formatter):
    """Test floats, booleans, None and spaced strings are rendered compactly."""
    record = make_record(
        logger,
        extra={"confidence": 0.774999, "enabled": True, "path": None, "title": "Guitar lessons"},
    )

    output = key_value_formatter.format(record)

    assert "confidence=0.775" in output
    assert "enabled=true" in output
    assert "path=null" in output
    assert 'title="Guitar lessons"' in output


def test_key_value_formatter_omits_service_fields(logger, key_value_formatter):
    """Test service and environment are left off key-value lines."""
    record = make_record(logger)
    ContextualFilter(environment="test").filter(record)

    output = key_value_formatter.format(record)

    assert "service=" not in output
    assert "environment=" not in output


def test_configure_logging_invalid_level():
    """Test configure_logging rejects invalid log level."""
    with pytest.raises(ValueError, match="Invalid log level"):
        configure_logging(level="LOUD")


def test_configure_logging_invalid_format():
    """Test configure_logging rejects invalid format type."""
    with pytest.raises(ValueError, match="Invalid log format"):
        configure_logging(format_type="xml")


def test_configure_logging_json_format():
    """Test configure_logging installs a JSON handler that writes to the given stream."""
    stream = io.StringIO()
    configure_logging(level="INFO", format_type="json", environment="test", stream=stream)

    root_logger = logging.getLogger()
    assert isinstance(root_logger.handlers[0].formatter, JSONFormatter)

    logging.getLogger("swapmatch.tests").info("hello", extra={"event": "test.event"})
    log_obj = json.loads(stream.getvalue().strip().splitlines()[-1])
    assert log_obj["event"] == "test.event"
    assert log_obj["environment"] == "test"


def test_configure_logging_key_value_format():
    """Test configure_logging with key-value format and level filtering."""
    stream = io.StringIO()
    configure_logging(level="WARNING", format_type="key-value", stream=stream)

    root_logger = logging.getLogger()
    assert isinstance(root_logger.handlers[0].formatter, KeyValueFormatter)
    assert root_logger.level == logging.WARNING

    logging.getLogger("swapmatch.tests.unleveled").info("dropped")
    assert "dropped" not in stream.getvalue()


def test_get_logger_with_component_merges_extra(caplog):
    """Test component adapter tags records while keeping call-site extras."""
    adapter = get_logger("swapmatch.tests.component", component="matching")
    assert isinstance(adapter, ComponentLoggerAdapter)

    with caplog.at_level(logging.INFO, logger="swapmatch.tests.component"):
        adapter.info("done", extra={"event": "matching.run.completed"})

    record = caplog.records[-1]
    assert record.component == "matching"
    assert record.event == "matching.run.completed"


def test_get_logger_without_component_returns_plain_logger():
    """Test get_logger falls back to a standard logger."""
    assert isinstance(get_logger("swapmatch.tests.plain"), logging.Logger)
