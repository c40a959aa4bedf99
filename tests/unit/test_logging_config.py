import json
import logging

import pytest
from opentelemetry import trace

from trusted_cert.logging_config import CommandContextFilter, JSONFormatter, setup_logging


@pytest.fixture(autouse=True)
def restore_root_logger():
    root = logging.getLogger()
    handlers, level = root.handlers[:], root.level
    yield
    root.handlers[:] = handlers
    root.setLevel(level)


def _record(message: str) -> logging.LogRecord:
    return logging.LogRecord("trusted_cert.test", logging.INFO, __file__, 10, message, None, None)


def test_json_formatter_includes_service_name():
    record = _record("added")
    CommandContextFilter("trusted-cert").filter(record)

    entry = json.loads(JSONFormatter().format(record))

    assert entry["message"] == "added"
    assert entry["service"] == "trusted-cert"
    assert entry["level"] == "INFO"
    assert "trace_id" not in entry


def test_context_filter_adds_trace_id_inside_span():
    span = trace.NonRecordingSpan(
        trace.SpanContext(trace_id=0x1F, span_id=0x2A, is_remote=False)
    )
    record = _record("added")

    with trace.use_span(span):
        CommandContextFilter("trusted-cert").filter(record)

    assert record.trace_id == format(0x1F, "032x")
    assert json.loads(JSONFormatter().format(record))["trace_id"] == record.trace_id


def test_setup_logging_installs_single_stderr_handler():
    setup_logging(log_level="DEBUG", log_format="json")
    setup_logging(log_level="DEBUG", log_format="json")

    root = logging.getLogger()
    assert root.level == logging.DEBUG
    assert len(root.handlers) == 1
    assert isinstance(root.handlers[0].formatter, JSONFormatter)


def test_setup_logging_unknown_level_falls_back_to_info():
    setup_logging(log_level="chatty")

    assert logging.getLogger().level == logging.INFO


def test_setup_logging_off():
    setup_logging(log_level="OFF")

    root = logging.getLogger()
    assert root.handlers == []
    assert root.level > logging.CRITICAL
