"""Logging configuration for trusted-cert."""

from __future__ import annotations

import json
import logging
import sys

from opentelemetry import trace

TEXT_LOG_FORMAT = "%(asctime)s %(levelname)s [%(service_name)s] %(name)s: %(message)s"

LOG_OFF_LEVEL = "OFF"


class CommandContextFilter(logging.Filter):
    """Tags records with the program name and, inside a command span, its trace id."""

    def __init__(self, service_name: str) -> None:
        super().__init__()
        self.service_name = service_name

    def filter(self, record: logging.LogRecord) -> bool:
        record.service_name = self.service_name
        span_context = trace.get_current_span().get_span_context()
        record.trace_id = format(span_context.trace_id, "032x") if span_context.is_valid else None
        return True


class JSONFormatter(logging.Formatter):
    """One JSON object per line."""

    def format(self, record: logging.LogRecord) -> str:
        entry = {
            "time": self.formatTime(record),
            "level": record.levelname,
            "service": getattr(record, "service_name", None),
            "logger": record.name,
            "message": record.getMessage(),
        }
        if getattr(record, "trace_id", None):
            entry["trace_id"] = record.trace_id
        if record.exc_info:
            entry["exception"] = self.formatException(record.exc_info)
        return json.dumps(entry)


def setup_logging(
    service_name: str = "trusted-cert",
    log_level: str = "INFO",
    log_format: str = "text",
) -> None:
    """
    Configure the root logger.

    Logs go to stderr so that stdout carries only the trust store tool's output.

    Args:
        service_name: Program name shown in each record
        log_level: Level name, or "OFF" to disable logging
        log_format: "text", "json", or a logging format string
    """
    level_name = str(getattr(log_level, "value", log_level)).upper()

    root_logger = logging.getLogger()
    for handler in root_logger.handlers[:]:
        root_logger.removeHandler(handler)

    if level_name == LOG_OFF_LEVEL:
        root_logger.setLevel(logging.CRITICAL + 1)
        return

    level = logging.getLevelName(level_name)
    root_logger.setLevel(level if isinstance(level, int) else logging.INFO)

    if log_format.lower() == "json":
        formatter: logging.Formatter = JSONFormatter()
    elif log_format.lower() == "text":
        formatter = logging.Formatter(TEXT_LOG_FORMAT)
    else:
        formatter = logging.Formatter(log_format)

    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(formatter)
    handler.addFilter(CommandContextFilter(service_name))
    root_logger.addHandler(handler)
