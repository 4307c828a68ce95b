"""
Structured logging utilities for access resolution.

Access decisions are logged with subject and note context so that
denials can be traced in JSON log pipelines.
"""

import json
import logging
import sys
from datetime import datetime, timezone
from typing import Any


class StructuredJsonFormatter(logging.Formatter):
    """
    JSON formatter for structured logging.

    Outputs logs as single-line JSON objects with timestamp, level,
    logger and message fields, plus any extra context fields.
    """

    def format(self, record: logging.LogRecord) -> str:
        """Format log record as JSON."""
        log_obj: dict[str, Any] = {
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }

        if record.exc_info:
            log_obj["exception"] = self.formatException(record.exc_info)

        # Extra fields (excluding standard LogRecord attributes)
        standard_attrs = {
            "name", "msg", "args", "created", "filename", "funcName",
            "levelname", "levelno", "lineno", "module", "msecs",
            "pathname", "process", "processName", "relativeCreated",
            "stack_info", "exc_info", "exc_text", "thread", "threadName",
            "taskName", "message"
        }
        for key, value in record.__dict__.items():
            if key not in standard_attrs and not key.startswith("_"):
                try:
                    json.dumps(value)
                    log_obj[key] = value
                except (TypeError, ValueError):
                    log_obj[key] = str(value)

        return json.dumps(log_obj, default=str)


def configure_logging(
    level: int | str = logging.INFO,
    json_output: bool = False,
    logger_name: str | None = "note_access",
) -> logging.Logger:
    """
    Configure logging for the note_access package.

    Args:
        level: Logging level (default: INFO)
        json_output: Emit single-line JSON instead of plain text
        logger_name: Logger to configure (default: package logger)

    Returns:
        Configured logger instance
    """
    logger = logging.getLogger(logger_name)

    # Remove existing handlers to avoid duplicates
    logger.handlers.clear()

    handler = logging.StreamHandler(sys.stdout)
    if json_output:
        handler.setFormatter(StructuredJsonFormatter())
    else:
        handler.setFormatter(logging.Formatter("%(asctime)s %(levelname)s %(name)s %(message)s"))

    logger.addHandler(handler)
    logger.setLevel(level)

    return logger


def get_access_logger(name: str) -> logging.Logger:
    """
    Get a logger for a package component.

    Args:
        name: Component name (e.g., 'controller', 'store')

    Returns:
        Logger instance named 'note_access.{name}'
    """
    return logging.getLogger(f"note_access.{name}")


class AccessLoggerAdapter(logging.LoggerAdapter):
    """Logger adapter that stamps subject/note context on every record."""

    def process(self, msg: str, kwargs: dict[str, Any]) -> tuple[str, dict[str, Any]]:
        """Add extra context to log record."""
        extra = kwargs.get("extra", {})
        extra.update(self.extra)
        kwargs["extra"] = extra
        return msg, kwargs
