"""
Logging configuration for the Chat Markup service.

This module provides:
- Structured JSON logging support for better log parsing
- A service-specific logger for the markup engine and its API
- Third-party library log level configuration
"""

import json
import logging
import sys
from datetime import datetime, timezone
from typing import Any

from .settings import get_settings

settings = get_settings()

# Attributes every LogRecord carries; anything else came in through `extra=`.
_RESERVED_ATTRS = frozenset(
    {
        "name",
        "msg",
        "args",
        "asctime",
        "created",
        "filename",
        "funcName",
        "levelname",
        "levelno",
        "lineno",
        "module",
        "msecs",
        "message",
        "pathname",
        "process",
        "processName",
        "relativeCreated",
        "thread",
        "threadName",
        "exc_info",
        "exc_text",
        "stack_info",
        "taskName",
    }
)


def extra_fields(record: logging.LogRecord) -> dict[str, Any]:
    """Return the fields attached to a record via ``logger.info(..., extra={...})``."""
    return {key: value for key, value in record.__dict__.items() if key not in _RESERVED_ATTRS}


class StructuredFormatter(logging.Formatter):
    """
    JSON formatter for structured logging.

    Outputs log records as JSON objects for easy parsing and analysis.
    Includes standard fields plus any extra fields from the log record.
    """

    def format(self, record: logging.LogRecord) -> str:
        """Format the log record as a JSON string."""
        log_dict: dict[str, Any] = {
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }

        # Source location only for warnings and above
        if record.levelno >= logging.WARNING:
            log_dict["source"] = {
                "file": record.pathname,
                "line": record.lineno,
                "function": record.funcName,
            }

        if record.exc_info:
            exc_type, exc_value, _ = record.exc_info
            log_dict["exception"] = {
                "type": exc_type.__name__ if exc_type else None,
                "message": str(exc_value) if exc_value else None,
                "traceback": self.formatException(record.exc_info),
            }

        log_dict.update(extra_fields(record))
        return json.dumps(log_dict, default=str)


class HumanReadableFormatter(logging.Formatter):
    """
    Human-readable formatter that appends ``extra`` context as key=value pairs.
    """

    def format(self, record: logging.LogRecord) -> str:
        """Format the log record as a human-readable string."""
        base_format = super().format(record)

        extras = extra_fields(record)
        if extras:
            return base_format + " | " + " | ".join(f"{k}={v}" for k, v in extras.items())

        return base_format


def setup_logging(level: str, use_json: bool = False) -> None:
    """
    Configure logging for the application.

    Args:
        level: Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        use_json: If True, use JSON structured logging; otherwise use human-readable format
    """
    if use_json:
        formatter: logging.Formatter = StructuredFormatter()
    else:
        formatter = HumanReadableFormatter(
            fmt="%(asctime)s | %(levelname)-7s | %(name)s | %(message)s",
            datefmt="%Y-%m-%d %H:%M:%S",
        )

    root_logger = logging.getLogger()
    root_logger.setLevel(level.upper())

    for handler in root_logger.handlers[:]:
        root_logger.removeHandler(handler)

    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setFormatter(formatter)
    root_logger.addHandler(console_handler)

    for name in ("uvicorn", "uvicorn.error", "uvicorn.access"):
        logging.getLogger(name).setLevel(level.upper())

    # Reduce noise from chatty libraries
    logging.getLogger("httpx").setLevel(logging.WARNING)
    logging.getLogger("watchfiles").setLevel(logging.WARNING)


# JSON logging in production (ENV=prod)
use_json_logging = settings.ENV.lower() == "prod"

setup_logging(settings.LOG_LEVEL, use_json=use_json_logging)

logger_markup = logging.getLogger(settings.MARKUP_LOG_NAME)

if use_json_logging:
    logger_markup.info("JSON structured logging enabled")
else:
    logger_markup.info("Human-readable logging enabled (set ENV=prod for JSON logging)")
