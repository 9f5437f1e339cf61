"""
Structured logging configuration using python-json-logger.

Production logs are one JSON object per line carrying a UTC timestamp,
level, logger name, service, version and environment, plus any ``extra``
fields the call site passes (actor and target ids, latency, ...).
"""

import logging
import sys
from datetime import datetime, timezone
from typing import Any

from pythonjsonlogger import jsonlogger

from acquisitions.core.config import settings

_HANDLER_NAME = "acquisitions"
JSON_LOG_FORMAT = "%(timestamp)s %(level)s %(name)s %(message)s"
TEXT_LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


class ServiceJsonFormatter(jsonlogger.JsonFormatter):
    """JSON formatter stamping every record with service metadata."""

    def add_fields(
        self,
        log_record: dict[str, Any],
        record: logging.LogRecord,
        message_dict: dict[str, Any],
    ) -> None:
        super().add_fields(log_record, record, message_dict)
        log_record["timestamp"] = datetime.fromtimestamp(record.created, tz=timezone.utc).isoformat()
        log_record["level"] = record.levelname
        log_record["service"] = settings.PROJECT_NAME
        log_record["version"] = settings.VERSION
        log_record["environment"] = settings.ENVIRONMENT


def build_formatter(debug: bool) -> logging.Formatter:
    """Plain text for local debugging, JSON lines otherwise."""
    if debug:
        return logging.Formatter(TEXT_LOG_FORMAT, datefmt="%Y-%m-%d %H:%M:%S")
    return ServiceJsonFormatter(JSON_LOG_FORMAT)


def setup_logging() -> None:
    """
    Configure the root logger once for the whole process.

    Safe to call more than once: the application handler is replaced,
    not duplicated.
    """
    handler = logging.StreamHandler(sys.stdout)
    handler.set_name(_HANDLER_NAME)
    handler.setFormatter(build_formatter(settings.DEBUG))

    root_logger = logging.getLogger()
    root_logger.setLevel(logging.DEBUG if settings.DEBUG else logging.INFO)
    for existing in list(root_logger.handlers):
        if existing.get_name() == _HANDLER_NAME:
            root_logger.removeHandler(existing)
    root_logger.addHandler(handler)

    # Request logging middleware already writes one line per request
    logging.getLogger("uvicorn.access").setLevel(logging.WARNING)


def get_logger(name: str) -> logging.Logger:
    """Return the logger for a module (pass ``__name__``)."""
    return logging.getLogger(name)
