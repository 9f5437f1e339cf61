"""
Tests for log formatting.
"""

import json
import logging
from datetime import datetime

from acquisitions.core.config import settings
from acquisitions.core.logging import JSON_LOG_FORMAT, ServiceJsonFormatter, build_formatter


def _record(**extra) -> logging.LogRecord:
    record = logging.LogRecord(
        "acquisitions.test", logging.WARNING, __file__, 1, "User not found", None, None
    )
    record.__dict__.update(extra)
    return record


def test_json_log_line_has_timestamp_and_service_fields() -> None:
    line = json.loads(ServiceJsonFormatter(JSON_LOG_FORMAT).format(_record(actor_id=3, user_id=9)))

    assert line["timestamp"] is not None
    assert datetime.fromisoformat(line["timestamp"]).utcoffset().total_seconds() == 0
    assert line["level"] == "WARNING"
    assert line["name"] == "acquisitions.test"
    assert line["message"] == "User not found"
    assert line["service"] == settings.PROJECT_NAME
    assert line["environment"] == settings.ENVIRONMENT
    assert line["actor_id"] == 3
    assert line["user_id"] == 9


def test_build_formatter() -> None:
    assert isinstance(build_formatter(debug=False), ServiceJsonFormatter)
    text = build_formatter(debug=True).format(_record())
    assert "acquisitions.test - WARNING - User not found" in text
