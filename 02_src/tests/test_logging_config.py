"""Tests for logging configuration."""

import json
import logging
import sys
from datetime import datetime, timezone

import pytest

from coordinator.logger import StdlibLogger
from coordinator.logging_config import JSONFormatter, get_logger, setup_logging


@pytest.fixture
def restore_root_logger():
    """Put the root logger back after setup_logging() replaces its handlers."""
    root = logging.getLogger()
    handlers = root.handlers[:]
    level = root.level
    yield
    for handler in root.handlers[:]:
        if handler not in handlers:
            handler.close()
    root.handlers[:] = handlers
    root.setLevel(level)


class TestJSONFormatter:
    """Tests for JSONFormatter."""

    def test_format_record(self):
        """Test that records become JSON objects."""
        record = logging.LogRecord(
            "coordinator.test", logging.INFO, __file__, 10, "hello %s", ("node-1",), None
        )

        data = json.loads(JSONFormatter().format(record))

        assert data["level"] == "INFO"
        assert data["logger"] == "coordinator.test"
        assert data["message"] == "hello node-1"
        assert data["line"] == 10
        assert "context" not in data

    def test_format_context_with_datetime(self):
        """Test that record context is serialised, datetimes included."""
        record = logging.LogRecord(
            "coordinator.test", logging.WARNING, __file__, 1, "slow", None, None
        )
        record.context = {"timestamp": datetime(2024, 1, 1, tzinfo=timezone.utc)}

        data = json.loads(JSONFormatter().format(record))

        assert data["context"]["timestamp"].startswith("2024-01-01")

    def test_format_exception(self):
        """Test that exception info is included."""
        try:
            raise RuntimeError("boom")
        except RuntimeError:
            record = logging.LogRecord(
                "coordinator.test", logging.ERROR, __file__, 1, "failed", None, sys.exc_info()
            )

        data = json.loads(JSONFormatter().format(record))
        assert "RuntimeError: boom" in data["exception"]


class TestSetupLogging:
    """Tests for setup_logging()."""

    def test_writes_json_file(self, tmp_path, restore_root_logger):
        """Test that structured logger output lands in the JSON log file."""
        log_file = tmp_path / "logs" / "coordinator.log"
        setup_logging(log_level="debug", log_file=str(log_file))

        StdlibLogger(get_logger("coordinator.test")).info(
            "boot", "started", context={"resource_id": "node-1"}
        )
        for handler in logging.getLogger().handlers:
            handler.flush()

        lines = log_file.read_text(encoding="utf-8").splitlines()
        data = json.loads(lines[-1])
        assert data["message"] == "[boot] started"
        assert data["context"] == {"resource_id": "node-1"}
        assert logging.getLogger().level == logging.DEBUG
