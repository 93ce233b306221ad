"""Tests for logging utilities."""

import logging
import re
from datetime import UTC, datetime

import pytest

from portfolio_migrator.utils.logging import (
    LogEntry,
    LogLevel,
    MigrationLogger,
    get_logger,
    setup_logging,
)


class TestSetupLogging:
    """Test stdlib logging configuration."""

    def test_get_logger_is_namespaced(self) -> None:
        """Test loggers are created under the package namespace."""
        assert get_logger("images").name == "portfolio_migrator.images"
        assert get_logger("portfolio_migrator.cli").name == "portfolio_migrator.cli"

    def test_setup_logging_writes_file(self, tmp_path) -> None:
        """Test a log file handler receives debug output."""
        log_file = tmp_path / "logs" / "run.log"
        root = setup_logging(level="DEBUG", log_file=log_file)

        get_logger("test").debug("hello file")
        for handler in root.handlers:
            handler.flush()

        assert "hello file" in log_file.read_text()


class TestLogEntry:
    """Test LogEntry formatting."""

    @pytest.fixture
    def timestamp(self) -> datetime:
        return datetime(2024, 1, 2, 3, 4, 5, 678000, tzinfo=UTC)

    def test_format_with_context(self, timestamp: datetime) -> None:
        """Test the export line includes the JSON context."""
        entry = LogEntry(timestamp, LogLevel.INFO, "hi", context={"count": 2})
        assert entry.format() == '[2024-01-02T03:04:05.678Z] INFO: hi | Context: {"count": 2}'

    def test_format_with_error(self, timestamp: datetime) -> None:
        """Test an error without traceback is rendered inline."""
        entry = LogEntry(timestamp, LogLevel.ERROR, "failed", error=ValueError("bad"))
        assert entry.format() == "[2024-01-02T03:04:05.678Z] ERROR: failed | Error: bad"

    def test_format_with_traceback(self, timestamp: datetime) -> None:
        """Test a raised error adds its stack trace."""
        try:
            raise RuntimeError("boom")
        except RuntimeError as e:
            error = e

        line = LogEntry(timestamp, LogLevel.ERROR, "failed", error=error).format()
        assert line.startswith("[2024-01-02T03:04:05.678Z] ERROR: failed | Error: boom\nStack: ")


class TestMigrationLogger:
    """Test the per-run log buffer."""

    def test_filters_below_min_level(self) -> None:
        """Test entries below the minimum level are dropped."""
        logger = MigrationLogger(LogLevel.WARN)
        logger.debug("d")
        logger.info("i")
        logger.warn("w")
        logger.error("e")

        assert [entry.message for entry in logger.get_logs()] == ["w", "e"]

    def test_get_logs_by_level(self) -> None:
        """Test entries can be selected by exact level."""
        logger = MigrationLogger(LogLevel.DEBUG)
        logger.info("one")
        logger.warn("two")
        logger.info("three")

        assert [entry.message for entry in logger.get_logs_by_level(LogLevel.INFO)] == [
            "one",
            "three",
        ]

    def test_get_logs_returns_copy(self) -> None:
        """Test callers cannot mutate the buffer through get_logs."""
        logger = MigrationLogger()
        logger.info("kept")
        logger.get_logs().clear()
        assert len(logger.get_logs()) == 1

    def test_clear_logs(self) -> None:
        """Test clearing empties the buffer."""
        logger = MigrationLogger()
        logger.info("gone")
        logger.clear_logs()
        assert logger.get_logs() == []
        assert logger.export_logs() == ""

    def test_export_logs(self) -> None:
        """Test the export has one formatted line per entry."""
        logger = MigrationLogger()
        logger.info("Starting", {"url": "https://x.example"})
        logger.error("Failed", ValueError("bad"), {"stage": "fetch"})

        lines = logger.export_logs().split("\n")
        assert re.fullmatch(
            r'\[\d{4}-\d\d-\d\dT\d\d:\d\d:\d\d\.\d{3}Z\] INFO: Starting '
            r'\| Context: \{"url": "https://x\.example"\}',
            lines[0],
        )
        assert lines[1].endswith('ERROR: Failed | Context: {"stage": "fetch"} | Error: bad')

    def test_mirrors_to_stdlib(self, caplog: pytest.LogCaptureFixture) -> None:
        """Test kept entries are forwarded to the stdlib logger."""
        logger = MigrationLogger(LogLevel.INFO, name="mirror-test")
        with caplog.at_level(logging.INFO, logger="portfolio_migrator"):
            logger.warn("careful", {"n": 1})

        record = caplog.records[-1]
        assert record.name == "portfolio_migrator.mirror-test"
        assert record.levelno == logging.WARNING
        assert record.getMessage() == 'careful | {"n": 1}'
