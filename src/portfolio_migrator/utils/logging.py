"""Centralized logging configuration for portfolio-migrator.

Two layers:
- ``setup_logging``/``get_logger``: stdlib loggers under the
  ``portfolio_migrator`` namespace, used for module diagnostics.
- ``MigrationLogger``: a per-run, in-memory log buffer that mirrors every
  entry to a stdlib logger and can export the whole run as text.
"""

import json
import logging
import sys
import traceback
from dataclasses import dataclass, field
from datetime import UTC, datetime
from enum import IntEnum
from pathlib import Path
from typing import Any, Literal

LogLevelName = Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]

ROOT_LOGGER_NAME = "portfolio_migrator"

# Module-level logger cache
_loggers: dict[str, logging.Logger] = {}


def setup_logging(
    level: LogLevelName = "INFO",
    log_file: Path | None = None,
    console_level: LogLevelName = "WARNING",
) -> logging.Logger:
    """Configure application logging.

    Args:
        level: Root logging level
        log_file: Optional file path for logging
        console_level: Level for console output (default WARNING to keep CLI clean)

    Returns:
        Configured root logger instance
    """
    logger = logging.getLogger(ROOT_LOGGER_NAME)
    logger.setLevel(getattr(logging, level))

    # Clear existing handlers
    logger.handlers.clear()

    console_handler = logging.StreamHandler(sys.stderr)
    console_handler.setLevel(getattr(logging, console_level))
    console_handler.setFormatter(logging.Formatter("%(levelname)s: %(message)s"))
    logger.addHandler(console_handler)

    if log_file:
        log_file.parent.mkdir(parents=True, exist_ok=True)
        file_handler = logging.FileHandler(log_file)
        file_handler.setLevel(logging.DEBUG)
        file_format = logging.Formatter("%(asctime)s - %(name)s - %(levelname)s - %(message)s")
        file_handler.setFormatter(file_format)
        logger.addHandler(file_handler)

    return logger


def get_logger(name: str) -> logging.Logger:
    """Get a named logger under the portfolio_migrator namespace.

    Args:
        name: Logger name (will be prefixed with 'portfolio_migrator.')

    Returns:
        Logger instance
    """
    prefix = f"{ROOT_LOGGER_NAME}."
    full_name = name if name.startswith(prefix) else f"{prefix}{name}"

    if full_name not in _loggers:
        _loggers[full_name] = logging.getLogger(full_name)

    return _loggers[full_name]


class LogLevel(IntEnum):
    """Run log levels, numerically aligned with the stdlib levels."""

    DEBUG = logging.DEBUG
    INFO = logging.INFO
    WARN = logging.WARNING
    ERROR = logging.ERROR


@dataclass(frozen=True)
class LogEntry:
    """One immutable entry of a migration run log."""

    timestamp: datetime
    level: LogLevel
    message: str
    context: dict[str, Any] | None = None
    error: BaseException | None = field(default=None, compare=False)

    def format(self) -> str:
        """Render the entry as one export line (plus traceback, if any)."""
        output = f"[{_iso(self.timestamp)}] {self.level.name}: {self.message}"
        if self.context:
            output += f" | Context: {json.dumps(self.context, default=str)}"
        if self.error is not None:
            output += f" | Error: {self.error}"
            if self.error.__traceback__ is not None:
                stack = "".join(traceback.format_tb(self.error.__traceback__)).rstrip()
                output += f"\nStack: {stack}"
        return output


def _iso(timestamp: datetime) -> str:
    return timestamp.isoformat(timespec="milliseconds").replace("+00:00", "Z")


class MigrationLogger:
    """Leveled, in-memory log buffer for one migration run.

    Entries below ``min_level`` are dropped. Every kept entry is appended to
    the buffer and mirrored to a stdlib logger, so console output follows the
    regular ``setup_logging`` configuration.
    """

    def __init__(self, min_level: LogLevel = LogLevel.INFO, name: str = "run") -> None:
        self.min_level = LogLevel(min_level)
        self._logs: list[LogEntry] = []
        self._mirror = get_logger(name)

    def debug(self, message: str, context: dict[str, Any] | None = None) -> None:
        self._log(LogLevel.DEBUG, message, context)

    def info(self, message: str, context: dict[str, Any] | None = None) -> None:
        self._log(LogLevel.INFO, message, context)

    def warn(self, message: str, context: dict[str, Any] | None = None) -> None:
        self._log(LogLevel.WARN, message, context)

    def error(
        self,
        message: str,
        error: BaseException | None = None,
        context: dict[str, Any] | None = None,
    ) -> None:
        self._log(LogLevel.ERROR, message, context, error)

    def _log(
        self,
        level: LogLevel,
        message: str,
        context: dict[str, Any] | None = None,
        error: BaseException | None = None,
    ) -> None:
        if level < self.min_level:
            return

        entry = LogEntry(
            timestamp=datetime.now(UTC),
            level=level,
            message=message,
            context=context,
            error=error,
        )
        self._logs.append(entry)
        self._output(entry)

    def _output(self, entry: LogEntry) -> None:
        """Mirror an entry to the stdlib logger."""
        parts = [entry.message]
        if entry.error is not None:
            parts.append(str(entry.error))
        if entry.context:
            parts.append(json.dumps(entry.context, default=str))
        self._mirror.log(int(entry.level), " | ".join(parts))

    def get_logs(self) -> list[LogEntry]:
        """Get a copy of all buffered entries."""
        return list(self._logs)

    def get_logs_by_level(self, level: LogLevel) -> list[LogEntry]:
        """Get buffered entries of exactly ``level``."""
        return [entry for entry in self._logs if entry.level == level]

    def clear_logs(self) -> None:
        self._logs = []

    def export_logs(self) -> str:
        """Render the whole buffer as newline-separated text."""
        return "\n".join(entry.format() for entry in self._logs)
