"""Utility functions."""

from .async_bridge import run_async_in_sync
from .console import console
from .logging import LogEntry, LogLevel, MigrationLogger, get_logger, setup_logging

__all__ = [
    "LogEntry",
    "LogLevel",
    "MigrationLogger",
    "console",
    "get_logger",
    "run_async_in_sync",
    "setup_logging",
]
