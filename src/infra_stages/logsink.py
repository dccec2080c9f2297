"""
Log sinks for infra-stages.

Components that emit diagnostics take a LogSink in their constructor instead
of writing to a process-wide logger. Tests swap in their own sink to capture
or silence output.
"""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from typing import Any

DEFAULT_LOGGER_NAME = "infra_stages"


class LogSink(ABC):
    """
    Destination for diagnostic messages.

    Messages use %-style formatting, like the standard logging module.
    Callers must never pass secret material (private keys, passwords, raw
    saved bytes) as an argument.
    """

    @abstractmethod
    def logf(self, fmt: str, *args: Any) -> None:
        """Emit a formatted message."""
        pass


class LoggingSink(LogSink):
    """Sink that forwards messages to a standard library logger."""

    def __init__(self, logger: logging.Logger | None = None, level: int = logging.INFO):
        self.logger = logger or logging.getLogger(DEFAULT_LOGGER_NAME)
        self.level = level

    def logf(self, fmt: str, *args: Any) -> None:
        self.logger.log(self.level, fmt, *args)


class NullSink(LogSink):
    """Sink that discards every message."""

    def logf(self, fmt: str, *args: Any) -> None:
        return None


def default_sink() -> LogSink:
    """Return the sink used when a component is not given one."""
    return LoggingSink()
