"""Destinations for session status messages and rendered reports."""

from __future__ import annotations

import logging
from typing import List, Optional, Protocol, Tuple

from rich.console import Console

LOGGER_NAME = "time_perf"


class MessageSink(Protocol):
    def emit(self, message: str, level: int = logging.INFO) -> None:
        ...


class ConsoleSink:
    """Print messages straight to a rich console.

    Markup is disabled because reports contain ``[TimePerf]`` style tags.
    """

    def __init__(self, console: Optional[Console] = None) -> None:
        self.console = console or Console()

    def emit(self, message: str, level: int = logging.INFO) -> None:
        style = "bold yellow" if level >= logging.WARNING else None
        self.console.print(message, style=style, markup=False, highlight=False, soft_wrap=True)


class LoggerSink:
    """Forward messages to a standard-library logger.

    While logging is unconfigured (no handler anywhere up the logger
    hierarchy) messages go to ``fallback`` instead, since Python's last-resort
    handler drops everything below WARNING.
    """

    def __init__(self, logger: Optional[logging.Logger] = None, fallback: Optional[ConsoleSink] = None) -> None:
        self.logger = logger or logging.getLogger(LOGGER_NAME)
        self.fallback = fallback or ConsoleSink()

    def emit(self, message: str, level: int = logging.INFO) -> None:
        if not self.logger.hasHandlers():
            self.fallback.emit(message, level)
            return
        self.logger.log(level, message)


class MemorySink:
    """Keep every message in memory."""

    def __init__(self) -> None:
        self.records: List[Tuple[int, str]] = []

    def emit(self, message: str, level: int = logging.INFO) -> None:
        self.records.append((level, message))

    @property
    def messages(self) -> List[str]:
        return [message for _, message in self.records]

    @property
    def warnings(self) -> List[str]:
        return [message for level, message in self.records if level >= logging.WARNING]

    def clear(self) -> None:
        self.records.clear()


def build_sink(name: str) -> MessageSink:
    key = name.lower()
    if key == "logger":
        return LoggerSink()
    if key == "console":
        return ConsoleSink()
    if key == "memory":
        return MemorySink()
    raise ValueError(f"Unknown sink '{name}', expected 'logger', 'console' or 'memory'")


__all__ = ["LOGGER_NAME", "MessageSink", "LoggerSink", "ConsoleSink", "MemorySink", "build_sink"]
