"""Logging helpers for consistent instrumentation output."""

from __future__ import annotations

import logging

from rich.console import Console
from rich.logging import RichHandler

from ..config import LoggingConfig


def setup_logging(level: str = "INFO", rich_tracebacks: bool = True) -> None:
    """Configure the root logger with optional rich tracebacks."""

    console = Console()
    handler = RichHandler(console=console, rich_tracebacks=rich_tracebacks, markup=False)
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.INFO),
        format="%(message)s",
        datefmt="[%X]",
        handlers=[handler],
    )


def setup_logging_from_config(config: LoggingConfig) -> None:
    setup_logging(level=config.level, rich_tracebacks=config.rich_tracebacks)


__all__ = ["setup_logging", "setup_logging_from_config"]
