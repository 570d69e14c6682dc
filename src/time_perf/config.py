"""Configuration utilities for :mod:`time_perf`."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Mapping

import yaml


@dataclass
class ReportConfig:
    """Layout of rendered reports."""

    indent_unit: str = "\t"
    precision: int = 2
    banner: bool = True
    title: str = "TimePerf result"


@dataclass
class ClockConfig:
    """Which clock timestamps steps (``monotonic`` or ``wall``)."""

    source: str = "monotonic"


@dataclass
class LoggingConfig:
    """Logging verbosity and where session messages are sent."""

    level: str = "INFO"
    rich_tracebacks: bool = True
    sink: str = "logger"


@dataclass
class TimePerfConfig:
    """Top-level configuration object composed of sub-configurations."""

    tag: str = "[TimePerf] "
    report: ReportConfig = field(default_factory=ReportConfig)
    clock: ClockConfig = field(default_factory=ClockConfig)
    logging: LoggingConfig = field(default_factory=LoggingConfig)


def load_yaml(path: Path) -> Mapping[str, Any]:
    """Load a YAML document and return a mapping."""

    with Path(path).open("r", encoding="utf-8") as handle:
        data = yaml.safe_load(handle) or {}
    if not isinstance(data, Mapping):
        raise TypeError(f"{path} must contain a mapping")
    return data


def config_from_mapping(raw: Mapping[str, Any]) -> TimePerfConfig:
    """Build :class:`TimePerfConfig` from a mapping, defaulting missing keys."""

    defaults = TimePerfConfig()
    report = raw.get("report") or {}
    clock = raw.get("clock") or {}
    logging_cfg = raw.get("logging") or {}

    return TimePerfConfig(
        tag=str(raw.get("tag", defaults.tag)),
        report=ReportConfig(
            indent_unit=str(report.get("indent_unit", defaults.report.indent_unit)),
            precision=int(report.get("precision", defaults.report.precision)),
            banner=bool(report.get("banner", defaults.report.banner)),
            title=str(report.get("title", defaults.report.title)),
        ),
        clock=ClockConfig(source=str(clock.get("source", defaults.clock.source))),
        logging=LoggingConfig(
            level=str(logging_cfg.get("level", defaults.logging.level)),
            rich_tracebacks=bool(logging_cfg.get("rich_tracebacks", defaults.logging.rich_tracebacks)),
            sink=str(logging_cfg.get("sink", defaults.logging.sink)),
        ),
    )


def load_config(path: Path) -> TimePerfConfig:
    """Load :class:`TimePerfConfig` from ``path``."""

    return config_from_mapping(load_yaml(path))


__all__ = [
    "ReportConfig",
    "ClockConfig",
    "LoggingConfig",
    "TimePerfConfig",
    "load_yaml",
    "config_from_mapping",
    "load_config",
]
