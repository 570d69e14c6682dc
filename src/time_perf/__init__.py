"""time_perf
=========

Lightweight in-process timing. Mark named steps, pause the clock, nest child
sessions under a step and print a percentage breakdown::

    from time_perf import TimingSession

    perf = TimingSession()
    perf.start("Import")
    load()
    perf.step("Load")
    transform()
    perf.stop("Transform").print()

:class:`InstanceRegistry` keeps sessions by key for measurements that are
spread over several call sites.
"""

from .clock import ManualClock, monotonic_ms, wall_ms
from .config import TimePerfConfig, load_config
from .registry import InstanceRegistry
from .session import SoftFailure, Step, TimingSession
from .sinks import ConsoleSink, LoggerSink, MemorySink

__all__ = [
    "ConsoleSink",
    "InstanceRegistry",
    "LoggerSink",
    "ManualClock",
    "MemorySink",
    "SoftFailure",
    "Step",
    "TimePerfConfig",
    "TimingSession",
    "load_config",
    "monotonic_ms",
    "wall_ms",
]
