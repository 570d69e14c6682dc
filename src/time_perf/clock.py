"""Millisecond clock sources used to timestamp steps."""

from __future__ import annotations

import time
from typing import Callable, Dict

NS_PER_MS = 1_000_000

Clock = Callable[[], int]


def monotonic_ms() -> int:
    """Milliseconds from the monotonic clock. Immune to system clock changes."""

    return time.monotonic_ns() // NS_PER_MS


def wall_ms() -> int:
    """Milliseconds since the Unix epoch."""

    return time.time_ns() // NS_PER_MS


class ManualClock:
    """Clock that only moves when told to."""

    def __init__(self, start: int = 0) -> None:
        self.now = int(start)

    def __call__(self) -> int:
        return self.now

    def advance(self, ms: int) -> int:
        if ms < 0:
            raise ValueError("ManualClock cannot move backwards")
        self.now += int(ms)
        return self.now


_CLOCKS: Dict[str, Clock] = {
    "monotonic": monotonic_ms,
    "wall": wall_ms,
}


def resolve_clock(source: str) -> Clock:
    try:
        return _CLOCKS[source.lower()]
    except KeyError as exc:
        raise ValueError(f"Unknown clock source '{source}', expected one of {sorted(_CLOCKS)}") from exc


__all__ = ["Clock", "ManualClock", "NS_PER_MS", "monotonic_ms", "resolve_clock", "wall_ms"]
