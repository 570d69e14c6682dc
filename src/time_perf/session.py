"""Hierarchical step recorder.

A :class:`TimingSession` records an ordered list of named, timestamped steps.
Time spent paused is subtracted from every later timestamp, so intervals only
count active time. Child sessions created between two steps are attached to
the second one and rendered inside the parent's report.

Nothing here raises on misuse. Failures are reported through the session's
sink at warning level, remembered in :attr:`TimingSession.last_failure`, and
the call returns something that can still be chained.
"""

from __future__ import annotations

import contextlib
import logging
from dataclasses import dataclass, field
from enum import Enum
from typing import Iterator, List, Optional, Union

from .clock import Clock, resolve_clock
from .config import TimePerfConfig
from .reporting.render import indent_for, render_full, render_insufficient, render_interval
from .sinks import MessageSink, build_sink

Result = Union[int, float, List[float]]


class SoftFailure(str, Enum):
    """Kinds of misuse a session tolerates."""

    STEP_WHILE_PAUSED = "step_while_paused"
    INSUFFICIENT_STEPS = "insufficient_steps"
    UNPAUSE_WITHOUT_PAUSE = "unpause_without_pause"
    CHILD_WITHOUT_PARENT_STEP = "child_without_parent_step"
    NO_CHILD = "no_child"
    INDEX_OUT_OF_RANGE = "index_out_of_range"


@dataclass
class Step:
    """One recorded checkpoint. ``timestamp`` already excludes paused time."""

    timestamp: int
    name: str
    children: List["TimingSession"] = field(default_factory=list)


class TimingSession:
    """Recorder of named steps with pause accounting and nested children.

    Parameters
    ----------
    depth:
        Nesting level. Roots are 0; it drives indentation and whether the
        report banner is printed.
    name:
        Label of the report section. Defaults to ``"TimePerf session <depth>"``.
    clock:
        Callable returning integer milliseconds. Defaults to the source named
        in ``config.clock``.
    sink:
        Where :meth:`log`, :meth:`print` and warnings write. Defaults to the
        sink named in ``config.logging``.
    config:
        Shared :class:`~time_perf.config.TimePerfConfig`.
    """

    def __init__(
        self,
        depth: int = 0,
        *,
        name: Optional[str] = None,
        clock: Optional[Clock] = None,
        sink: Optional[MessageSink] = None,
        config: Optional[TimePerfConfig] = None,
    ) -> None:
        self.config = config or TimePerfConfig()
        self.clock = clock or resolve_clock(self.config.clock.source)
        self.sink = sink or build_sink(self.config.logging.sink)
        self.depth = depth
        self.name = name or f"TimePerf session {depth}"
        self.tag = self.config.tag
        self.steps: List[Step] = []
        self.paused_at: Optional[int] = None
        self.pause_time = 0
        self._result: Result = 0
        self._result_is_index = False
        self.str_result = "TimePerf created"
        self.pending_children: List[TimingSession] = []
        self.last_failure: Optional[SoftFailure] = None

    def __repr__(self) -> str:
        return f"TimingSession(name={self.name!r}, depth={self.depth}, steps={len(self.steps)})"

    @property
    def is_paused(self) -> bool:
        return self.paused_at is not None

    @property
    def result(self) -> Result:
        """Outcome of the last operation (step index, duration or percentages)."""

        return self._result

    @result.setter
    def result(self, value: Result) -> None:
        self._result = value
        self._result_is_index = False

    def _is_step_index(self, value: object) -> bool:
        return self._result_is_index and isinstance(value, int) and 0 < value < len(self.steps)

    # --- internal helpers --------------------------------------------------
    def _emit(self, message: str, level: int = logging.INFO) -> None:
        self.sink.emit(message.rstrip("\n"), level)

    def _warn(self, failure: SoftFailure, message: str) -> None:
        self.last_failure = failure
        self._emit(message, logging.WARNING)

    # --- lifecycle -------------------------------------------------------
    def reset(self) -> "TimingSession":
        """Remove all steps, pending children and pause state."""

        self.steps = []
        self.paused_at = None
        self.pause_time = 0
        self.pending_children = []
        self.result = 0
        self.str_result = "TimePerf reset"
        self.last_failure = None
        return self

    def start(self, name: Optional[str] = None) -> "TimingSession":
        """Reset the session and record its start step."""

        if name:
            self.name = name
        self.reset().step()
        self.result = 0
        self.str_result = f"{self.tag}{self.name} started"
        return self

    def step(self, name: Optional[str] = None) -> "TimingSession":
        """Record a checkpoint. Ignored, with a warning, while paused."""

        self.last_failure = None
        if self.is_paused:
            self.result = 0
            self._warn(
                SoftFailure.STEP_WHILE_PAUSED,
                f"/!\\ {self.tag}{self.name} can't mark a step during a pause or when it's stopped "
                f"({name} step has been ignored)",
            )
            return self
        if not name:
            name = f"Step {len(self.steps) + 1}"
        self.steps.append(Step(self.clock() - self.pause_time, name, self.pending_children))
        self.pending_children = []
        self.result = len(self.steps) - 1
        self._result_is_index = True
        self.str_result = f"{self.tag}> {self.result}. {name}"
        return self

    def stop(self, name: Optional[str] = None) -> "TimingSession":
        """Record a final step (named after the session by default) and pause."""

        self.step(name or self.name).pause()
        self.result = 0
        self.str_result = f"{self.tag}{self.name} stopped"
        return self

    def pause(self) -> "TimingSession":
        # A second call restarts the pause from now.
        self.paused_at = self.clock()
        return self

    def unpause(self) -> "TimingSession":
        """Close the current pause; ``result`` holds its duration."""

        self.last_failure = None
        delta = 0
        if self.paused_at is not None:
            delta = self.clock() - self.paused_at
            self.pause_time += delta
            self.str_result = f"{self.tag}{self.name} has marked a {delta} ms pause"
        else:
            self.str_result = f"/!\\ {self.tag}{self.name} has not been paused before to unpause."
            self._warn(SoftFailure.UNPAUSE_WITHOUT_PAUSE, self.str_result)
        self.paused_at = None
        self.result = delta
        return self

    def get_time(self, index: int) -> Optional[int]:
        """Duration in ms of the interval ending at ``steps[index]``."""

        self.last_failure = None
        if 0 < index < len(self.steps):
            return self.steps[index].timestamp - self.steps[index - 1].timestamp
        self._warn(SoftFailure.INDEX_OUT_OF_RANGE, f"{self.tag}{index} index does not exist")
        return None

    # --- output ------------------------------------------------------------
    def log(self) -> "TimingSession":
        if self.str_result:
            self._emit(self.str_result)
        return self

    def print(self, *, index: Optional[int] = None, silent: bool = False) -> "TimingSession":
        """Render the session into :attr:`str_result` and :attr:`result`.

        Without ``index``, :attr:`result` is used when it still holds a valid
        step index (as left by :meth:`step`); a cached duration or percentage
        list is ignored. Failing that, child sessions fall back to their final
        step. Only index 1 renders a single interval
        (``"> <name>\\t: <ms> ms"``, ``result`` is the duration); any other
        index renders the full report and ``result`` becomes the list of
        percentages, one per interval. With fewer than two steps a diagnostic
        is produced and ``result`` is ``[]``.

        Both arguments are keyword-only. The text is emitted to the sink
        unless ``silent`` is true.
        """

        self.last_failure = None
        level = logging.INFO
        indent = indent_for(self.depth, self.config.report.indent_unit)
        if len(self.steps) < 2:
            self.str_result = render_insufficient(self, indent)
            self.result = []
            self.last_failure = SoftFailure.INSUFFICIENT_STEPS
            level = logging.WARNING
        else:
            if not index:
                if self._is_step_index(self.result):
                    index = self.result
                elif self.depth > 0:
                    index = len(self.steps) - 1
            if index and 0 < index < 2:
                self.str_result, self.result = render_interval(self, int(index), indent)
            else:
                self.str_result, self.result = render_full(self, indent, self.config.report)
        if not silent:
            self._emit(self.str_result, level)
        return self

    def resume(self, *, index: Optional[int] = None, silent: bool = False) -> "TimingSession":
        return self.print(index=index, silent=silent)

    # --- children ------------------------------------------------------------
    def child(self) -> Optional["TimingSession"]:
        """Create a child session that will be attached to the next step.

        Returns ``None`` when the session has no step yet.
        """

        self.last_failure = None
        if not self.steps:
            self._warn(
                SoftFailure.CHILD_WITHOUT_PARENT_STEP,
                f"{self.tag}{self.name} hasn't been started. Child can't be created without available parent",
            )
            return None
        new_child = TimingSession(self.depth + 1, clock=self.clock, sink=self.sink, config=self.config)
        self.pending_children.append(new_child)
        return new_child

    def child_start(self, name: Optional[str] = None) -> "TimingSession":
        """Create and start a child. Returns ``self`` if no child could be made."""

        new_child = self.child()
        if new_child is None:
            return self
        return new_child.start(name)

    def child_stop(self, name: Optional[str] = None) -> "TimingSession":
        """Stop the most recent pending child and return the parent."""

        self.last_failure = None
        if self.pending_children:
            self.pending_children[-1].stop(name)
        else:
            self._warn(SoftFailure.NO_CHILD, f"{self.tag}No child has been started yet")
        return self

    def last_child(self) -> "TimingSession":
        self.last_failure = None
        if self.pending_children:
            return self.pending_children[-1]
        self._warn(SoftFailure.NO_CHILD, f"{self.tag}No child has been started yet")
        return self

    @contextlib.contextmanager
    def child_scope(self, name: Optional[str] = None) -> Iterator["TimingSession"]:
        """Time the enclosed block as a child session."""

        new_child = self.child_start(name)
        try:
            yield new_child
        finally:
            if new_child is not self:
                new_child.stop()


__all__ = ["Result", "SoftFailure", "Step", "TimingSession"]
