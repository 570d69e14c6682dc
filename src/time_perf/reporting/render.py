"""Text rendering of timing sessions.

The functions here only read a session; :meth:`TimingSession.print` decides
which one applies and stores the outcome on the session.
"""

from __future__ import annotations

import math
from typing import TYPE_CHECKING, List, Tuple

from ..config import ReportConfig

if TYPE_CHECKING:  # pragma: no cover
    from ..session import TimingSession

BANNER_WIDTH = 29


def indent_for(depth: int, unit: str = "\t") -> str:
    return unit * depth


def banner(title: str) -> str:
    """Return the three-line box printed above root reports."""

    width = max(BANNER_WIDTH, len(title) + 2)
    return (
        "┌" + "─" * width + "┐\n"
        "│" + title.center(width) + "│\n"
        "├" + "─" * width + "┘\n"
    )


def render_insufficient(session: "TimingSession", indent: str) -> str:
    """Diagnostic for a session that cannot produce a single interval."""

    text = f"{indent}/!\\ {session.tag}{session.name} did not find enough steps to display a result\n"
    if len(session.steps) == 1:
        text += f"{indent}\t> {session.name} is started but never stepped/stopped\n"
    else:
        text += f"{indent}\t> {session.name} has not been started\n"
    return text


def render_interval(session: "TimingSession", index: int, indent: str) -> Tuple[str, int]:
    """Render the duration of the interval ending at ``steps[index]``."""

    step = session.steps[index]
    duration = step.timestamp - session.steps[index - 1].timestamp
    return f"{indent}> {step.name}\t: {duration} ms\n", duration


def _percentage(duration: int, total: int) -> float:
    if total == 0:
        return math.nan
    return 100 * duration / total


def render_full(session: "TimingSession", indent: str, config: ReportConfig) -> Tuple[str, List[float]]:
    """Render every interval of ``session`` with its children spliced in.

    Children are rendered silently through their own ``print`` so that their
    cached text and results are refreshed as a side effect, exactly as a
    direct call would.
    """

    steps = session.steps
    total = steps[-1].timestamp - steps[0].timestamp
    lines: List[str] = []
    if session.depth == 0 and config.banner:
        lines.append(banner(config.title))
    lines.append(f"│{indent} « {session.name} »\n")
    lines.append(f"│{indent}▐ TimePerf duration : {total} ms\n")
    lines.append(f"│{indent}▐ Pause duration    : {session.pause_time} ms\n")

    percentages: List[float] = []
    for i in range(1, len(steps)):
        step = steps[i]
        duration = step.timestamp - steps[i - 1].timestamp
        percentage = _percentage(duration, total)
        percentages.append(percentage)
        lines.append(f"│{indent} ■ {i}. {step.name}\t: {percentage:.{config.precision}f} %\t ({duration} ms)\n")
        for child in step.children:
            lines.append(child.print(silent=True).str_result)
    return "".join(lines), percentages


__all__ = ["BANNER_WIDTH", "banner", "indent_for", "render_full", "render_insufficient", "render_interval"]
