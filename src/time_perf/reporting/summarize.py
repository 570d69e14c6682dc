"""Summarise timing sessions as tables."""

from __future__ import annotations

import math
from typing import TYPE_CHECKING, Dict, List

import pandas as pd

if TYPE_CHECKING:  # pragma: no cover
    from ..session import TimingSession

COLUMNS = ["session", "depth", "index", "name", "duration_ms", "percentage"]


def flatten_session(session: "TimingSession") -> List[Dict[str, object]]:
    """Return one record per interval, children listed after their step."""

    records: List[Dict[str, object]] = []
    steps = session.steps
    if len(steps) < 2:
        return records
    total = steps[-1].timestamp - steps[0].timestamp
    for i in range(1, len(steps)):
        duration = steps[i].timestamp - steps[i - 1].timestamp
        records.append(
            {
                "session": session.name,
                "depth": session.depth,
                "index": i,
                "name": steps[i].name,
                "duration_ms": duration,
                "percentage": 100 * duration / total if total else math.nan,
            }
        )
        for child in steps[i].children:
            records.extend(flatten_session(child))
    return records


def summarise_session(session: "TimingSession") -> pd.DataFrame:
    """Convert a session tree to a tidy :class:`~pandas.DataFrame`."""

    return pd.DataFrame(flatten_session(session), columns=COLUMNS)


__all__ = ["COLUMNS", "flatten_session", "summarise_session"]
