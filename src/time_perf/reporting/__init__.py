"""Report rendering and summaries for timing sessions."""

from .render import banner, render_full, render_insufficient, render_interval
from .summarize import flatten_session, summarise_session

__all__ = [
    "banner",
    "render_full",
    "render_insufficient",
    "render_interval",
    "flatten_session",
    "summarise_session",
]
