"""Named timing sessions, created on first use."""

from __future__ import annotations

import contextlib
from typing import Dict, Hashable, Iterator, Optional

from .clock import Clock, resolve_clock
from .config import TimePerfConfig
from .session import TimingSession
from .sinks import MessageSink, build_sink


class InstanceRegistry:
    """Map of keys to root :class:`TimingSession` objects.

    Meant for interleaving independent measurements (one per request, per
    job, ...) without passing sessions around. It is a plain dict underneath
    and offers no locking.
    """

    def __init__(
        self,
        *,
        clock: Optional[Clock] = None,
        sink: Optional[MessageSink] = None,
        config: Optional[TimePerfConfig] = None,
    ) -> None:
        self.config = config or TimePerfConfig()
        self.clock = clock or resolve_clock(self.config.clock.source)
        self.sink = sink or build_sink(self.config.logging.sink)
        self.instances: Dict[Hashable, TimingSession] = {}

    @classmethod
    def from_config(cls, config: TimePerfConfig) -> "InstanceRegistry":
        """Build a registry whose clock and sink are named in ``config``."""

        return cls(
            clock=resolve_clock(config.clock.source),
            sink=build_sink(config.logging.sink),
            config=config,
        )

    def __contains__(self, key: Hashable) -> bool:
        return key in self.instances

    def __len__(self) -> int:
        return len(self.instances)

    def new_instance(self, key: Hashable) -> TimingSession:
        """Return the session stored under ``key``, creating it if needed."""

        if key not in self.instances:
            self.instances[key] = TimingSession(clock=self.clock, sink=self.sink, config=self.config)
        return self.instances[key]

    def get_instance(self, key: Hashable) -> TimingSession:
        return self.new_instance(key)

    def start_instance(self, key: Hashable) -> TimingSession:
        """Unpause the session under ``key`` or start it, named after the key."""

        session = self.get_instance(key)
        if session.is_paused:
            session.unpause()
        else:
            session.start(str(key))
        return session

    def stop_instance(self, key: Hashable, end_condition: bool = True) -> TimingSession:
        """Pause the session, or when ``end_condition`` holds stop, print and drop it.

        The returned session stays usable after it has been dropped.
        """

        session = self.get_instance(key)
        if end_condition:
            session.stop().print()
            del self.instances[key]
        else:
            session.pause()
        return session

    def clean_instances(self) -> None:
        """Forget every session without stopping it."""

        self.instances = {}

    @contextlib.contextmanager
    def time(self, key: Hashable, end_condition: bool = True) -> Iterator[TimingSession]:
        """Wrap a block in :meth:`start_instance` / :meth:`stop_instance`."""

        session = self.start_instance(key)
        try:
            yield session
        finally:
            self.stop_instance(key, end_condition)


__all__ = ["InstanceRegistry"]
