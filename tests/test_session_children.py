from __future__ import annotations

import pytest

from time_perf import ManualClock, MemorySink, SoftFailure, TimingSession


def _make_session():
    clock = ManualClock()
    sink = MemorySink()
    return TimingSession(clock=clock, sink=sink), clock, sink


def test_child_started_and_stopped_attaches_to_next_step():
    perf, _, _ = _make_session()
    perf.start("Root")
    perf.child_start("C1")
    assert perf.child_stop() is perf
    perf.step("S1")
    perf.print(silent=True)

    children = perf.steps[1].children
    assert len(children) == 1
    assert children[0].name == "C1"
    assert perf.pending_children == []


def test_child_is_never_attached_to_the_previous_step():
    perf, clock, _ = _make_session()
    perf.start()
    clock.advance(1)
    perf.step("K")
    perf.child_start("late")
    perf.child_stop()

    assert perf.steps[1].children == []

    clock.advance(1)
    perf.step("K+1")
    assert [c.name for c in perf.steps[2].children] == ["late"]


def test_child_shares_clock_sink_and_config():
    perf, _, _ = _make_session()
    perf.start()
    child = perf.child()

    assert child.depth == 1
    assert child.clock is perf.clock
    assert child.sink is perf.sink
    assert child.config is perf.config
    assert perf.pending_children == [child]


def test_child_without_step_fails_softly():
    perf, _, sink = _make_session()

    assert perf.child() is None
    assert perf.last_failure is SoftFailure.CHILD_WITHOUT_PARENT_STEP
    assert perf.child_start("orphan") is perf
    assert perf.pending_children == []
    assert len(sink.warnings) == 2


def test_child_stop_without_child_returns_parent():
    perf, _, sink = _make_session()
    perf.start()

    assert perf.child_stop("nothing") is perf
    assert perf.last_failure is SoftFailure.NO_CHILD
    assert sink.warnings == ["[TimePerf] No child has been started yet"]


def test_child_stop_names_last_child_step():
    perf, clock, _ = _make_session()
    perf.start()
    first = perf.child_start("first")
    second = perf.child_start("second")
    clock.advance(3)
    perf.child_stop("done")

    assert second.steps[-1].name == "done"
    assert second.is_paused
    assert len(first.steps) == 1


def test_last_child_falls_back_to_parent():
    perf, _, _ = _make_session()
    perf.start()
    assert perf.last_child() is perf
    assert perf.last_failure is SoftFailure.NO_CHILD

    child = perf.child()
    assert perf.last_child() is child
    assert perf.last_failure is None


def test_child_scope_stops_child_on_exit():
    perf, clock, _ = _make_session()
    perf.start()
    with perf.child_scope("Inner") as inner:
        clock.advance(4)

    assert inner.is_paused
    assert inner.steps[-1].name == "Inner"
    assert inner.get_time(1) == 4


def test_child_scope_stops_child_when_body_raises():
    perf, clock, _ = _make_session()
    perf.start()
    with pytest.raises(RuntimeError):
        with perf.child_scope("Broken"):
            clock.advance(2)
            raise RuntimeError("boom")

    child = perf.pending_children[-1]
    assert child.is_paused
    assert child.get_time(1) == 2
