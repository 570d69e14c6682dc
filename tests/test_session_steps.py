from __future__ import annotations

import logging

from time_perf import ManualClock, MemorySink, SoftFailure, TimingSession


def _make_session(**kwargs):
    clock = ManualClock()
    sink = MemorySink()
    return TimingSession(clock=clock, sink=sink, **kwargs), clock, sink


def test_default_name_follows_depth():
    perf, _, _ = _make_session(depth=2)
    assert perf.name == "TimePerf session 2"
    assert perf.str_result == "TimePerf created"


def test_start_records_initial_step():
    perf, clock, _ = _make_session()
    clock.advance(5)

    assert perf.start("Load") is perf
    assert perf.name == "Load"
    assert len(perf.steps) == 1
    assert perf.steps[0].timestamp == 5
    assert perf.steps[0].name == "Step 1"
    assert perf.result == 0
    assert perf.str_result == "[TimePerf] Load started"


def test_steps_are_ordered_and_default_names_are_ordinals():
    perf, clock, _ = _make_session()
    perf.start()
    for delay in (3, 0, 7):
        clock.advance(delay)
        perf.step()

    times = [step.timestamp for step in perf.steps]
    assert times == sorted(times)
    assert [step.name for step in perf.steps[1:]] == ["Step 2", "Step 3", "Step 4"]
    assert perf.result == 3


def test_step_sets_index_and_status():
    perf, clock, _ = _make_session()
    perf.start()
    clock.advance(12)
    perf.step("Parse")

    assert perf.result == 1
    assert perf.str_result == "[TimePerf] > 1. Parse"
    assert perf.get_time(1) == 12


def test_stop_uses_session_name_and_pauses():
    perf, clock, _ = _make_session()
    perf.start("Job")
    clock.advance(8)
    perf.stop()

    assert perf.steps[-1].name == "Job"
    assert perf.is_paused
    assert perf.result == 0
    assert perf.str_result == "[TimePerf] Job stopped"


def test_step_while_paused_is_ignored():
    perf, clock, sink = _make_session()
    perf.start()
    clock.advance(1)
    perf.step("X")
    perf.pause()
    returned = perf.step("Y")

    assert returned is perf
    assert len(perf.steps) == 2
    assert perf.result == 0
    assert perf.last_failure is SoftFailure.STEP_WHILE_PAUSED
    assert len(sink.warnings) == 1
    assert "(Y step has been ignored)" in sink.warnings[0]


def test_successful_step_clears_previous_failure():
    perf, _, _ = _make_session()
    perf.start().pause().step("ignored")
    assert perf.last_failure is SoftFailure.STEP_WHILE_PAUSED

    perf.unpause().step("kept")
    assert perf.last_failure is None
    assert perf.steps[-1].name == "kept"


def test_reset_behaves_like_fresh_session():
    perf, clock, _ = _make_session()
    perf.start("Old")
    clock.advance(4)
    perf.child_start("pending")
    perf.step("A").pause()
    clock.advance(9)
    perf.unpause().pause()

    perf.reset()
    assert perf.steps == []
    assert perf.paused_at is None
    assert perf.pause_time == 0
    assert perf.pending_children == []
    assert perf.result == 0
    assert perf.str_result == "TimePerf reset"

    fresh = TimingSession(clock=clock, sink=MemorySink())
    perf.start("New")
    fresh.start("New")
    assert perf.steps == fresh.steps
    assert perf.str_result == fresh.str_result
    assert perf.pause_time == fresh.pause_time == 0


def test_get_time_out_of_range_returns_none():
    perf, clock, sink = _make_session()
    perf.start()
    clock.advance(2)
    perf.step()

    assert perf.get_time(0) is None
    assert perf.last_failure is SoftFailure.INDEX_OUT_OF_RANGE
    assert perf.get_time(2) is None
    assert sink.warnings == [
        "[TimePerf] 0 index does not exist",
        "[TimePerf] 2 index does not exist",
    ]


def test_log_emits_last_status():
    perf, _, sink = _make_session()
    perf.start("A").log()

    assert sink.records == [(logging.INFO, "[TimePerf] A started")]
