from __future__ import annotations

import pytest

from sortviz.sim import (
    FrameScheduler,
    IntervalFrameSource,
    RefreshFrameSource,
    TaskAlreadyScheduledError,
    run_until_idle,
)


def test_scheduled_task_runs_once_on_next_refresh() -> None:
    source = RefreshFrameSource()
    scheduler = FrameScheduler(source)
    calls: list[int] = []

    scheduler.schedule(lambda: calls.append(source.frame_index))
    assert scheduler.pending
    assert calls == []

    assert source.fire() == 1
    assert calls == [1]
    assert not scheduler.pending

    assert source.fire() == 0
    assert calls == [1]


def test_schedule_while_pending_is_rejected() -> None:
    scheduler = FrameScheduler(RefreshFrameSource())
    scheduler.schedule(lambda: None)

    with pytest.raises(TaskAlreadyScheduledError):
        scheduler.schedule(lambda: None)


def test_task_can_reschedule_itself_for_the_following_refresh() -> None:
    source = RefreshFrameSource()
    scheduler = FrameScheduler(source)
    frames: list[int] = []

    def _task() -> None:
        frames.append(source.frame_index)
        if len(frames) < 3:
            scheduler.schedule(_task)

    scheduler.schedule(_task)
    assert source.fire() == 1
    assert source.fire() == 1
    assert source.fire() == 1
    assert source.fire() == 0
    assert frames == [1, 2, 3]


def test_cancel_is_idempotent_and_safe_when_idle() -> None:
    source = RefreshFrameSource()
    scheduler = FrameScheduler(source)

    scheduler.cancel()
    scheduler.cancel()
    assert not scheduler.pending

    calls: list[str] = []
    scheduler.schedule(lambda: calls.append("ran"))
    scheduler.cancel()
    scheduler.cancel()

    assert not scheduler.pending
    assert source.pending_count == 0
    assert source.fire() == 0
    assert calls == []

    scheduler.schedule(lambda: calls.append("again"))
    source.fire()
    assert calls == ["again"]


def test_interval_source_fires_once_per_elapsed_interval() -> None:
    source = IntervalFrameSource(interval_hz=10)
    scheduler = FrameScheduler(source)
    calls: list[int] = []

    def _task() -> None:
        calls.append(len(calls))
        scheduler.schedule(_task)

    scheduler.schedule(_task)
    assert source.interval == pytest.approx(0.1)
    assert source.advance(0.05) == 0
    assert source.advance(0.05) == 1
    assert source.advance(0.1) == 1
    assert calls == [0, 1]


def test_interval_source_rejects_non_positive_rate() -> None:
    with pytest.raises(ValueError, match="interval_hz must be positive"):
        IntervalFrameSource(interval_hz=0)


def test_interval_source_caps_catchup_after_a_stall() -> None:
    source = IntervalFrameSource(interval_hz=100, max_catchup=0.05)
    scheduler = FrameScheduler(source)
    calls: list[int] = []

    def _task() -> None:
        calls.append(source.frame_index)
        scheduler.schedule(_task)

    scheduler.schedule(_task)
    assert source.advance(2.0) == 5
    assert source.frame_index == 5


def test_run_until_idle_stops_runaway_tasks() -> None:
    source = RefreshFrameSource()
    scheduler = FrameScheduler(source)

    def _forever() -> None:
        scheduler.schedule(_forever)

    scheduler.schedule(_forever)
    with pytest.raises(RuntimeError, match="still busy after 5 frames"):
        run_until_idle(source, max_frames=5)
