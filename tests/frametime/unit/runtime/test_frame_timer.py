from __future__ import annotations

from frametime.runtime.clock import FrameTimer
from frametime.runtime.stopwatch import Stopwatch
from frametime.runtime.time import Time
from tests.frametime.conftest import FakeTimeSource


def test_frame_timer_produces_durations_since_previous_call() -> None:
    timer = FrameTimer(time_source=FakeTimeSource([1_000, 1_250, 2_000]))
    assert timer.next_duration() == 0
    assert timer.next_duration() == 250
    assert timer.next_duration() == 750


def test_frame_timer_clamps_backwards_and_long_frames() -> None:
    timer = FrameTimer(time_source=FakeTimeSource([5_000, 4_000, 10_000]), max_frame_ns=1_000)
    assert timer.next_duration() == 0
    assert timer.next_duration() == 0
    assert timer.next_duration() == 1_000


def test_frame_timer_reset_restarts_measurement() -> None:
    source = FakeTimeSource([0, 100, 500, 650])
    timer = FrameTimer(time_source=source)
    timer.next_duration()
    timer.next_duration()
    timer.reset()
    assert timer.next_duration() == 0
    assert timer.next_duration() == 150
    assert source.calls == 4


def test_frame_timer_drives_time_and_stopwatch() -> None:
    source = FakeTimeSource([0, 0, 40, 40, 100])
    timer = FrameTimer(time_source=source)
    time = Time(fixed_time=20)
    watch = Stopwatch()

    timer.next_duration()
    watch.start(timer.now())
    time.advance_frame(timer.next_duration())
    assert time.drain_fixed_updates() == 2
    watch.stop(timer.now())
    time.advance_frame(timer.next_duration())
    assert time.drain_fixed_updates() == 3
    assert time.absolute_real_time == 100
    assert watch.elapsed() == 40
