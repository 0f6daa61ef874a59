"""Call-site duration source for driving frame timing."""

from __future__ import annotations

from collections.abc import Callable
from time import monotonic_ns

from frametime.runtime.logging import get_logger

_LOG = get_logger("clock")


class FrameTimer:
    """Monotonic nanosecond timer producing bounded per-frame durations."""

    def __init__(
        self,
        *,
        time_source: Callable[[], int] | None = None,
        max_frame_ns: int | None = None,
    ) -> None:
        if max_frame_ns is not None and max_frame_ns < 0:
            raise ValueError("max_frame_ns must be >= 0")
        self._time_source = time_source or monotonic_ns
        self._max_frame_ns = max_frame_ns
        self._last_ns: int | None = None

    def now(self) -> int:
        """Read the time source, e.g. for stopwatch instants."""
        return int(self._time_source())

    def next_duration(self) -> int:
        """Return nanoseconds since the previous call; the first call returns 0."""
        now = self.now()
        if self._last_ns is None:
            duration = 0
        else:
            raw_duration = now - self._last_ns
            if raw_duration < 0:
                _LOG.debug("time source moved backwards", extra={"backwards_ns": -raw_duration})
            duration = max(0, raw_duration)
            if self._max_frame_ns is not None:
                duration = min(duration, self._max_frame_ns)
        self._last_ns = now
        return duration

    def reset(self) -> None:
        """Forget the previous sample so the next duration is 0."""
        self._last_ns = None
