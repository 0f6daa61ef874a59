"""Stopwatch recording start/stop spans."""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass
from typing import TypeAlias, cast

from frametime.runtime.config import TimingConfig
from frametime.runtime.errors import (
    InvalidTimingInput,
    SpanOrderError,
    StorageExhausted,
    log_rejected,
)
from frametime.runtime.logging import get_logger

_LOG = get_logger("stopwatch")

INSTANT_LIMIT = 1 << 128
U64_MAX = (1 << 64) - 1


def _check_instant(value: int, *, label: str) -> None:
    if isinstance(value, bool) or not isinstance(value, int):
        log_rejected(_LOG, f"{label} rejected", value_type=type(value).__name__)
        raise InvalidTimingInput(f"{label} must be an int")
    if value < 0 or value >= INSTANT_LIMIT:
        log_rejected(_LOG, f"{label} rejected", value=value)
        raise InvalidTimingInput(f"{label} must be within [0, 2**128)")


@dataclass(frozen=True, slots=True)
class OpenSpan:
    """Span that has started but not stopped yet."""

    start: int

    @property
    def stop(self) -> None:
        return None

    @property
    def is_open(self) -> bool:
        return True

    def elapsed(self) -> int:
        return 0

    def close(self, stop: int) -> ClosedSpan:
        """Return the closed span ending at `stop`."""
        return ClosedSpan(start=self.start, stop=stop)


@dataclass(frozen=True, slots=True)
class ClosedSpan:
    """Span with both ends recorded."""

    start: int
    stop: int

    def __post_init__(self) -> None:
        if self.stop < self.start:
            log_rejected(_LOG, "span stops before it starts", start=self.start, stop=self.stop)
            raise SpanOrderError(f"span stops before it starts: {self.start} > {self.stop}")
        if self.stop - self.start > U64_MAX:
            log_rejected(_LOG, "span longer than 64 bits", start=self.start, stop=self.stop)
            raise InvalidTimingInput("span duration must fit in 64 bits")

    @property
    def is_open(self) -> bool:
        return False

    def elapsed(self) -> int:
        return self.stop - self.start


TimeSpan: TypeAlias = OpenSpan | ClosedSpan


class Stopwatch:
    """Ordered start/stop spans with cumulative elapsed time.

    Only the last span may be open; the stopwatch is running while it is.
    Starting a running stopwatch closes the current span and opens a new one
    (a split). Instants are caller-supplied integers, never read from a clock.
    """

    def __init__(self, *, max_spans: int | None = None) -> None:
        if max_spans is not None and max_spans <= 0:
            raise ValueError("max_spans must be > 0")
        self._max_spans = max_spans
        self._spans: list[TimeSpan] = []

    @classmethod
    def from_config(cls, config: TimingConfig) -> Stopwatch:
        return cls(max_spans=config.stopwatch_max_spans)

    @property
    def spans(self) -> Sequence[TimeSpan]:
        """Recorded spans in chronological order."""
        return tuple(self._spans)

    @property
    def max_spans(self) -> int | None:
        return self._max_spans

    def __len__(self) -> int:
        return len(self._spans)

    def start(self, now: int) -> ClosedSpan | None:
        """Start the stopwatch, splitting the current span if already running."""
        _check_instant(now, label="start instant")
        if self._max_spans is not None and len(self._spans) >= self._max_spans:
            log_rejected(_LOG, "span storage full", max_spans=self._max_spans, spans=len(self._spans))
            raise StorageExhausted(f"stopwatch holds the maximum of {self._max_spans} spans")
        closed = self._closed_last(now) if self.is_running() else None
        try:
            self._spans.append(OpenSpan(start=now))
        except MemoryError as exc:
            raise StorageExhausted("stopwatch span storage could not grow") from exc
        if closed is not None:
            self._spans[-2] = closed
        return closed

    def stop(self, now: int) -> ClosedSpan | None:
        """Stop the stopwatch without resetting it; idle stops are no-ops."""
        _check_instant(now, label="stop instant")
        if not self.is_running():
            return None
        closed = self._closed_last(now)
        self._spans[-1] = closed
        return closed

    def is_running(self) -> bool:
        return bool(self._spans) and self._spans[-1].is_open

    def elapsed(self) -> int:
        """Return total time across closed spans; the open span counts as zero."""
        return sum(span.elapsed() for span in self._spans)

    def elapsed_until(self, now: int) -> int:
        """Return `elapsed()` plus the open span measured up to `now`."""
        _check_instant(now, label="query instant")
        total = self.elapsed()
        if self.is_running():
            total += self._closed_last(now).elapsed()
        return total

    def reset(self) -> None:
        """Drop all spans, returning to idle with zero elapsed time."""
        _LOG.debug("stopwatch reset", extra={"spans": len(self._spans), "elapsed": self.elapsed()})
        self._spans.clear()

    def _closed_last(self, now: int) -> ClosedSpan:
        return cast(OpenSpan, self._spans[-1]).close(now)
