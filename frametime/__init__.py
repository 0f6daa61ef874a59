"""Frame timing and stopwatch primitives for real-time loops."""

from frametime.runtime import (
    ClosedSpan,
    FrameTimer,
    InvalidTimingInput,
    OpenSpan,
    ScalePolicy,
    SpanOrderError,
    Stopwatch,
    StorageExhausted,
    Time,
    TimeSpan,
    TimingConfig,
    TimingError,
    load_timing_config,
)

__all__ = [
    "ClosedSpan",
    "FrameTimer",
    "InvalidTimingInput",
    "OpenSpan",
    "ScalePolicy",
    "SpanOrderError",
    "Stopwatch",
    "StorageExhausted",
    "Time",
    "TimeSpan",
    "TimingConfig",
    "TimingError",
    "load_timing_config",
]
