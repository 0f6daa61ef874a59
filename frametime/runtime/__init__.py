"""Frametime runtime modules."""

from frametime.runtime.clock import FrameTimer
from frametime.runtime.config import ScalePolicy, TimingConfig, load_timing_config
from frametime.runtime.errors import (
    InvalidTimingInput,
    SpanOrderError,
    StorageExhausted,
    TimingError,
)
from frametime.runtime.logging import LoggingConfig, configure_logging, setup_logging
from frametime.runtime.stopwatch import ClosedSpan, OpenSpan, Stopwatch, TimeSpan
from frametime.runtime.time import Time

__all__ = [
    "ClosedSpan",
    "FrameTimer",
    "InvalidTimingInput",
    "LoggingConfig",
    "OpenSpan",
    "ScalePolicy",
    "SpanOrderError",
    "Stopwatch",
    "StorageExhausted",
    "Time",
    "TimeSpan",
    "TimingConfig",
    "TimingError",
    "configure_logging",
    "load_timing_config",
    "setup_logging",
]
