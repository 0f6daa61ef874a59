"""Frame timing accumulator with fixed-step ticking."""

from __future__ import annotations

import math
from dataclasses import dataclass
from fractions import Fraction

import numpy as np

from frametime.runtime.config import DEFAULT_FIXED_TIME_NS, ScalePolicy, TimingConfig
from frametime.runtime.errors import InvalidTimingInput, log_rejected
from frametime.runtime.logging import get_logger

_LOG = get_logger("time")

U64_MAX = (1 << 64) - 1


@dataclass(slots=True)
class Time:
    """Frame timing values advanced once per frame by the host loop.

    All durations are integer nanoseconds. ``time_scale`` only affects
    ``delta_time`` and ``absolute_time``; the fixed-step accumulator always
    consumes unscaled time.
    """

    delta_time: int = 0
    delta_real_time: int = 0
    fixed_time: int = DEFAULT_FIXED_TIME_NS
    frame_number: int = 0
    absolute_real_time: int = 0
    absolute_time: int = 0
    time_scale: float = 1.0
    fixed_time_accumulator: int = 0
    scale_policy: ScalePolicy = ScalePolicy.REJECT

    def __post_init__(self) -> None:
        try:
            self.scale_policy = ScalePolicy(self.scale_policy)
        except ValueError as exc:
            raise InvalidTimingInput(f"unknown scale policy: {self.scale_policy!r}") from exc

    @classmethod
    def from_config(cls, config: TimingConfig) -> Time:
        return cls(
            fixed_time=config.fixed_time_ns,
            time_scale=config.time_scale,
            scale_policy=config.scale_policy,
        )

    def advance_frame(self, frame_duration: int) -> None:
        """Record one frame of ``frame_duration`` nanoseconds.

        Call before draining fixed updates for the frame. Invalid input raises
        ``InvalidTimingInput`` and leaves every counter untouched.
        """
        if isinstance(frame_duration, bool) or not isinstance(frame_duration, int):
            log_rejected(_LOG, "frame duration rejected", value_type=type(frame_duration).__name__)
            raise InvalidTimingInput("frame_duration must be an int")
        if frame_duration < 0 or frame_duration > U64_MAX:
            log_rejected(_LOG, "frame duration rejected", duration=frame_duration)
            raise InvalidTimingInput("frame_duration must be within [0, 2**64 - 1]")
        delta_time = self._scaled(frame_duration)

        self.delta_time = delta_time
        self.delta_real_time = frame_duration
        self.frame_number += 1

        self.absolute_time += self.delta_time
        self.absolute_real_time += self.delta_real_time
        self.fixed_time_accumulator += self.delta_real_time

    def step_fixed_update(self) -> bool:
        """Consume one fixed tick from the accumulator if a full tick is owed."""
        if self.fixed_time <= 0:
            log_rejected(_LOG, "fixed time rejected", fixed_time=self.fixed_time)
            raise InvalidTimingInput("fixed_time must be > 0")
        if self.fixed_time_accumulator >= self.fixed_time:
            self.fixed_time_accumulator -= self.fixed_time
            return True
        return False

    def drain_fixed_updates(self) -> int:
        """Return number of fixed ticks owed for the current frame."""
        ticks = 0
        while self.step_fixed_update():
            ticks += 1
        return ticks

    def _scaled(self, frame_duration: int) -> int:
        # Single-precision multiplier widened to double before the multiply.
        with np.errstate(over="ignore"):
            scale = float(np.float32(self.time_scale))
        if math.isnan(scale):
            log_rejected(_LOG, "time scale rejected", scale=scale)
            raise InvalidTimingInput("time_scale must not be NaN")
        if scale < 0.0 or math.isinf(scale):
            return self._out_of_domain(frame_duration, scale, 0 if scale < 0.0 else U64_MAX)
        # Range is decided on the exact product; the double result may round up to 2**64.
        if frame_duration * Fraction(scale) >= U64_MAX + 1:
            return self._out_of_domain(frame_duration, scale, U64_MAX)
        return min(int(float(frame_duration) * scale), U64_MAX)

    def _out_of_domain(self, frame_duration: int, scale: float, saturated: int) -> int:
        fields = {"duration": frame_duration, "scale": scale}
        if self.scale_policy == ScalePolicy.SATURATE:
            _LOG.debug("scaled frame duration saturated", extra={**fields, "delta": saturated})
            return saturated
        log_rejected(_LOG, "scaled frame duration rejected", **fields)
        raise InvalidTimingInput(
            f"frame_duration * time_scale is outside [0, 2**64 - 1] (scale={scale})"
        )
