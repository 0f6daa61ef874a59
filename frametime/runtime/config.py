"""Timing configuration sourced from environment."""

from __future__ import annotations

import math
import os
from dataclasses import dataclass
from enum import Enum
from typing import Mapping

DEFAULT_FIXED_TIME_NS = 16_666_666


class ScalePolicy(str, Enum):
    """How out-of-domain scaled frame durations are handled."""

    REJECT = "reject"
    SATURATE = "saturate"


@dataclass(frozen=True, slots=True)
class TimingConfig:
    """Immutable timing configuration."""

    fixed_time_ns: int = DEFAULT_FIXED_TIME_NS
    time_scale: float = 1.0
    scale_policy: ScalePolicy = ScalePolicy.REJECT
    stopwatch_max_spans: int | None = None
    log_level: str = "INFO"


def _raw(name: str, *, env: Mapping[str, str] | None = None) -> str | None:
    value = os.getenv(name) if env is None else env.get(name)
    return None if value is None else str(value)


def _int(
    name: str,
    default: int,
    *,
    minimum: int | None = None,
    env: Mapping[str, str] | None = None,
) -> int:
    raw = _raw(name, env=env)
    if raw is None:
        value = int(default)
    else:
        try:
            value = int(raw.strip())
        except ValueError:
            value = int(default)
    if minimum is None:
        return value
    return max(int(minimum), value)


def _float(
    name: str,
    default: float,
    *,
    minimum: float | None = None,
    env: Mapping[str, str] | None = None,
) -> float:
    raw = _raw(name, env=env)
    if raw is None:
        value = float(default)
    else:
        try:
            value = float(raw.strip())
        except ValueError:
            value = float(default)
    if not math.isfinite(value):
        value = float(default)
    if minimum is None:
        return value
    return max(float(minimum), value)


def _text(name: str, default: str, *, env: Mapping[str, str] | None = None) -> str:
    raw = _raw(name, env=env)
    if raw is None:
        return str(default)
    value = raw.strip()
    return value if value else str(default)


def _optional_int(
    name: str,
    *,
    minimum: int,
    env: Mapping[str, str] | None = None,
) -> int | None:
    raw = _text(name, "", env=env)
    if not raw:
        return None
    try:
        return max(int(minimum), int(raw))
    except ValueError:
        return None


def _normalize_scale_policy(raw: str, fallback: ScalePolicy) -> ScalePolicy:
    value = str(raw).strip().lower()
    if value in {"saturate", "clamp"}:
        return ScalePolicy.SATURATE
    if value in {"reject", "error"}:
        return ScalePolicy.REJECT
    return fallback


def resolve_log_level_name(
    default: str = "INFO",
    *,
    env: Mapping[str, str] | None = None,
) -> str:
    """Resolve log level with package-prefixed override."""
    value = _raw("FRAMETIME_LOG_LEVEL", env=env)
    if value is None:
        value = _raw("LOG_LEVEL", env=env)
    if value is None or not value.strip():
        value = default
    return value.strip().upper()


def load_timing_config(*, env: Mapping[str, str] | None = None) -> TimingConfig:
    """Load immutable timing configuration from env vars."""
    return TimingConfig(
        fixed_time_ns=_int("FRAMETIME_FIXED_TIME_NS", DEFAULT_FIXED_TIME_NS, minimum=1, env=env),
        time_scale=_float("FRAMETIME_TIME_SCALE", 1.0, minimum=0.0, env=env),
        scale_policy=_normalize_scale_policy(
            _text("FRAMETIME_SCALE_POLICY", ScalePolicy.REJECT.value, env=env),
            ScalePolicy.REJECT,
        ),
        stopwatch_max_spans=_optional_int("FRAMETIME_STOPWATCH_MAX_SPANS", minimum=1, env=env),
        log_level=resolve_log_level_name(env=env),
    )
