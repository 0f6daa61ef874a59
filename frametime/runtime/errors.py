"""Timing exception hierarchy and logging helper."""

from __future__ import annotations

import logging


class TimingError(Exception):
    """Base class for all frametime errors."""


class InvalidTimingInput(TimingError, ValueError):
    """Caller-supplied duration, instant or multiplier is outside the timing domain."""


class SpanOrderError(InvalidTimingInput):
    """A span would stop before it started."""


class StorageExhausted(TimingError):
    """Span storage cannot grow any further."""


def log_rejected(
    logger: logging.Logger,
    message: str,
    *,
    level: int = logging.DEBUG,
    **fields: object,
) -> None:
    """Emit a rejected input with its values as structured fields before raising."""
    logger.log(level, message, extra=fields)
