from __future__ import annotations

from collections.abc import Iterable

import pytest

NS_PER_S = 1_000_000_000


class FakeTimeSource:
    """Replays scripted nanosecond readings."""

    def __init__(self, readings: Iterable[int]) -> None:
        self._readings = iter(readings)
        self.calls = 0

    def __call__(self) -> int:
        self.calls += 1
        return next(self._readings)


@pytest.fixture
def ns_per_s() -> int:
    return NS_PER_S


@pytest.fixture
def clean_env(monkeypatch) -> None:
    for name in (
        "FRAMETIME_FIXED_TIME_NS",
        "FRAMETIME_TIME_SCALE",
        "FRAMETIME_SCALE_POLICY",
        "FRAMETIME_STOPWATCH_MAX_SPANS",
        "FRAMETIME_LOG_LEVEL",
        "LOG_LEVEL",
    ):
        monkeypatch.delenv(name, raising=False)
