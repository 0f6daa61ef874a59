from __future__ import annotations

import json
import logging

import pytest

from frametime.runtime.config import TimingConfig
from frametime.runtime.logging import (
    JsonFormatter,
    LoggingConfig,
    configure_logging,
    get_logger,
    setup_logging,
    shutdown_logging,
)
from frametime.runtime.stopwatch import Stopwatch


@pytest.fixture
def isolated_root():
    root = logging.getLogger()
    original_handlers = list(root.handlers)
    original_level = root.level
    try:
        yield root
    finally:
        shutdown_logging()
        for handler in root.handlers:
            handler.close()
        root.handlers.clear()
        root.handlers.extend(original_handlers)
        root.setLevel(original_level)


def test_setup_logging_reads_level_from_env(isolated_root, monkeypatch) -> None:
    isolated_root.handlers.clear()
    isolated_root.setLevel(logging.NOTSET)
    monkeypatch.delenv("LOG_LEVEL", raising=False)
    monkeypatch.setenv("FRAMETIME_LOG_LEVEL", "DEBUG")
    setup_logging()
    assert isolated_root.handlers
    assert isolated_root.level == logging.DEBUG


def test_setup_logging_uses_timing_config_level(isolated_root, monkeypatch) -> None:
    isolated_root.handlers.clear()
    isolated_root.setLevel(logging.NOTSET)
    monkeypatch.setenv("FRAMETIME_LOG_LEVEL", "ERROR")
    setup_logging(TimingConfig(log_level="WARNING"))
    assert len(isolated_root.handlers) == 1
    assert isolated_root.level == logging.WARNING


def test_setup_logging_does_not_override_existing_handlers(isolated_root) -> None:
    sentinel = logging.NullHandler()
    isolated_root.handlers.clear()
    isolated_root.addHandler(sentinel)
    isolated_root.setLevel(logging.WARNING)
    setup_logging(TimingConfig(log_level="DEBUG"))
    assert isolated_root.handlers == [sentinel]
    assert isolated_root.level == logging.WARNING


def test_stopwatch_reset_reaches_json_file_with_fields(isolated_root, tmp_path) -> None:
    log_path = tmp_path / "logs" / "frametime.jsonl"
    configure_logging(
        LoggingConfig.from_timing_config(TimingConfig(log_level="DEBUG"), file_path=str(log_path))
    )
    watch = Stopwatch()
    watch.start(0)
    watch.stop(5)
    watch.reset()
    shutdown_logging()

    payloads = [json.loads(line) for line in log_path.read_text(encoding="utf-8").splitlines()]
    reset = [p for p in payloads if p["msg"] == "stopwatch reset"]
    assert len(reset) == 1
    assert reset[0]["logger"] == "frametime.stopwatch"
    assert reset[0]["level"] == "DEBUG"
    assert reset[0]["fields"] == {"spans": 1, "elapsed": 5}


def test_logging_config_from_timing_config() -> None:
    config = LoggingConfig.from_timing_config(TimingConfig(log_level="ERROR"), file_path="x.log")
    assert config.level_name == "ERROR"
    assert config.file_path == "x.log"
    assert config.console_format == "text"
    assert config.file_format == "json"


def test_json_formatter_omits_fields_without_extras() -> None:
    record = logging.LogRecord(
        name="frametime.time",
        level=logging.DEBUG,
        pathname=__file__,
        lineno=1,
        msg="frame %d",
        args=(3,),
        exc_info=None,
    )
    payload = json.loads(JsonFormatter().format(record))
    assert payload["level"] == "DEBUG"
    assert payload["msg"] == "frame 3"
    assert "fields" not in payload


def test_get_logger_scopes_components() -> None:
    assert get_logger("stopwatch").name == "frametime.stopwatch"
