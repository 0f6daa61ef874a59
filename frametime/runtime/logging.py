"""Frametime logging setup.

Components log through `get_logger(component)` and attach their values as
structured ``extra`` fields (``spans``, ``duration``, ``scale`` and so on).
`JsonFormatter` lifts those fields into a ``fields`` object so rejected inputs
and stopwatch resets stay machine-readable in file output.
"""

from __future__ import annotations

import json
import logging
import queue
from dataclasses import dataclass
from datetime import UTC, datetime
from logging.handlers import QueueHandler, QueueListener
from pathlib import Path

from frametime.runtime.config import TimingConfig, load_timing_config

LOGGER_PREFIX = "frametime"
TEXT_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"

_QUEUE_LISTENER: QueueListener | None = None
_RECORD_ATTRIBUTES = frozenset(vars(logging.makeLogRecord({}))) | {"message", "asctime"}


@dataclass(frozen=True, slots=True)
class LoggingConfig:
    """Logging pipeline configuration."""

    level_name: str = "INFO"
    console_format: str = "text"  # text|json
    file_path: str | None = None
    file_format: str = "json"  # text|json

    @classmethod
    def from_timing_config(cls, config: TimingConfig, *, file_path: str | None = None) -> LoggingConfig:
        return cls(level_name=config.log_level, file_path=file_path)


def record_fields(record: logging.LogRecord) -> dict[str, object]:
    """Return the structured ``extra`` values attached to a record."""
    return {key: value for key, value in vars(record).items() if key not in _RECORD_ATTRIBUTES}


class JsonFormatter(logging.Formatter):
    """One JSON object per record, structured fields under ``fields``."""

    def format(self, record: logging.LogRecord) -> str:
        payload: dict[str, object] = {
            "ts": datetime.fromtimestamp(record.created, UTC).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "msg": record.getMessage(),
        }
        fields = record_fields(record)
        if fields:
            payload["fields"] = fields
        if record.exc_info:
            payload["exc_info"] = self.formatException(record.exc_info)
        return json.dumps(payload, ensure_ascii=True, default=str)


def _formatter(kind: str) -> logging.Formatter:
    return JsonFormatter() if kind.strip().lower() == "json" else logging.Formatter(TEXT_FORMAT)


def _handlers(config: LoggingConfig) -> list[logging.Handler]:
    console = logging.StreamHandler()
    console.setFormatter(_formatter(config.console_format))
    handlers: list[logging.Handler] = [console]
    if config.file_path:
        path = Path(config.file_path)
        path.parent.mkdir(parents=True, exist_ok=True)
        file_handler = logging.FileHandler(path, mode="a", encoding="utf-8", delay=True)
        file_handler.setFormatter(_formatter(config.file_format))
        handlers.append(file_handler)
    return handlers


def configure_logging(config: LoggingConfig) -> None:
    """Replace root handlers; file output is streamed through a queue listener."""
    global _QUEUE_LISTENER

    shutdown_logging()
    root = logging.getLogger()
    root.handlers.clear()
    root.setLevel(getattr(logging, config.level_name.upper(), logging.INFO))

    console, *rest = _handlers(config)
    if not rest:
        root.addHandler(console)
        return
    log_queue: queue.SimpleQueue[logging.LogRecord] = queue.SimpleQueue()
    root.addHandler(QueueHandler(log_queue))
    _QUEUE_LISTENER = QueueListener(log_queue, console, *rest, respect_handler_level=True)
    _QUEUE_LISTENER.start()


def shutdown_logging() -> None:
    """Flush and stop the file streaming listener if one is running."""
    global _QUEUE_LISTENER

    if _QUEUE_LISTENER is not None:
        _QUEUE_LISTENER.stop()
        for handler in _QUEUE_LISTENER.handlers:
            handler.close()
        _QUEUE_LISTENER = None


def setup_logging(config: TimingConfig | None = None) -> None:
    """Configure console logging at the timing config's level unless the root is already set up."""
    if logging.getLogger().handlers:
        return
    timing = config if config is not None else load_timing_config()
    configure_logging(LoggingConfig.from_timing_config(timing))


def get_logger(component: str) -> logging.Logger:
    """Return the logger for a frametime component, e.g. ``"stopwatch"``."""
    return logging.getLogger(f"{LOGGER_PREFIX}.{component}")
