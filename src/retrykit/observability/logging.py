"""Logging wiring for retrykit.

Library modules log through plain ``logging`` loggers under the ``retrykit``
namespace and never install handlers on import. Embedding processes that
want output without writing their own handler call ``configure_logging``:

    >>> from retrykit.observability import configure_logging
    >>> configure_logging(format="json", level="INFO")

Record attributes passed via ``extra=`` (``max_retries``, ``attempts``) are
rendered as ``key=value`` pairs in text mode and as top-level keys in JSON.
"""

from __future__ import annotations

import logging
import sys
from datetime import UTC, datetime
from typing import TextIO

import orjson

from retrykit.config import get_settings

ROOT_LOGGER = "retrykit"

# Attributes every LogRecord carries; anything else came in through extra=
_RESERVED: frozenset[str] = frozenset(vars(logging.LogRecord("", 0, "", 0, "", None, None))) | {"message", "asctime"}

_COLORS = {"DEBUG": "\033[2m", "INFO": "\033[32m", "WARNING": "\033[33m", "ERROR": "\033[31m", "CRITICAL": "\033[1;31m"}
_RESET = "\033[0m"


def _extra_fields(record: logging.LogRecord) -> dict[str, object]:
    return {k: v for k, v in vars(record).items() if k not in _RESERVED and not k.startswith("_")}


class TextFormatter(logging.Formatter):
    """Human-readable output. Format: timestamp [level] logger: message key=value ..."""

    def __init__(self, *, show_timestamp: bool = True, colors: bool = False) -> None:
        super().__init__()
        self.show_timestamp = show_timestamp
        self.colors = colors

    def format(self, record: logging.LogRecord) -> str:
        level = record.levelname.lower()
        if self.colors:
            level = f"{_COLORS.get(record.levelname, '')}{level}{_RESET}"
        parts = [datetime.fromtimestamp(record.created, tz=UTC).strftime("%H:%M:%S.%f")[:-3]] if self.show_timestamp else []
        parts += [f"[{level}]", f"{record.name}: {record.getMessage()}"]
        parts += [f"{k}={v}" for k, v in sorted(_extra_fields(record).items())]
        line = " ".join(parts)
        if record.exc_info:
            line += "\n" + self.formatException(record.exc_info)
        return line


class JsonFormatter(logging.Formatter):
    """JSON Lines output for log aggregation (Elasticsearch, Loki, Datadog, etc.)."""

    def __init__(self, *, show_timestamp: bool = True) -> None:
        super().__init__()
        self.show_timestamp = show_timestamp

    def format(self, record: logging.LogRecord) -> str:
        # Extras first so they can never overwrite the core fields
        payload: dict[str, object] = {
            **_extra_fields(record),
            "level": record.levelname.lower(),
            "logger": record.name,
            "event": record.getMessage(),
        }
        if self.show_timestamp:
            payload["timestamp"] = datetime.fromtimestamp(record.created, tz=UTC).isoformat()
        if record.exc_info:
            payload["exc_info"] = self.formatException(record.exc_info)
        return orjson.dumps(payload, default=repr, option=orjson.OPT_NON_STR_KEYS).decode()


class _ConfiguredHandler(logging.StreamHandler):
    """Marker type so configure_logging can replace only its own handler."""


def configure_logging(
    format: str | None = None,  # noqa: A002 - shadows builtin but matches stdlib
    level: str | None = None,
    *,
    stream: TextIO | None = None,
    colors: bool | None = None,
) -> logging.Handler:
    """Attach a handler to the ``retrykit`` logger. Format: "text" (human), "json" (machine).

    Unset arguments fall back to ``LoggingSettings``. Calling again replaces the
    previously installed handler instead of stacking a second one.
    """
    settings = get_settings()
    format = (format or settings.logging.format).lower()  # noqa: A001
    level = (level or settings.effective_log_level).upper()
    stream = stream or sys.stderr

    match format:
        case "text":
            formatter: logging.Formatter = TextFormatter(
                show_timestamp=settings.logging.include_timestamps,
                colors=getattr(stream, "isatty", lambda: False)() if colors is None else colors,
            )
        case "json":
            formatter = JsonFormatter(show_timestamp=settings.logging.include_timestamps)
        case _:
            raise ValueError(f"Unknown format: {format}. Use 'text' or 'json'")

    root = logging.getLogger(ROOT_LOGGER)
    for existing in [h for h in root.handlers if isinstance(h, _ConfiguredHandler)]:
        root.removeHandler(existing)

    handler = _ConfiguredHandler(stream)
    handler.setFormatter(formatter)
    root.addHandler(handler)
    root.setLevel(getattr(logging, level, logging.INFO))
    return handler


def get_logger(name: str | None = None) -> logging.Logger:
    """Get a logger under the retrykit namespace, e.g. ``get_logger("retry")``."""
    return logging.getLogger(f"{ROOT_LOGGER}.{name}" if name else ROOT_LOGGER)
