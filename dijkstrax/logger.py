"""Structured event logging for traversal runs.

An event is a dotted name plus keyword fields, e.g. ``dijkstra.finish`` with
``completed`` and the run counters. :class:`StdLogger` renders events either
as ``level event key=value`` text or as one JSON object per line.
"""

from __future__ import annotations

import json
import math
import sys
from typing import Any, Callable, Dict, Mapping, Protocol, TextIO

from .exceptions import ConfigError

LEVELS: Dict[str, int] = {"debug": 10, "info": 20, "warning": 30}


class Logger(Protocol):
    """Protocol for minimal logger implementations."""

    def debug(self, event: str, **fields: Any) -> None:
        """Emit a ``DEBUG``-level event."""
        ...

    def info(self, event: str, **fields: Any) -> None:
        """Emit an ``INFO``-level event."""
        ...

    def warning(self, event: str, **fields: Any) -> None:
        """Emit a ``WARNING``-level event."""
        ...


class NoopLogger:
    """Logger that discards all events."""

    def debug(self, event: str, **fields: Any) -> None:  # pragma: no cover - noop
        return

    def info(self, event: str, **fields: Any) -> None:  # pragma: no cover - noop
        return

    def warning(self, event: str, **fields: Any) -> None:  # pragma: no cover - noop
        return


def _plain(value: Any) -> Any:
    # NumPy scalars and arrays are not JSON serialisable
    if hasattr(value, "tolist"):
        value = value.tolist()
    if isinstance(value, float) and math.isinf(value):
        return "inf" if value > 0 else "-inf"
    return value


def _render_text(level: str, event: str, fields: Mapping[str, Any]) -> str:
    kv = " ".join(f"{k}={_plain(v)}" for k, v in fields.items())
    return f"{level} {event} {kv}".rstrip()


def _render_json(level: str, event: str, fields: Mapping[str, Any]) -> str:
    obj: Dict[str, Any] = {"level": level, "event": event}
    obj.update((k, _plain(v)) for k, v in fields.items())
    return json.dumps(obj)


class StdLogger:
    """Logger writing traversal events to a text stream.

    Args:
        level: Lowest level written, one of :data:`LEVELS`.
        json_fmt: Write one JSON object per event instead of plain text.
        stream: Output stream, ``sys.stderr`` by default.

    Raises:
        ConfigError: If ``level`` is unknown.
    """

    def __init__(
        self,
        level: str = "warning",
        json_fmt: bool = False,
        stream: TextIO | None = None,
    ) -> None:
        if level not in LEVELS:
            raise ConfigError(f"unknown log level '{level}'")
        self.level = level
        self.stream = stream or sys.stderr
        self._threshold = LEVELS[level]
        self._render: Callable[[str, str, Mapping[str, Any]], str] = (
            _render_json if json_fmt else _render_text
        )

    def _emit(self, level: str, event: str, fields: Mapping[str, Any]) -> None:
        if LEVELS[level] < self._threshold:
            return
        self.stream.write(self._render(level, event, fields) + "\n")

    def debug(self, event: str, **fields: Any) -> None:
        self._emit("debug", event, fields)

    def info(self, event: str, **fields: Any) -> None:
        self._emit("info", event, fields)

    def warning(self, event: str, **fields: Any) -> None:
        self._emit("warning", event, fields)


__all__ = ["LEVELS", "Logger", "NoopLogger", "StdLogger"]
