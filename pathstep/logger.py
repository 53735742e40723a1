"""Structured event logging for solver runs."""

from __future__ import annotations

import json
import sys
from typing import Any, Dict, Protocol, TextIO


class Logger(Protocol):
    """Anything the solver and CLI can report events to."""

    def info(self, event: str, **fields: Any) -> None:
        ...

    def debug(self, event: str, **fields: Any) -> None:
        ...


class NoopLogger:
    """Logger that discards all events."""

    def info(self, event: str, **fields: Any) -> None:  # pragma: no cover - noop
        return

    def debug(self, event: str, **fields: Any) -> None:  # pragma: no cover - noop
        return


def _jsonable(value: Any) -> Any:
    if isinstance(value, float) and value == float("inf"):
        return "inf"
    if isinstance(value, (set, frozenset, tuple)):
        return [_jsonable(v) for v in value]
    return value


class StdLogger:
    """Writes one line per event, either ``key=value`` text or JSON.

    Args:
        level: Minimum level to emit (``"debug"``, ``"info"``, or ``"quiet"`` for nothing).
        json_fmt: Emit JSON objects instead of ``key=value`` text.
        stream: Output stream, ``sys.stderr`` when omitted.
    """

    _levels: Dict[str, int] = {"debug": 10, "info": 20, "quiet": 30}

    def __init__(
        self,
        level: str = "quiet",
        json_fmt: bool = False,
        stream: TextIO | None = None,
    ) -> None:
        self.level = level
        self.json_fmt = json_fmt
        self.stream = stream or sys.stderr

    def enabled(self, level: str) -> bool:
        return self._levels[level] >= self._levels.get(self.level, 20)

    def log(self, level: str, event: str, **fields: Any) -> None:
        """Emit ``event`` at ``level`` with additional ``fields``."""
        if not self.enabled(level):
            return
        if self.json_fmt:
            obj: Dict[str, Any] = {"level": level, "event": event}
            obj.update({k: _jsonable(v) for k, v in fields.items()})
            self.stream.write(json.dumps(obj, default=str) + "\n")
        else:
            kv = " ".join(f"{k}={v}" for k, v in fields.items())
            self.stream.write(f"{level} {event} {kv}".rstrip() + "\n")

    def info(self, event: str, **fields: Any) -> None:
        self.log("info", event, **fields)

    def debug(self, event: str, **fields: Any) -> None:
        self.log("debug", event, **fields)


__all__ = ["Logger", "NoopLogger", "StdLogger"]
