"""Structured JSON logging with redaction for mailforge components.

What:
  Offer a small facade over text streams so every component emits single-line
  JSON log entries with consistent fields and without message content.

Why:
  Composition code handles subjects and bodies of real messages. Logs must be
  machine-parseable for diagnostics and must never carry that content, even
  when a caller passes it as context by accident.

How:
  :class:`JsonLogger` writes ``ts``, ``lvl``, ``msg``, and ``component`` plus
  the redacted ``extra`` mapping, one JSON object per line, flushing after each
  write. Entries below the configured threshold are dropped before
  serialisation.

Interfaces:
  :class:`JsonLogger`, :func:`get_logger`.

Invariants & Safety:
  - Keys in :data:`SENSITIVE_KEYS` are replaced with ``[redacted]`` at any
    nesting depth.
  - The default stream is ``stderr``; ``stdout`` stays free for ``.eml``
    output written by the CLI.
"""
from __future__ import annotations

import json
import sys
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any, Dict, Optional


REDACTED = "[redacted]"
SENSITIVE_KEYS = frozenset({"subject", "body", "content", "text", "html"})
LEVELS = {"DEBUG": 10, "INFO": 20, "WARN": 30, "WARNING": 30, "ERROR": 40}


@dataclass
class JsonLogger:
    """Structured JSON logger with automatic redaction.

    Attributes:
      stream: Text stream receiving log lines.
      component: Subsystem label included in every entry.
      level: Minimum severity to emit (``DEBUG``, ``INFO``, ``WARN``, ``ERROR``).
    """

    stream: Any = field(default_factory=lambda: sys.stderr)
    component: str = "mailforge"
    level: str = "INFO"

    def enabled_for(self, level: str) -> bool:
        return LEVELS.get(level.upper(), 0) >= LEVELS.get(self.level.upper(), 20)

    def log(self, level: str, message: str, *, extra: Optional[Dict[str, Any]] = None) -> None:
        """Emit a structured JSON log entry when ``level`` passes the threshold.

        Args:
          level: Severity name (case-insensitive).
          message: Event name or short description.
          extra: Optional context, redacted recursively before serialisation.
        """

        if not self.enabled_for(level):
            return
        payload = {
            "ts": datetime.now(timezone.utc).isoformat(),
            "lvl": level.upper(),
            "msg": message,
            "component": self.component,
        }
        if extra:
            payload.update(self._redact(extra))
        json.dump(payload, self.stream, separators=(",", ":"), default=str)
        self.stream.write("\n")
        self.stream.flush()

    def debug(self, message: str, **kwargs: Any) -> None:
        self.log("DEBUG", message, extra=kwargs)

    def info(self, message: str, **kwargs: Any) -> None:
        self.log("INFO", message, extra=kwargs)

    def warning(self, message: str, **kwargs: Any) -> None:
        self.log("WARN", message, extra=kwargs)

    def error(self, message: str, **kwargs: Any) -> None:
        self.log("ERROR", message, extra=kwargs)

    @staticmethod
    def _redact(data: Dict[str, Any]) -> Dict[str, Any]:
        """Return a copy of ``data`` with sensitive keys masked at every depth."""

        result: Dict[str, Any] = {}
        for key, value in data.items():
            if key in SENSITIVE_KEYS:
                result[key] = REDACTED
            elif isinstance(value, dict):
                result[key] = JsonLogger._redact(value)
            else:
                result[key] = value
        return result


def get_logger(component: str, level: str = "INFO") -> JsonLogger:
    """Construct a :class:`JsonLogger` bound to ``component`` on ``stderr``."""

    return JsonLogger(component=component, level=level)
