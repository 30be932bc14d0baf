"""
@file actionlogger.py
@brief Action log for generated accessor operations.

Each successful accessor call becomes one ActionEvent, rendered as a text
line or a JSON object and emitted on the ``accessor_core.actions`` logger.
Where the lines end up is decided by the handlers attached to that logger;
``configure(file_path=...)`` attaches a file handler for convenience.
"""

from __future__ import annotations

import dataclasses
import json
import logging
import os
import threading
from datetime import datetime, timezone
from typing import Any, Optional

from .kinds import Operation
from .registry import FieldDescriptor

FORMATS = ("line", "jsonl")
SENSITIVE_NAMES = ("password", "passwd", "secret", "token")
MAX_VISIBLE = 10


@dataclasses.dataclass(frozen=True)
class ActionEvent:
    fragment: str
    field: str
    kind: str
    operation: str
    duration_ms: int
    value: Optional[str] = None
    run_id: Optional[str] = None
    ts: str = dataclasses.field(default_factory=lambda: datetime.now(timezone.utc).isoformat(timespec="milliseconds"))

    def as_line(self) -> str:
        parts = [f"{self.fragment}.{self.field}", self.operation, f"kind={self.kind}",
                 f"duration_ms={self.duration_ms}"]
        if self.value is not None:
            parts.append(f"value={self.value}")
        if self.run_id:
            parts.append(f"run_id={self.run_id}")
        return " | ".join(parts)

    def as_json(self) -> str:
        return json.dumps(dataclasses.asdict(self), ensure_ascii=False, separators=(",", ":"))


def redact(field_name: str, value: Any) -> str:
    """Hide values of sensitive fields and shorten everything else."""
    if any(word in field_name.lower() for word in SENSITIVE_NAMES):
        return "***"
    text = str(value)
    if len(text) <= MAX_VISIBLE:
        return text
    return f"{text[:MAX_VISIBLE]}..."


class ActionLogger:
    """Records one event per successful accessor operation. Disabled by default."""

    def __init__(self, logger_name: str = "accessor_core.actions") -> None:
        self._lock = threading.Lock()
        self._enabled = False
        self._format = "line"
        self._run_id: Optional[str] = None
        self._handler: Optional[logging.Handler] = None
        self.logger = logging.getLogger(logger_name)
        self.logger.setLevel(logging.INFO)

    def configure(
        self,
        *,
        format: str = "line",
        run_id: Optional[str] = None,
        file_path: Optional[str] = None,
    ) -> None:
        """
        Set output format and run id; optionally log to ``file_path``.

        Raises:
            ValueError: Unknown format
            OSError: The log file cannot be opened
        """
        fmt = (format or "line").lower()
        if fmt not in FORMATS:
            raise ValueError(f"ActionLogger format must be one of {FORMATS}, got: {format!r}")

        handler = None
        if file_path:
            os.makedirs(os.path.dirname(os.path.abspath(file_path)), exist_ok=True)
            handler = logging.FileHandler(file_path, encoding="utf-8")
            handler.setFormatter(logging.Formatter("%(message)s"))

        with self._lock:
            self._format = fmt
            self._run_id = run_id
            self._swap_handler(handler)

    def _swap_handler(self, handler: Optional[logging.Handler]) -> None:
        if self._handler is not None:
            self.logger.removeHandler(self._handler)
            self._handler.close()
        self._handler = handler
        if handler is not None:
            self.logger.addHandler(handler)

    def enable(self) -> None:
        with self._lock:
            self._enabled = True

    def disable(self) -> None:
        with self._lock:
            self._enabled = False

    def reset(self) -> None:
        """Disable and restore the default configuration."""
        with self._lock:
            self._enabled = False
            self._format = "line"
            self._run_id = None
            self._swap_handler(None)

    def is_enabled(self) -> bool:
        return self._enabled

    def record(
        self,
        operation: Operation,
        descriptor: FieldDescriptor,
        fragment: str,
        duration_ms: int,
        *args: Any,
    ) -> Optional[ActionEvent]:
        """Build and emit the event for one accessor call; ``args`` holds a written value."""
        if not self._enabled:
            return None
        event = ActionEvent(
            fragment=fragment,
            field=descriptor.name,
            kind=descriptor.kind.value,
            operation=operation.value,
            duration_ms=duration_ms,
            value=redact(descriptor.name, args[0]) if args else None,
            run_id=self._run_id,
        )
        self.logger.info(event.as_json() if self._format == "jsonl" else event.as_line())
        return event


ACTION_LOGGER = ActionLogger()
