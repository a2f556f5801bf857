"""
@file actionlogger.py
@brief Central event logging for action invocations and tree searches.
"""

from __future__ import annotations

import json
import logging
import os
import threading
import time
from datetime import datetime, timezone
from typing import Any, Dict, Optional

log = logging.getLogger("axauto.actions")


class ActionLogger:
    """Thread-safe event logger with line/jsonl output."""

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._enabled = False
        self._console = True
        self._file_path: Optional[str] = None
        self._level = "INFO"
        self._format = "line"

    def configure(
        self,
        *,
        console: bool = True,
        file_path: Optional[str] = None,
        level: str = "INFO",
        format: str = "line",
    ) -> None:
        """Configure logger settings."""
        fmt = (format or "line").lower()
        if fmt not in {"line", "jsonl"}:
            raise ValueError("ActionLogger format must be 'line' or 'jsonl'")

        with self._lock:
            self._console = bool(console)
            self._file_path = file_path
            self._level = level.upper()
            self._format = fmt

    def enable(self) -> None:
        with self._lock:
            self._enabled = True

    def disable(self) -> None:
        with self._lock:
            self._enabled = False

    def is_enabled(self) -> bool:
        return self._enabled

    def log(
        self,
        *,
        event: str,
        name: Optional[str] = None,
        element: Optional[str] = None,
        status: str = "ok",
        duration_ms: Optional[int] = None,
        metadata: Optional[Dict[str, Any]] = None,
    ) -> None:
        """Emit an event. Failures are always mirrored to the module logger."""
        if status == "error":
            log.warning("%s %s failed on %s: %s", event, name, element, metadata or {})
        if not self._enabled:
            return

        event_obj: Dict[str, Any] = {
            "timestamp": time.strftime("%H:%M:%S"),
            "ts": datetime.now(timezone.utc).isoformat(timespec="milliseconds"),
            "level": self._level,
            "event": event,
            "name": name,
            "element": element,
            "status": status,
            "duration_ms": duration_ms,
            "metadata": dict(metadata or {}),
        }

        line = self._format_output(event_obj)

        if self._console:
            print(line, flush=True)

        if self._file_path:
            self._write_file(line)

    def _write_file(self, line: str) -> None:
        try:
            os.makedirs(os.path.dirname(os.path.abspath(self._file_path)) or ".", exist_ok=True)
            with open(self._file_path, "a", encoding="utf-8") as f:
                f.write(line + "\n")
        except OSError as e:
            log.error("Could not write event log %s: %s", self._file_path, e)

    def _format_output(self, event: Dict[str, Any]) -> str:
        if self._format == "jsonl":
            return json.dumps(event, ensure_ascii=False, separators=(",", ":"), default=str)
        return self._format_line(event)

    @staticmethod
    def _format_line(event: Dict[str, Any]) -> str:
        parts = [
            event.get("timestamp", ""),
            event.get("level", "INFO"),
            event.get("event", ""),
        ]
        for key in ("name", "element", "status"):
            value = event.get(key)
            if value:
                parts.append(f"{key}={value}")

        duration = event.get("duration_ms")
        if duration is not None:
            parts.append(f"duration_ms={duration}")

        for key, value in (event.get("metadata") or {}).items():
            parts.append(f"{key}={value}")

        return " | ".join(parts)


ACTION_LOGGER = ActionLogger()
