from __future__ import annotations

import json
import os
from dataclasses import dataclass, field
from datetime import UTC, datetime
from pathlib import Path
from typing import Any

from notesexport.utils.files import timestamped_stem


def _redact(value: str, home: str) -> str:
    home = home.rstrip(os.sep)
    if not home:
        return value
    if value == home:
        return "~"
    if value.startswith(home + os.sep):
        return "~" + value[len(home):]
    return value


def _redact_value(value: Any, home: str) -> Any:
    if isinstance(value, Path):
        value = str(value)
    if isinstance(value, str):
        return _redact(value, home)
    if isinstance(value, dict):
        return redact_details(value, home)
    if isinstance(value, list):
        return [_redact_value(item, home) for item in value]
    return value


def redact_details(details: dict[str, Any], home: str | None = None) -> dict[str, Any]:
    """Recursively replace the user's home directory with ``~`` in string values."""

    home = str(Path.home()) if home is None else home
    return {key: _redact_value(value, home) for key, value in details.items()}


@dataclass(slots=True)
class AuditEvent:
    level: str
    event: str
    details: dict[str, Any] = field(default_factory=dict)
    timestamp: datetime = field(default_factory=lambda: datetime.now(tz=UTC))

    def to_dict(self, redact: bool = True) -> dict[str, Any]:
        details = redact_details(self.details) if redact else self.details
        payload = {
            "timestamp": self.timestamp.isoformat(),
            "level": self.level,
            "event": self.event,
            "details": details,
        }
        return payload


class AuditTrail:
    """Collect export and extraction events and persist them to JSONL.

    Without a ``log_dir`` events are only kept in memory.
    """

    def __init__(self, log_dir: Path | None, prefix: str = "run", redact: bool = True) -> None:
        self.path: Path | None = None
        if log_dir is not None:
            log_dir.mkdir(parents=True, exist_ok=True)
            self.path = log_dir / f"{timestamped_stem(prefix)}.jsonl"
        self.redact = redact
        self._events: list[AuditEvent] = []

    def record(self, level: str, event: str, **details: Any) -> AuditEvent:
        audit_event = AuditEvent(level=level, event=event, details=details)
        self._events.append(audit_event)
        if self.path is not None:
            with self.path.open("a", encoding="utf-8") as handle:
                line = json.dumps(audit_event.to_dict(self.redact), ensure_ascii=False, default=str)
                handle.write(line + "\n")
        return audit_event

    @property
    def events(self) -> list[AuditEvent]:
        return list(self._events)


__all__ = ["AuditTrail", "AuditEvent", "redact_details"]
