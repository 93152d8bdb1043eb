"""Structured JSONL event log utilities."""

from __future__ import annotations

import json
from dataclasses import asdict, dataclass
from datetime import UTC, datetime
from pathlib import Path
from typing import Protocol


@dataclass(slots=True, frozen=True)
class LogEvent:
    """Single structured log record."""

    timestamp: str
    kind: str
    level: str
    message: str
    metadata: dict[str, object]


class EventSink(Protocol):
    """Anything that accepts log events."""

    def append(self, event: LogEvent) -> None:
        """Record one event."""


def utc_timestamp() -> str:
    """Return an ISO-8601 UTC timestamp."""
    return datetime.now(tz=UTC).isoformat(timespec="milliseconds").replace("+00:00", "Z")


def emit(
    sink: EventSink | None,
    kind: str,
    message: str,
    *,
    level: str = "info",
    **metadata: object,
) -> None:
    """Build and append an event when a sink is configured."""
    if sink is None:
        return
    sink.append(
        LogEvent(
            timestamp=utc_timestamp(),
            kind=kind,
            level=level,
            message=message,
            metadata=dict(sorted(metadata.items())),
        )
    )


def sanitize_arguments(arguments: dict[str, object]) -> dict[str, object]:
    """Sanitize tool arguments so query text never lands in the log."""
    sanitized: dict[str, object] = {}
    for key in sorted(arguments.keys()):
        value = arguments[key]
        if key in {"max_results", "max_tokens", "limit"} and isinstance(value, int):
            sanitized[key] = value
            continue
        if key == "since" and isinstance(value, str):
            sanitized[key] = value
            continue
        if key == "query" and isinstance(value, str):
            sanitized["query_present"] = True
            sanitized["query_length"] = len(value)
            continue
        if isinstance(value, (int, float, bool)) or value is None:
            sanitized[key] = value
            continue
        if isinstance(value, str):
            sanitized[f"{key}_present"] = True
            sanitized[f"{key}_length"] = len(value)
            continue
        if isinstance(value, list):
            sanitized[f"{key}_type"] = "list"
            sanitized[f"{key}_length"] = len(value)
            continue
        if isinstance(value, dict):
            sanitized[f"{key}_type"] = "dict"
            sanitized[f"{key}_keys"] = sorted(str(k) for k in value.keys())
            continue
        sanitized[f"{key}_type"] = type(value).__name__
    return sanitized


class JsonlEventLogger:
    """Append-only JSONL event logger and bounded reader."""

    def __init__(self, path: Path) -> None:
        self._path = path

    @property
    def path(self) -> Path:
        """Return on-disk JSONL path."""
        return self._path

    def append(self, event: LogEvent) -> None:
        """Append an event as one JSON object per line; write failures are dropped."""
        try:
            self._path.parent.mkdir(parents=True, exist_ok=True)
            with self._path.open("a", encoding="utf-8") as handle:
                handle.write(json.dumps(asdict(event), sort_keys=True, default=str))
                handle.write("\n")
        except OSError:
            return

    def read(self, since: str | None = None, limit: int = 50) -> list[dict[str, object]]:
        """Read recent events, optionally filtered by timestamp lower bound."""
        if limit < 1:
            return []
        entries: list[dict[str, object]] = []
        if not self._path.exists():
            return entries
        with self._path.open("r", encoding="utf-8") as handle:
            for line in handle:
                stripped = line.strip()
                if not stripped:
                    continue
                try:
                    record = json.loads(stripped)
                except json.JSONDecodeError:
                    continue
                if not isinstance(record, dict):
                    continue
                if since is not None:
                    ts = record.get("timestamp")
                    if not isinstance(ts, str) or ts < since:
                        continue
                entries.append(record)
        return entries[-limit:]
