"""Structured logging utilities."""

from .events import (
    EventSink,
    JsonlEventLogger,
    LogEvent,
    emit,
    sanitize_arguments,
    utc_timestamp,
)

__all__ = [
    "EventSink",
    "JsonlEventLogger",
    "LogEvent",
    "emit",
    "sanitize_arguments",
    "utc_timestamp",
]
