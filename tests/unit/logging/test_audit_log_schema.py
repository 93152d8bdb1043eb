from __future__ import annotations

import json
from pathlib import Path

from local_rag.logging import JsonlEventLogger, LogEvent, emit
from local_rag.server import create_server


def test_event_log_writes_jsonl_schema(tmp_path: Path) -> None:
    server = create_server(roots=[str(tmp_path)])
    server.handle_payload({"id": "req-100", "method": "rag.status", "params": {}})

    log_path = tmp_path / ".local_rag" / "events.jsonl"
    assert log_path.exists()

    lines = log_path.read_text(encoding="utf-8").splitlines()
    assert len(lines) >= 1
    event = json.loads(lines[-1])

    assert set(event.keys()) == {"kind", "level", "message", "metadata", "timestamp"}
    assert event["kind"] == "request"
    assert event["level"] == "info"
    assert event["metadata"]["request_id"] == "req-100"
    assert event["metadata"]["tool"] == "rag.status"
    assert event["metadata"]["ok"] is True
    assert event["metadata"]["error_code"] is None
    assert isinstance(event["timestamp"], str)
    assert event["timestamp"].endswith("Z")


def test_first_start_records_store_creation(tmp_path: Path) -> None:
    create_server(roots=[str(tmp_path)])

    log_path = tmp_path / ".local_rag" / "events.jsonl"
    lines = log_path.read_text(encoding="utf-8").splitlines()
    kinds = [json.loads(line)["kind"] for line in lines]
    assert kinds == ["store_created"]


def test_reader_applies_since_and_limit(tmp_path: Path) -> None:
    logger = JsonlEventLogger(tmp_path / "events.jsonl")
    for index, stamp in enumerate(
        ["2026-01-01T00:00:00.000Z", "2026-01-02T00:00:00.000Z", "2026-01-03T00:00:00.000Z"]
    ):
        logger.append(
            LogEvent(
                timestamp=stamp,
                kind="request",
                level="info",
                message="m",
                metadata={"n": index},
            )
        )
    with (tmp_path / "events.jsonl").open("a", encoding="utf-8") as handle:
        handle.write("not json\n")

    recent = logger.read(since="2026-01-02T00:00:00.000Z")
    last = logger.read(limit=1)

    assert [entry["metadata"]["n"] for entry in recent] == [1, 2]
    assert [entry["metadata"]["n"] for entry in last] == [2]
    assert logger.read(limit=0) == []


def test_emit_without_sink_is_a_no_op() -> None:
    emit(None, "request", "ignored", extra=1)


def test_unwritable_log_path_is_dropped_silently(tmp_path: Path) -> None:
    blocker = tmp_path / "blocker"
    blocker.write_text("file", encoding="utf-8")
    logger = JsonlEventLogger(blocker / "events.jsonl")

    emit(logger, "request", "dropped")

    assert logger.read() == []
