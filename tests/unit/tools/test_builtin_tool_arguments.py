from __future__ import annotations

from pathlib import Path

import pytest

from local_rag.server import create_server


def _call(tmp_path: Path, method: str, params: dict[str, object]) -> dict[str, object]:
    server = create_server(roots=[str(tmp_path)])
    return server.handle_payload({"id": "req-args", "method": method, "params": params})


@pytest.mark.parametrize(
    ("method", "params"),
    [
        ("rag.search", {}),
        ("rag.search", {"query": "   "}),
        ("rag.search", {"query": "foo", "max_results": 0}),
        ("rag.search", {"query": "foo", "max_results": True}),
        ("rag.search", {"query": "foo", "max_tokens": "10"}),
        ("rag.get_context", {"query": 3}),
        ("rag.reindex", {"roots": "src"}),
        ("rag.reindex", {"roots": [""]}),
        ("rag.event_log", {"since": 5}),
        ("rag.event_log", {"limit": 501}),
    ],
)
def test_invalid_arguments_return_invalid_params(
    tmp_path: Path, method: str, params: dict[str, object]
) -> None:
    response = _call(tmp_path, method, params)

    assert response["ok"] is False
    assert response["error"]["code"] == "INVALID_PARAMS"


def test_every_builtin_tool_is_routable(tmp_path: Path) -> None:
    server = create_server(roots=[str(tmp_path)])

    names = [
        name
        for name in ("rag.status", "rag.reindex", "rag.search", "rag.get_context", "rag.event_log")
        if server.handle_payload({"id": "n", "method": name, "params": {"query": "q q q"}})["ok"]
    ]

    assert names == ["rag.status", "rag.reindex", "rag.search", "rag.get_context", "rag.event_log"]


def test_status_reports_empty_index_before_first_pass(tmp_path: Path) -> None:
    response = _call(tmp_path, "rag.status", {})

    result = response["result"]
    assert result["document_count"] == 0
    assert result["total_tokens"] == 0
    assert result["languages"] == {}
    assert result["is_indexing"] is False
    assert result["last_pass_timestamp"] is None
