from __future__ import annotations

import json
from pathlib import Path

import pytest

from local_rag.config import load_effective_config
from local_rag.logging import LogEvent
from local_rag.service import LocalRagService


class _RecordingSink:
    def __init__(self) -> None:
        self.events: list[LogEvent] = []

    def append(self, event: LogEvent) -> None:
        self.events.append(event)

    def kinds(self) -> list[str]:
        return [event.kind for event in self.events]


def _workspace(tmp_path: Path) -> Path:
    root = tmp_path / "workspace"
    (root / "src").mkdir(parents=True)
    (root / "src" / "auth.ts").write_text(
        "import { hash } from './crypto';\n"
        "// Validates a login session\n"
        "export function validateSession(token: string) {\n"
        "  return hash(token);\n"
        "}\n",
        encoding="utf-8",
    )
    (root / "src" / "math.py").write_text("def add(a, b):\n    return a + b\n", encoding="utf-8")
    return root


def _service(root: Path, sink: _RecordingSink | None = None) -> LocalRagService:
    service = LocalRagService(load_effective_config([root]), logger=sink)
    service.initialize()
    return service


def test_index_survives_restart(tmp_path: Path) -> None:
    root = _workspace(tmp_path)
    first = _service(root)
    first.index_workspace()

    sink = _RecordingSink()
    second = _service(root, sink)

    assert second.store.paths() == first.store.paths()
    assert "store_created" not in sink.kinds()
    result = second.index_workspace()
    assert result is not None
    assert result.unchanged == 2
    assert result.added == 0


@pytest.mark.parametrize("raw", [b"{ definitely not json", b"\xff\xfe\x00garbage"])
def test_corrupt_store_degrades_to_empty_index(tmp_path: Path, raw: bytes) -> None:
    root = _workspace(tmp_path)
    store_path = root / ".local_rag" / "index.json"
    store_path.parent.mkdir(parents=True)
    store_path.write_bytes(raw)
    sink = _RecordingSink()

    service = _service(root, sink)

    assert len(service.store) == 0
    assert sink.kinds() == ["store_load_failed"]
    assert json.loads(store_path.read_text(encoding="utf-8"))["documents"] == []
    result = service.index_workspace()
    assert result is not None
    assert result.added == 2


def test_ignore_file_edit_prunes_on_next_pass(tmp_path: Path) -> None:
    root = _workspace(tmp_path)
    service = _service(root)
    service.index_workspace()
    assert len(service.store) == 2

    (root / ".ragignore").write_text("*.py\n", encoding="utf-8")
    result = service.index_workspace()

    assert result is not None
    assert result.removed == 1
    assert [Path(path).name for path in service.store.paths()] == ["auth.ts"]


def test_non_utf8_ignore_file_does_not_block_startup(tmp_path: Path) -> None:
    root = _workspace(tmp_path)
    (root / ".ragignore").write_bytes(b"\xff\xfe\n*.py\n")

    service = _service(root)
    result = service.index_workspace()

    assert result is not None
    assert result.added == 1
    assert [Path(path).name for path in service.store.paths()] == ["auth.ts"]


def test_search_context_and_status(tmp_path: Path) -> None:
    root = _workspace(tmp_path)
    service = _service(root)
    service.index_workspace()

    results = service.search("validateSession")
    context = service.get_relevant_context("login session")
    status = service.status()

    assert [Path(result.document.path).name for result in results] == ["auth.ts"]
    assert "File: src/auth.ts (typescript)" in context
    assert "Imports: ./crypto" in context
    assert "Exports: validateSession" in context
    assert service.get_relevant_context("nonexistent_term_zzz", 1000) == ""
    assert status.document_count == 2
    assert status.languages == {"python": 1, "typescript": 1}
    assert status.is_indexing is False
    assert status.last_pass_timestamp is not None


def test_index_workspace_during_pass_returns_none(tmp_path: Path) -> None:
    root = _workspace(tmp_path)
    observed: list[object] = []

    class _ReentrantFilter:
        service: LocalRagService | None = None

        def is_accessible(self, path: Path) -> bool:
            assert self.service is not None
            observed.append(self.service.index_workspace())
            return True

    access = _ReentrantFilter()
    service = LocalRagService(load_effective_config([root]), access_filter=access)
    access.service = service
    service.initialize()

    result = service.index_workspace()

    assert result is not None
    assert observed == [None, None]
    assert service.status().is_indexing is False
