"""Incremental indexing pass over workspace roots."""

from __future__ import annotations

import time
from collections.abc import Iterable
from pathlib import Path

from local_rag.access import AccessFilter
from local_rag.config import IndexConfig
from local_rag.extract import MetadataExtractor, language_for_path
from local_rag.index.discovery import RootEnumerationError, discover_files, looks_binary
from local_rag.index.models import IndexedDocument, IndexPassResult
from local_rag.index.store import DocumentStore
from local_rag.logging import EventSink, emit, utc_timestamp

_ADDED = "added"
_UPDATED = "updated"
_UNCHANGED = "unchanged"
_FAILED = "failed"
_SKIPPED = "skipped"
_RETAINED = frozenset({_ADDED, _UPDATED, _UNCHANGED, _FAILED})


class Indexer:
    """Walks roots, re-extracts stale files and keeps the store in sync.

    Only one pass runs at a time per instance: ``reindex`` called while a
    pass is in flight returns None immediately without touching the store.
    After each root is walked, documents under it that were not retained in
    this pass (deleted, denied, oversized or binary) are pruned. A file whose
    stat or read fails keeps its previous document.
    """

    def __init__(
        self,
        store: DocumentStore,
        access_filter: AccessFilter,
        *,
        config: IndexConfig | None = None,
        extractor: MetadataExtractor | None = None,
        logger: EventSink | None = None,
        skip_dirs: tuple[Path, ...] = (),
    ) -> None:
        self._store = store
        self._access_filter = access_filter
        self._config = config or IndexConfig()
        self._extractor = extractor or MetadataExtractor()
        self._logger = logger
        self._skip_dirs = skip_dirs
        self._is_indexing = False
        self._last_result: IndexPassResult | None = None

    @property
    def is_indexing(self) -> bool:
        return self._is_indexing

    @property
    def last_result(self) -> IndexPassResult | None:
        return self._last_result

    def reindex(self, roots: Iterable[Path | str]) -> IndexPassResult | None:
        """Run one pass over the roots, or return None when a pass is already running."""
        if self._is_indexing:
            return None
        self._is_indexing = True
        try:
            result = self._run_pass([Path(root) for root in roots])
        finally:
            self._is_indexing = False
        self._last_result = result
        return result

    def _run_pass(self, roots: list[Path]) -> IndexPassResult:
        started = time.perf_counter()
        counts = {_ADDED: 0, _UPDATED: 0, _UNCHANGED: 0, _FAILED: 0, _SKIPPED: 0}
        removed = 0
        for root in roots:
            try:
                scan = discover_files(root, self._config.exclude_dir_names, self._skip_dirs)
            except RootEnumerationError as error:
                emit(
                    self._logger,
                    "root_enumeration_failed",
                    "Workspace root could not be enumerated.",
                    level="warning",
                    root=str(error.root),
                    reason=error.reason,
                )
                continue
            for directory in scan.unreadable_dirs:
                emit(
                    self._logger,
                    "directory_unreadable",
                    "Directory could not be listed.",
                    level="warning",
                    path=str(directory),
                )
            retained: set[str] = set()
            for file_path in scan.files:
                outcome = self._index_file(file_path)
                counts[outcome] += 1
                if outcome in _RETAINED:
                    retained.add(str(file_path))
            removed += self._prune(scan.root, retained)

        persisted = self._persist()
        duration_ms = int((time.perf_counter() - started) * 1000)
        result = IndexPassResult(
            added=counts[_ADDED],
            updated=counts[_UPDATED],
            unchanged=counts[_UNCHANGED],
            removed=removed,
            skipped=counts[_SKIPPED],
            failed=counts[_FAILED],
            persisted=persisted,
            duration_ms=duration_ms,
            timestamp=utc_timestamp(),
        )
        emit(
            self._logger,
            "index_pass_completed",
            "Indexing pass completed.",
            added=result.added,
            updated=result.updated,
            unchanged=result.unchanged,
            removed=result.removed,
            skipped=result.skipped,
            failed=result.failed,
            persisted=result.persisted,
            duration_ms=result.duration_ms,
            document_count=len(self._store),
        )
        return result

    def _index_file(self, path: Path) -> str:
        # Denied paths are treated as absent: no log entry.
        if not self._access_filter.is_accessible(path):
            return _SKIPPED
        try:
            stat = path.stat()
        except OSError as error:
            self._log_file_failure(path, "stat", error)
            return _FAILED
        if stat.st_size > self._config.max_file_bytes:
            return _SKIPPED

        key = str(path)
        existing = self._store.get(key)
        if existing is not None and existing.last_modified >= stat.st_mtime_ns:
            return _UNCHANGED

        try:
            raw = path.read_bytes()
        except OSError as error:
            self._log_file_failure(path, "read", error)
            return _FAILED
        if looks_binary(raw):
            return _SKIPPED

        content = raw.decode("utf-8", errors="replace")
        language = language_for_path(path)
        metadata = self._extractor.extract(content, language, path)
        if metadata.failed_fields:
            emit(
                self._logger,
                "extraction_degraded",
                "Some metadata heuristics failed; affected fields are empty.",
                level="warning",
                path=key,
                fields=list(metadata.failed_fields),
            )
        self._store.upsert(
            IndexedDocument.build(
                path=key,
                content=content,
                language=language,
                last_modified=stat.st_mtime_ns,
                metadata=metadata,
            )
        )
        return _ADDED if existing is None else _UPDATED

    def _prune(self, root: Path, retained: set[str]) -> int:
        removed = 0
        for stored_path in self._store.paths():
            if stored_path in retained:
                continue
            if not Path(stored_path).is_relative_to(root):
                continue
            if self._store.remove(stored_path):
                removed += 1
        return removed

    def _persist(self) -> bool:
        try:
            self._store.save()
        except OSError as error:
            emit(
                self._logger,
                "store_save_failed",
                "Index could not be persisted; in-memory index remains current.",
                level="error",
                path=str(self._store.storage_path),
                error=str(error),
            )
            return False
        return True

    def _log_file_failure(self, path: Path, operation: str, error: OSError) -> None:
        emit(
            self._logger,
            "file_skipped",
            f"File {operation} failed; file skipped.",
            level="warning",
            path=str(path),
            operation=operation,
            error=str(error),
        )
