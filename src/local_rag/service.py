"""Local retrieval service wiring store, indexer, engine and access filter."""

from __future__ import annotations

from collections import Counter
from collections.abc import Iterable
from pathlib import Path

from local_rag.access import AccessFilter, IgnoreFileAccessFilter
from local_rag.config import RagConfig
from local_rag.extract import MetadataExtractor
from local_rag.index import (
    DocumentStore,
    Indexer,
    IndexPassResult,
    IndexStatus,
    StoreLoadError,
)
from local_rag.logging import EventSink, JsonlEventLogger, emit
from local_rag.retrieval import ContextFormatter, RelevanceEngine, SearchResult


class LocalRagService:
    """Facade consumed by the prompt layer and the STDIO server."""

    def __init__(
        self,
        config: RagConfig,
        *,
        access_filter: AccessFilter | None = None,
        logger: EventSink | None = None,
        extractor: MetadataExtractor | None = None,
    ) -> None:
        self._config = config
        self._logger = logger if logger is not None else JsonlEventLogger(config.event_log_path)
        if access_filter is None:
            access_filter = IgnoreFileAccessFilter(
                config.roots,
                config.access.ignore_file_name,
                deny_sensitive=config.access.deny_sensitive,
            )
        self._access_filter = access_filter
        self._store = DocumentStore(config.store_path)
        self._indexer = Indexer(
            self._store,
            self._access_filter,
            config=config.index,
            extractor=extractor,
            logger=self._logger,
            skip_dirs=(config.data_dir,),
        )
        self._formatter = ContextFormatter(config.roots)
        self._engine = RelevanceEngine(
            self._store,
            self._formatter,
            context_max_results=config.retrieval.context_max_results,
        )

    @property
    def config(self) -> RagConfig:
        return self._config

    @property
    def store(self) -> DocumentStore:
        return self._store

    @property
    def indexer(self) -> Indexer:
        return self._indexer

    @property
    def logger(self) -> EventSink:
        return self._logger

    @property
    def formatter(self) -> ContextFormatter:
        return self._formatter

    def initialize(self) -> None:
        """Load the durable index; a missing or corrupt copy becomes an empty store."""
        try:
            loaded = self._store.load()
        except StoreLoadError as error:
            emit(
                self._logger,
                "store_load_failed",
                "Stored index could not be loaded; starting with an empty index.",
                level="error",
                path=str(error.path),
                reason=error.reason,
            )
            self._store.clear()
            self._save_empty_store()
            return
        if not loaded:
            emit(
                self._logger,
                "store_created",
                "No stored index found; starting with an empty index.",
                path=str(self._config.store_path),
            )
            self._save_empty_store()

    def index_workspace(self, roots: Iterable[Path | str] | None = None) -> IndexPassResult | None:
        """Reindex the given roots (default: configured roots); None when a pass is running."""
        if self._indexer.is_indexing:
            return None
        reload = getattr(self._access_filter, "reload", None)
        if callable(reload):
            reload()
        targets = list(roots) if roots is not None else list(self._config.roots)
        return self._indexer.reindex(targets)

    def search(
        self,
        query: str,
        max_results: int | None = None,
        max_tokens: int | None = None,
    ) -> list[SearchResult]:
        return self._engine.search(
            query,
            max_results if max_results is not None else self._config.retrieval.max_results,
            max_tokens if max_tokens is not None else self._config.retrieval.max_tokens,
        )

    def get_relevant_context(self, query: str, max_tokens: int | None = None) -> str:
        """Formatted context for the prompt layer; empty when nothing matches."""
        return self._engine.get_context(
            query,
            max_tokens if max_tokens is not None else self._config.retrieval.max_tokens,
        )

    def status(self) -> IndexStatus:
        documents = self._store.documents()
        languages = Counter(doc.language for doc in documents)
        last = self._indexer.last_result
        return IndexStatus(
            document_count=len(documents),
            total_tokens=sum(doc.token_count for doc in documents),
            languages=dict(sorted(languages.items())),
            is_indexing=self._indexer.is_indexing,
            last_pass_timestamp=last.timestamp if last is not None else None,
        )

    def _save_empty_store(self) -> None:
        try:
            self._store.save()
        except OSError as error:
            emit(
                self._logger,
                "store_save_failed",
                "Empty index could not be written.",
                level="error",
                path=str(self._config.store_path),
                error=str(error),
            )
