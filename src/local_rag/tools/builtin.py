"""Built-in retrieval tools."""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import asdict

from local_rag.config import MAX_RESULTS_CAP, MAX_TOKENS_CAP
from local_rag.logging import JsonlEventLogger
from local_rag.retrieval import SearchResult
from local_rag.service import LocalRagService
from local_rag.tools.catalog import POSITIVE_INT, QUERY, STRING, STRING_LIST, Param, Tool

MAX_EVENT_LOG_LIMIT = 500
DEFAULT_EVENT_LOG_LIMIT = 50


def builtin_tools(service: LocalRagService) -> tuple[Tool, ...]:
    """Return the retrieval tool set bound to a service."""

    def status() -> dict[str, object]:
        snapshot = service.status()
        return {
            "document_count": snapshot.document_count,
            "total_tokens": snapshot.total_tokens,
            "languages": snapshot.languages,
            "is_indexing": snapshot.is_indexing,
            "last_pass_timestamp": snapshot.last_pass_timestamp,
            "effective_config": service.config.to_public_dict(),
        }

    def reindex(roots: list[str] | None = None) -> dict[str, object]:
        result = service.index_workspace(roots)
        if result is None:
            return {"status": "in_progress"}
        return {"status": "completed", **asdict(result)}

    def search(
        query: str, max_results: int | None = None, max_tokens: int | None = None
    ) -> dict[str, object]:
        results = service.search(query, max_results=max_results, max_tokens=max_tokens)
        display = service.formatter.display_path
        return {"results": [_result_to_dict(result, display) for result in results]}

    def get_context(query: str, max_tokens: int | None = None) -> dict[str, object]:
        context = service.get_relevant_context(query, max_tokens=max_tokens)
        return {"context": context, "empty": context == ""}

    def event_log(since: str | None = None, limit: int | None = None) -> dict[str, object]:
        logger = service.logger
        if not isinstance(logger, JsonlEventLogger):
            return {"events": []}
        return {"events": logger.read(since=since, limit=limit or DEFAULT_EVENT_LOG_LIMIT)}

    max_tokens = Param("max_tokens", POSITIVE_INT, maximum=MAX_TOKENS_CAP)
    return (
        Tool("rag.status", "Index size, languages and effective configuration.", status),
        Tool(
            "rag.reindex",
            "Run an indexing pass over the configured or given roots.",
            reindex,
            (Param("roots", STRING_LIST),),
        ),
        Tool(
            "rag.search",
            "Rank indexed files against a query.",
            search,
            (
                Param("query", QUERY, required=True),
                Param("max_results", POSITIVE_INT, maximum=MAX_RESULTS_CAP),
                max_tokens,
            ),
        ),
        Tool(
            "rag.get_context",
            "Formatted context block for a query.",
            get_context,
            (Param("query", QUERY, required=True), max_tokens),
        ),
        Tool(
            "rag.event_log",
            "Recent structured log events.",
            event_log,
            (Param("since", STRING), Param("limit", POSITIVE_INT, maximum=MAX_EVENT_LOG_LIMIT)),
        ),
    )


def _result_to_dict(result: SearchResult, display: Callable[[str], str]) -> dict[str, object]:
    doc = result.document
    payload: dict[str, object] = {
        "path": display(doc.path),
        "language": doc.language,
        "file_type": doc.file_type,
        "relevance_score": result.relevance_score,
        "token_count": doc.token_count,
        "symbols": list(doc.symbols),
        "imports": list(doc.imports),
        "exports": list(doc.exports),
    }
    if result.breakdown is not None:
        payload["breakdown"] = asdict(result.breakdown)
    return payload
