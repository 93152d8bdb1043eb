"""Query ranking and token-budgeted result selection."""

from __future__ import annotations

from collections.abc import Sequence

from local_rag.index import DocumentStore
from local_rag.retrieval.formatter import ContextFormatter
from local_rag.retrieval.models import SearchResult
from local_rag.retrieval.scoring import normalized_score, query_terms, score_breakdown

DEFAULT_MAX_RESULTS = 5
DEFAULT_CONTEXT_MAX_RESULTS = 10
DEFAULT_MAX_TOKENS = 10_000


class RelevanceEngine:
    """Read-only ranking over a document store snapshot."""

    def __init__(
        self,
        store: DocumentStore,
        formatter: ContextFormatter | None = None,
        *,
        context_max_results: int = DEFAULT_CONTEXT_MAX_RESULTS,
    ) -> None:
        self._store = store
        self._formatter = formatter or ContextFormatter()
        self._context_max_results = context_max_results

    def rank(self, query: str) -> list[SearchResult]:
        """Score every document and return positives by descending score.

        Equal scores keep store insertion order.
        """
        terms = query_terms(query)
        if not terms:
            return []
        scored: list[SearchResult] = []
        for document in self._store.documents():
            breakdown = score_breakdown(document, terms)
            score = normalized_score(document, breakdown)
            if score <= 0:
                continue
            scored.append(
                SearchResult(document=document, relevance_score=score, breakdown=breakdown)
            )
        scored.sort(key=lambda result: -result.relevance_score)
        return scored

    def search(
        self,
        query: str,
        max_results: int = DEFAULT_MAX_RESULTS,
        max_tokens: int = DEFAULT_MAX_TOKENS,
    ) -> list[SearchResult]:
        """Top ``max_results`` candidates, kept only while their tokens fit the budget."""
        if max_results < 1 or max_tokens < 0:
            return []
        return select_within_budget(self.rank(query), max_results, max_tokens)

    def get_context(self, query: str, max_tokens: int = DEFAULT_MAX_TOKENS) -> str:
        """Formatted context block, or an empty string when nothing matches."""
        results = self.search(query, self._context_max_results, max_tokens)
        if not results:
            return ""
        return self._formatter.format(results)


def select_within_budget(
    ranked: Sequence[SearchResult], max_results: int, max_tokens: int
) -> list[SearchResult]:
    """Greedy rank-order accumulation; an oversized candidate is skipped, not truncated."""
    selected: list[SearchResult] = []
    total_tokens = 0
    for result in ranked[:max_results]:
        tokens = result.document.token_count
        if total_tokens + tokens > max_tokens:
            continue
        selected.append(result)
        total_tokens += tokens
    return selected
