"""Relevance ranking and context formatting."""

from .engine import (
    DEFAULT_CONTEXT_MAX_RESULTS,
    DEFAULT_MAX_RESULTS,
    DEFAULT_MAX_TOKENS,
    RelevanceEngine,
    select_within_budget,
)
from .formatter import CONTEXT_HEADER, ContextFormatter
from .models import ScoreBreakdown, SearchResult
from .scoring import (
    COMMENT_BOOST,
    EXPORT_BOOST,
    FILE_TYPE_BOOST,
    IMPORT_BOOST,
    SYMBOL_BOOST,
    query_terms,
    score_breakdown,
    score_document,
)

__all__ = [
    "COMMENT_BOOST",
    "CONTEXT_HEADER",
    "ContextFormatter",
    "DEFAULT_CONTEXT_MAX_RESULTS",
    "DEFAULT_MAX_RESULTS",
    "DEFAULT_MAX_TOKENS",
    "EXPORT_BOOST",
    "FILE_TYPE_BOOST",
    "IMPORT_BOOST",
    "RelevanceEngine",
    "SYMBOL_BOOST",
    "ScoreBreakdown",
    "SearchResult",
    "query_terms",
    "score_breakdown",
    "score_document",
    "select_within_budget",
]
