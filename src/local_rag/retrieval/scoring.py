"""Multi-signal lexical relevance scoring."""

from __future__ import annotations

from local_rag.extract import is_react_type, is_test_type
from local_rag.index import IndexedDocument
from local_rag.retrieval.models import ScoreBreakdown

MIN_TERM_LENGTH = 3
SYMBOL_BOOST = 5.0
EXPORT_BOOST = 3.0
IMPORT_BOOST = 2.0
COMMENT_BOOST = 1.5
FILE_TYPE_BOOST = 4.0


def query_terms(query: str) -> list[str]:
    """Split on whitespace, case-fold and keep terms longer than two characters."""
    return [term for term in query.lower().split() if len(term) >= MIN_TERM_LENGTH]


def score_breakdown(document: IndexedDocument, terms: list[str]) -> ScoreBreakdown:
    """Compute every signal for one document."""
    content = document.content.lower()
    content_matches = sum(content.count(term) for term in terms)
    return ScoreBreakdown(
        content_matches=content_matches,
        symbol_boost=SYMBOL_BOOST * _substring_pairs(terms, document.symbols),
        export_boost=EXPORT_BOOST * _substring_pairs(terms, document.exports),
        import_boost=IMPORT_BOOST * _substring_pairs(terms, document.imports),
        comment_boost=COMMENT_BOOST * _substring_pairs(terms, document.comments),
        file_type_boost=FILE_TYPE_BOOST if _file_type_matches(document.file_type, terms) else 0.0,
    )


def normalized_score(document: IndexedDocument, breakdown: ScoreBreakdown) -> float:
    """Raw total divided by token count, treating zero tokens as one."""
    return breakdown.raw_total / (document.token_count or 1)


def score_document(document: IndexedDocument, terms: list[str]) -> float:
    return normalized_score(document, score_breakdown(document, terms))


def _substring_pairs(terms: list[str], values: tuple[str, ...]) -> int:
    lowered = [value.lower() for value in values]
    return sum(1 for term in terms for value in lowered if term in value)


def _file_type_matches(file_type: str, terms: list[str]) -> bool:
    if not file_type:
        return False
    lowered = file_type.lower()
    for term in terms:
        if term in lowered:
            return True
        if term == "test" and is_test_type(file_type):
            return True
        if term == "react" and is_react_type(file_type):
            return True
    return False
