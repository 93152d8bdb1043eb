"""Typed models for query results."""

from __future__ import annotations

from dataclasses import dataclass

from local_rag.index import IndexedDocument


@dataclass(slots=True, frozen=True)
class ScoreBreakdown:
    """Per-signal contributions before size normalization."""

    content_matches: int
    symbol_boost: float
    export_boost: float
    import_boost: float
    comment_boost: float
    file_type_boost: float

    @property
    def raw_total(self) -> float:
        return (
            self.content_matches
            + self.symbol_boost
            + self.export_boost
            + self.import_boost
            + self.comment_boost
            + self.file_type_boost
        )


@dataclass(slots=True, frozen=True)
class SearchResult:
    """One ranked document; only the relative order of scores is meaningful."""

    document: IndexedDocument
    relevance_score: float
    breakdown: ScoreBreakdown | None = None
