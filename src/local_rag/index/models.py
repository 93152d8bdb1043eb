"""Typed models for indexing state."""

from __future__ import annotations

from dataclasses import dataclass

from local_rag.extract import ExtractedMetadata

CHARS_PER_TOKEN = 4


def estimate_token_count(text: str) -> int:
    """Approximate token count as ceil(len(text) / 4)."""
    return (len(text) + CHARS_PER_TOKEN - 1) // CHARS_PER_TOKEN


@dataclass(slots=True, frozen=True)
class IndexedDocument:
    """One indexed source file with its extracted metadata."""

    path: str
    content: str
    language: str
    last_modified: int
    token_count: int
    symbols: tuple[str, ...] = ()
    imports: tuple[str, ...] = ()
    exports: tuple[str, ...] = ()
    comments: tuple[str, ...] = ()
    file_type: str = ""

    @classmethod
    def build(
        cls,
        path: str,
        content: str,
        language: str,
        last_modified: int,
        metadata: ExtractedMetadata,
    ) -> IndexedDocument:
        """Create a document whose token count is derived from its content."""
        return cls(
            path=path,
            content=content,
            language=language,
            last_modified=last_modified,
            token_count=estimate_token_count(content),
            symbols=metadata.symbols,
            imports=metadata.imports,
            exports=metadata.exports,
            comments=metadata.comments,
            file_type=metadata.file_type or language,
        )

    def to_dict(self) -> dict[str, object]:
        return {
            "path": self.path,
            "content": self.content,
            "language": self.language,
            "last_modified": self.last_modified,
            "token_count": self.token_count,
            "symbols": list(self.symbols),
            "imports": list(self.imports),
            "exports": list(self.exports),
            "comments": list(self.comments),
            "file_type": self.file_type,
        }


@dataclass(slots=True, frozen=True)
class IndexPassResult:
    """Counters for one completed indexing pass."""

    added: int
    updated: int
    unchanged: int
    removed: int
    skipped: int
    failed: int
    persisted: bool
    duration_ms: int
    timestamp: str


@dataclass(slots=True, frozen=True)
class IndexStatus:
    """Current index status snapshot."""

    document_count: int
    total_tokens: int
    languages: dict[str, int]
    is_indexing: bool
    last_pass_timestamp: str | None
