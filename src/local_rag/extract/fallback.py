"""Fallback extractor for languages without structural patterns."""

from __future__ import annotations


class PlainTextExtractor:
    """Default extractor that yields no structural metadata."""

    name = "plaintext"
    languages: tuple[str, ...] = ()

    def symbols(self, content: str) -> list[str]:
        _ = content
        return []

    def imports(self, content: str) -> list[str]:
        _ = content
        return []

    def exports(self, content: str) -> list[str]:
        _ = content
        return []
