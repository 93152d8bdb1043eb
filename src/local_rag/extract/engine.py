"""Single entry point for heuristic metadata extraction."""

from __future__ import annotations

from collections.abc import Callable, Mapping
from pathlib import PurePath

from local_rag.extract.base import ExtractedMetadata, LanguageExtractor, dedupe
from local_rag.extract.comments import extract_comments
from local_rag.extract.fallback import PlainTextExtractor
from local_rag.extract.file_type import detect_file_type
from local_rag.extract.go import GoExtractor
from local_rag.extract.java import JavaExtractor
from local_rag.extract.python import PythonExtractor
from local_rag.extract.rust import RustExtractor
from local_rag.extract.ts_js import TypeScriptJavaScriptExtractor


def build_extractor_table() -> dict[str, LanguageExtractor]:
    """Map each structured language to its extractor; other languages use the fallback."""
    table: dict[str, LanguageExtractor] = {}
    for extractor in (
        TypeScriptJavaScriptExtractor(),
        PythonExtractor(),
        GoExtractor(),
        JavaExtractor(),
        RustExtractor(),
    ):
        for language in extractor.languages:
            table[language] = extractor
    return table


class MetadataExtractor:
    """Runs every heuristic for a file; a failing heuristic only empties its own field."""

    def __init__(
        self,
        extractors: Mapping[str, LanguageExtractor] | None = None,
        fallback: LanguageExtractor | None = None,
    ) -> None:
        self._extractors = dict(build_extractor_table() if extractors is None else extractors)
        self._fallback = fallback or PlainTextExtractor()

    def extractor_for(self, language: str) -> LanguageExtractor:
        """Return the extractor registered for a language, else the fallback."""
        return self._extractors.get(language, self._fallback)

    def extract(
        self,
        content: str,
        language: str,
        path: str | PurePath | None = None,
    ) -> ExtractedMetadata:
        """Derive symbols, imports, exports, comments and file type. Never raises."""
        failed: list[str] = []
        extractor = self.extractor_for(language)
        symbols = _guarded("symbols", lambda: extractor.symbols(content), failed)
        imports = _guarded("imports", lambda: extractor.imports(content), failed)
        exports = _guarded("exports", lambda: extractor.exports(content), failed)
        comments = _guarded("comments", lambda: extract_comments(content, language), failed)
        try:
            file_type = detect_file_type(path, content, language)
        except Exception:
            failed.append("file_type")
            file_type = language
        return ExtractedMetadata(
            symbols=dedupe(symbols),
            imports=dedupe(imports),
            exports=dedupe(exports),
            comments=dedupe(comments),
            file_type=file_type,
            failed_fields=tuple(failed),
        )


_DEFAULT_EXTRACTOR: MetadataExtractor | None = None


def extract(
    content: str,
    language: str,
    path: str | PurePath | None = None,
) -> ExtractedMetadata:
    """Extract metadata with the default extractor table."""
    global _DEFAULT_EXTRACTOR
    if _DEFAULT_EXTRACTOR is None:
        _DEFAULT_EXTRACTOR = MetadataExtractor()
    return _DEFAULT_EXTRACTOR.extract(content, language, path)


def _guarded(field: str, run: Callable[[], list[str]], failed: list[str]) -> list[str]:
    try:
        return list(run())
    except Exception:
        failed.append(field)
        return []
