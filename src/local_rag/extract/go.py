"""Lexical Go extractor."""

from __future__ import annotations

import re

from local_rag.extract.base import capture_all

_FUNC_RE = re.compile(
    r"^func\s*(?:\([^)]*\)\s*)?([A-Za-z_][A-Za-z0-9_]*)\s*[\[(]", re.MULTILINE
)
_SINGLE_DECL_RE = re.compile(r"^(?:type|const|var)\s+([A-Za-z_][A-Za-z0-9_]*)\b", re.MULTILINE)
_GROUP_DECL_RE = re.compile(r"^(?:type|const|var)\s*\((.*?)^\)", re.MULTILINE | re.DOTALL)
_GROUP_ENTRY_RE = re.compile(r"^[ \t]*([A-Za-z_][A-Za-z0-9_]*)\b", re.MULTILINE)
_SINGLE_IMPORT_RE = re.compile(r"^import\s+(?:[A-Za-z0-9_.]+\s+)?\"([^\"]+)\"", re.MULTILINE)
_GROUP_IMPORT_RE = re.compile(r"^import\s*\((.*?)^\)", re.MULTILINE | re.DOTALL)
_QUOTED_PATH_RE = re.compile(r"\"([^\"]+)\"")


class GoExtractor:
    """Pattern-based metadata extraction for Go source."""

    name = "go"
    languages = ("go",)

    def symbols(self, content: str) -> list[str]:
        """Functions, methods and package-level type/const/var names."""
        names: list[str] = []
        names.extend(capture_all(_FUNC_RE, content))
        names.extend(capture_all(_SINGLE_DECL_RE, content))
        for body in capture_all(_GROUP_DECL_RE, content):
            names.extend(capture_all(_GROUP_ENTRY_RE, body))
        return names

    def imports(self, content: str) -> list[str]:
        """Quoted import paths, single or grouped."""
        paths: list[str] = []
        paths.extend(capture_all(_SINGLE_IMPORT_RE, content))
        for body in capture_all(_GROUP_IMPORT_RE, content):
            paths.extend(capture_all(_QUOTED_PATH_RE, body))
        return paths

    def exports(self, content: str) -> list[str]:
        """Go exports every package-level name that starts with an upper-case letter."""
        return [name for name in self.symbols(content) if name[:1].isupper()]
