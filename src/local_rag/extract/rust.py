"""Lexical Rust extractor."""

from __future__ import annotations

import re

from local_rag.extract.base import capture_all

_VIS = r"(?:pub(?:\([^)]*\))?\s+)?"
_FN_RE = re.compile(
    rf"^[ \t]*{_VIS}(?:(?:async|const|unsafe|extern\s+\"[^\"]*\")\s+)*"
    r"fn\s+([A-Za-z_][A-Za-z0-9_]*)",
    re.MULTILINE,
)
_TYPE_RE = re.compile(
    rf"^[ \t]*{_VIS}(?:struct|enum|trait|type|union|mod)\s+([A-Za-z_][A-Za-z0-9_]*)", re.MULTILINE
)
_ITEM_RE = re.compile(
    rf"^{_VIS}(?:const|static)\s+(?:mut\s+)?([A-Za-z_][A-Za-z0-9_]*)", re.MULTILINE
)
_MACRO_RE = re.compile(r"^[ \t]*macro_rules!\s*([A-Za-z_][A-Za-z0-9_]*)", re.MULTILINE)
_USE_RE = re.compile(r"^[ \t]*(?:pub(?:\([^)]*\))?\s+)?use\s+([^;\s][^;]*);", re.MULTILINE)
_EXTERN_CRATE_RE = re.compile(r"^[ \t]*extern\s+crate\s+([A-Za-z_][A-Za-z0-9_]*)", re.MULTILINE)
_PUB_ITEM_RE = re.compile(
    r"^[ \t]*pub\s+(?:(?:async|const|unsafe)\s+)*"
    r"(?:fn|struct|enum|trait|type|mod|const|static|union)\s+(?:mut\s+)?([A-Za-z_][A-Za-z0-9_]*)",
    re.MULTILINE,
)
_WHITESPACE_RE = re.compile(r"\s+")


class RustExtractor:
    """Pattern-based metadata extraction for Rust source."""

    name = "rust"
    languages = ("rust",)

    def symbols(self, content: str) -> list[str]:
        """Functions, type-like items, top-level consts/statics and macros."""
        names: list[str] = []
        names.extend(capture_all(_FN_RE, content))
        names.extend(capture_all(_TYPE_RE, content))
        names.extend(capture_all(_ITEM_RE, content))
        names.extend(capture_all(_MACRO_RE, content))
        return names

    def imports(self, content: str) -> list[str]:
        """``use`` paths with whitespace collapsed, plus extern crates."""
        paths = [_WHITESPACE_RE.sub(" ", path) for path in capture_all(_USE_RE, content)]
        paths.extend(capture_all(_EXTERN_CRATE_RE, content))
        return paths

    def exports(self, content: str) -> list[str]:
        """Items declared plain ``pub``."""
        return capture_all(_PUB_ITEM_RE, content)
