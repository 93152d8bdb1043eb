"""Lexical Java extractor."""

from __future__ import annotations

import re

from local_rag.extract.base import capture_all

_TYPE_RE = re.compile(r"(?<![@\w])(?:class|interface|enum|record)\s+([A-Za-z_$][A-Za-z0-9_$]*)")
_METHOD_RE = re.compile(
    r"^[ \t]*(?:(?:public|protected|private|static|final|abstract|synchronized|native|default)\s+)*"
    r"(?:<[^>]+>\s+)?([A-Za-z_$][\w$<>\[\],.?]*)\s+([A-Za-z_$][A-Za-z0-9_$]*)\s*\([^)]*\)\s*"
    r"(?:throws\b[^{;]*)?\{",
    re.MULTILINE,
)
_IMPORT_RE = re.compile(
    r"^[ \t]*import\s+(?:static\s+)?([A-Za-z0-9_.]+(?:\.\*)?)\s*;", re.MULTILINE
)
_PUBLIC_TYPE_RE = re.compile(
    r"\bpublic\s+(?:(?:abstract|final|static|sealed)\s+)*(?:class|interface|enum|record)\s+"
    r"([A-Za-z_$][A-Za-z0-9_$]*)"
)
_NOT_RETURN_TYPES = frozenset({"new", "return", "else", "throw", "case"})
_CONTROL_NAMES = frozenset({"if", "for", "while", "switch", "catch", "synchronized"})


class JavaExtractor:
    """Pattern-based metadata extraction for Java source."""

    name = "java"
    languages = ("java",)

    def symbols(self, content: str) -> list[str]:
        """Classes, interfaces, enums, records and method declarations."""
        names = capture_all(_TYPE_RE, content)
        for match in _METHOD_RE.finditer(content):
            return_type, name = match.group(1), match.group(2)
            if return_type in _NOT_RETURN_TYPES or name in _CONTROL_NAMES:
                continue
            names.append(name)
        return names

    def imports(self, content: str) -> list[str]:
        """Imported packages, classes and static members."""
        return capture_all(_IMPORT_RE, content)

    def exports(self, content: str) -> list[str]:
        """Public top-level and nested types."""
        return capture_all(_PUBLIC_TYPE_RE, content)
