"""Lexical Python extractor."""

from __future__ import annotations

import keyword
import re

from local_rag.extract.base import capture_all

_DEF_RE = re.compile(r"^[ \t]*(?:async\s+)?def\s+([A-Za-z_][A-Za-z0-9_]*)\s*[\[(]", re.MULTILINE)
_CLASS_RE = re.compile(r"^[ \t]*class\s+([A-Za-z_][A-Za-z0-9_]*)\s*[:(\[]", re.MULTILINE)
_BINDING_RE = re.compile(r"^([A-Za-z_][A-Za-z0-9_]*)\s*(?::[^=\n]+)?=(?!=)", re.MULTILINE)
_IMPORT_RE = re.compile(r"^[ \t]*import[ \t]+([A-Za-z0-9_.,\t ]+)", re.MULTILINE)
_FROM_IMPORT_RE = re.compile(
    r"^[ \t]*from\s+(\.+[A-Za-z0-9_.]*|[A-Za-z_][A-Za-z0-9_.]*)\s+import\b", re.MULTILINE
)
_ALL_RE = re.compile(r"^__all__\s*\+?=\s*[\[(]([^\])]*)[\])]", re.MULTILINE)
_QUOTED_NAME_RE = re.compile(r"['\"]([A-Za-z_][A-Za-z0-9_]*)['\"]")


class PythonExtractor:
    """Pattern-based metadata extraction for Python source."""

    name = "python"
    languages = ("python",)

    def symbols(self, content: str) -> list[str]:
        """Functions, methods, classes and module-level assignments."""
        names: list[str] = []
        names.extend(capture_all(_DEF_RE, content))
        names.extend(capture_all(_CLASS_RE, content))
        names.extend(
            name for name in capture_all(_BINDING_RE, content) if not keyword.iskeyword(name)
        )
        return names

    def imports(self, content: str) -> list[str]:
        """Modules named by ``import`` and ``from ... import`` statements."""
        modules: list[str] = []
        for clause in capture_all(_IMPORT_RE, content):
            for item in clause.split(","):
                parts = item.split()
                if parts:
                    modules.append(parts[0])
        modules.extend(capture_all(_FROM_IMPORT_RE, content))
        return modules

    def exports(self, content: str) -> list[str]:
        """Names listed in ``__all__``."""
        names: list[str] = []
        for body in capture_all(_ALL_RE, content):
            names.extend(capture_all(_QUOTED_NAME_RE, body))
        return names
