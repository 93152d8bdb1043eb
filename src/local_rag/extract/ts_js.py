"""Lexical TypeScript/JavaScript extractor."""

from __future__ import annotations

import re

from local_rag.extract.base import capture_all

_IDENT = r"[A-Za-z_$][A-Za-z0-9_$]*"

_FUNCTION_RE = re.compile(rf"\bfunction\b\s*(?:\*\s*)?({_IDENT})\s*(?:<[^>]*>\s*)?\(")
_CLASS_RE = re.compile(rf"\bclass\s+({_IDENT})")
_INTERFACE_RE = re.compile(rf"\binterface\s+({_IDENT})\s*(?:<[^>]*>\s*)?(?:extends\b[^{{]*)?\{{")
_ENUM_RE = re.compile(rf"\benum\s+({_IDENT})\s*\{{")
_TYPE_ALIAS_RE = re.compile(
    rf"^[ \t]*(?:export\s+)?(?:declare\s+)?type\s+({_IDENT})\b", re.MULTILINE
)
_BINDING_RE = re.compile(rf"\b(?:const|let|var)\s+({_IDENT})\s*(?::[^=;\n]+)?=(?![=>])")
_METHOD_RE = re.compile(
    r"^[ \t]+(?:(?:public|private|protected|static|readonly|override|abstract|async|get|set)\s+)*"
    rf"\*?({_IDENT})\s*(?:<[^>]*>\s*)?\([^)]*\)\s*(?::[^{{;\n]+)?\{{",
    re.MULTILINE,
)
_SKIP_METHOD_NAMES = frozenset(
    {"if", "for", "while", "switch", "catch", "function", "return", "with", "do", "else"}
)

# Clause bodies stop at quotes, semicolons, assignments and calls.
_IMPORT_FROM_RE = re.compile(r"\bimport\b[^'\";=()]*?\bfrom\s*['\"]([^'\"]+)['\"]")
_SIDE_EFFECT_IMPORT_RE = re.compile(r"\bimport\s+['\"]([^'\"]+)['\"]")
_DYNAMIC_IMPORT_RE = re.compile(r"\bimport\s*\(\s*['\"]([^'\"]+)['\"]\s*\)")
_REQUIRE_RE = re.compile(r"\brequire\s*\(\s*['\"]([^'\"]+)['\"]\s*\)")
_REEXPORT_RE = re.compile(r"\bexport\b[^'\";=()]*?\bfrom\s*['\"]([^'\"]+)['\"]")

_NAMED_EXPORT_RE = re.compile(
    r"\bexport\s+(?:declare\s+)?(?:async\s+)?(?:abstract\s+)?"
    rf"(?:const|let|var|function\*?|class|interface|type|enum)\s+({_IDENT})"
)
_DEFAULT_EXPORT_RE = re.compile(
    rf"\bexport\s+default\s+(?:(?:async|abstract|class|function\*?)\s+)*({_IDENT})"
)
_EXPORT_LIST_RE = re.compile(r"\bexport\s+(?:type\s+)?\{([^}]*)\}")
_COMMONJS_EXPORT_RE = re.compile(rf"^[ \t]*(?:module\.)?exports\.({_IDENT})\s*=", re.MULTILINE)
_DEFAULT_KEYWORDS = frozenset({"class", "function", "async", "abstract", "extends"})

DEFAULT_EXPORT_PREFIX = "default: "


class TypeScriptJavaScriptExtractor:
    """Pattern-based metadata extraction for TypeScript and JavaScript."""

    name = "ts_js"
    languages = ("javascript", "typescript")

    def symbols(self, content: str) -> list[str]:
        """Functions, classes, interfaces, enums, type aliases, bindings and methods."""
        names: list[str] = []
        names.extend(capture_all(_FUNCTION_RE, content))
        names.extend(capture_all(_CLASS_RE, content))
        names.extend(capture_all(_INTERFACE_RE, content))
        names.extend(capture_all(_ENUM_RE, content))
        names.extend(capture_all(_TYPE_ALIAS_RE, content))
        names.extend(capture_all(_BINDING_RE, content))
        names.extend(
            name for name in capture_all(_METHOD_RE, content) if name not in _SKIP_METHOD_NAMES
        )
        return names

    def imports(self, content: str) -> list[str]:
        """ES module sources, dynamic imports, require calls and re-export sources."""
        modules: list[str] = []
        modules.extend(capture_all(_IMPORT_FROM_RE, content))
        modules.extend(capture_all(_SIDE_EFFECT_IMPORT_RE, content))
        modules.extend(capture_all(_DYNAMIC_IMPORT_RE, content))
        modules.extend(capture_all(_REQUIRE_RE, content))
        modules.extend(capture_all(_REEXPORT_RE, content))
        return modules

    def exports(self, content: str) -> list[str]:
        """Named declarations, export lists, CommonJS members and the default export."""
        names: list[str] = []
        names.extend(capture_all(_NAMED_EXPORT_RE, content))
        for body in capture_all(_EXPORT_LIST_RE, content):
            names.extend(_export_list_names(body))
        names.extend(capture_all(_COMMONJS_EXPORT_RE, content))
        for name in capture_all(_DEFAULT_EXPORT_RE, content):
            if name in _DEFAULT_KEYWORDS:
                continue
            names.append(f"{DEFAULT_EXPORT_PREFIX}{name}")
        return names


def _export_list_names(body: str) -> list[str]:
    names: list[str] = []
    for raw_item in body.split(","):
        item = raw_item.strip()
        if item.startswith("type "):
            item = item[5:].strip()
        if not item:
            continue
        parts = item.split()
        # `a as b` exports b
        exported = parts[-1] if len(parts) >= 3 and parts[-2] == "as" else parts[0]
        if exported == "default":
            names.append(f"{DEFAULT_EXPORT_PREFIX}{parts[0]}")
            continue
        names.append(exported)
    return names
