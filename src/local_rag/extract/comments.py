"""Comment text extraction shared by every language."""

from __future__ import annotations

import re

LINE = "line"
BLOCK = "block"
HASH = "hash"

_LINE_COMMENT_RE = re.compile(r"//.*$", re.MULTILINE)
_BLOCK_COMMENT_RE = re.compile(r"/\*[\s\S]*?(?:\*/|\Z)")
_HASH_COMMENT_RE = re.compile(r"#.*$", re.MULTILINE)
_BLOCK_CONTINUATION_RE = re.compile(r"^[ \t]*\*[ \t]?", re.MULTILINE)

_C_STYLE = (LINE, BLOCK)
_HASH_STYLE = (HASH,)
ALL_STYLES = (LINE, BLOCK, HASH)

COMMENT_STYLES_BY_LANGUAGE: dict[str, tuple[str, ...]] = {
    "javascript": _C_STYLE,
    "typescript": _C_STYLE,
    "java": _C_STYLE,
    "c": _C_STYLE,
    "cpp": _C_STYLE,
    "csharp": _C_STYLE,
    "go": _C_STYLE,
    "rust": _C_STYLE,
    "swift": _C_STYLE,
    "kotlin": _C_STYLE,
    "scala": _C_STYLE,
    "dart": _C_STYLE,
    "css": (BLOCK,),
    "php": ALL_STYLES,
    "python": _HASH_STYLE,
    "ruby": _HASH_STYLE,
    "bash": _HASH_STYLE,
    "yaml": _HASH_STYLE,
    "toml": _HASH_STYLE,
    "powershell": _HASH_STYLE,
    "r": _HASH_STYLE,
}


def comment_styles_for(language: str) -> tuple[str, ...]:
    """Return comment styles for a language; unknown languages try all of them."""
    return COMMENT_STYLES_BY_LANGUAGE.get(language, ALL_STYLES)


def extract_comments(content: str, language: str) -> list[str]:
    """Return comment bodies trimmed of delimiters, skipping empty ones."""
    styles = comment_styles_for(language)
    comments: list[str] = []
    if LINE in styles:
        for match in _LINE_COMMENT_RE.finditer(content):
            cleaned = match.group(0)[2:].lstrip("/!").strip()
            if cleaned:
                comments.append(cleaned)
    if BLOCK in styles:
        for match in _BLOCK_COMMENT_RE.finditer(content):
            text = match.group(0)
            # an unterminated block runs to the end of the content
            body = (text[2:-2] if len(text) >= 4 and text.endswith("*/") else text[2:]).lstrip("*")
            cleaned = _BLOCK_CONTINUATION_RE.sub("", body).strip()
            if cleaned:
                comments.append(cleaned)
    if HASH in styles:
        for match in _HASH_COMMENT_RE.finditer(content):
            cleaned = match.group(0)[1:].strip()
            if cleaned:
                comments.append(cleaned)
    return comments
