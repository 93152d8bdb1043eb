"""Closed extension-to-language lookup."""

from __future__ import annotations

from pathlib import PurePath

FALLBACK_LANGUAGE = "plaintext"
JS_TS_LANGUAGES = frozenset({"javascript", "typescript"})

LANGUAGE_BY_EXTENSION: dict[str, str] = {
    ".js": "javascript",
    ".jsx": "javascript",
    ".mjs": "javascript",
    ".cjs": "javascript",
    ".ts": "typescript",
    ".tsx": "typescript",
    ".py": "python",
    ".java": "java",
    ".c": "c",
    ".h": "c",
    ".cpp": "cpp",
    ".hpp": "cpp",
    ".cs": "csharp",
    ".go": "go",
    ".rb": "ruby",
    ".php": "php",
    ".html": "html",
    ".css": "css",
    ".json": "json",
    ".md": "markdown",
    ".yml": "yaml",
    ".yaml": "yaml",
    ".toml": "toml",
    ".sh": "bash",
    ".bat": "batch",
    ".ps1": "powershell",
    ".sql": "sql",
    ".rs": "rust",
    ".swift": "swift",
    ".kt": "kotlin",
    ".scala": "scala",
    ".dart": "dart",
    ".lua": "lua",
    ".r": "r",
}


def language_for_path(path: str | PurePath) -> str:
    """Map a file extension to a language tag, else the plaintext fallback."""
    suffix = PurePath(path).suffix.lower()
    return LANGUAGE_BY_EXTENSION.get(suffix, FALLBACK_LANGUAGE)
