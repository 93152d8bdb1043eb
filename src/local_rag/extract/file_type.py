"""File type refinement from file name and content markers."""

from __future__ import annotations

from pathlib import PurePath

from local_rag.extract.languages import JS_TS_LANGUAGES

TEST_SUFFIX = "-test"
REACT_SUFFIX = "-react"
CONFIG_FILE_TYPE = "config"
DOCUMENTATION_FILE_TYPE = "documentation"

_REACT_MARKERS = (
    "import React",
    'from "react"',
    "from 'react'",
    "extends Component",
    "React.Component",
    "useState(",
    "useEffect(",
)
_CONFIG_FILE_NAMES = frozenset(
    {
        "package.json",
        "tsconfig.json",
        "jsconfig.json",
        "pyproject.toml",
        "setup.cfg",
        "cargo.toml",
        "go.mod",
    }
)
_CONFIG_SUFFIXES = (".config.js", ".config.ts", ".config.mjs", ".config.cjs")
_README_NAMES = frozenset({"readme", "readme.txt", "readme.md", "readme.rst"})


def detect_file_type(path: str | PurePath | None, content: str, language: str) -> str:
    """Refine a language tag; the first matching rule wins."""
    file_name = PurePath(path).name.lower() if path is not None else ""
    if is_test_file(file_name, content):
        return f"{language}{TEST_SUFFIX}"
    if language in JS_TS_LANGUAGES and is_react_component(content):
        return f"{language}{REACT_SUFFIX}"
    if file_name in _CONFIG_FILE_NAMES or file_name.endswith(_CONFIG_SUFFIXES):
        return CONFIG_FILE_TYPE
    if language == "markdown" or file_name.endswith(".md") or file_name in _README_NAMES:
        return DOCUMENTATION_FILE_TYPE
    return language


def is_test_file(file_name: str, content: str) -> bool:
    """Match test naming conventions or paired describe/it calls."""
    if ".test." in file_name or ".spec." in file_name:
        return True
    if file_name.startswith("test_"):
        return True
    stem = PurePath(file_name).stem
    if stem.endswith("_test"):
        return True
    if "@test" in content.lower():
        return True
    return "describe(" in content and "it(" in content


def is_react_component(content: str) -> bool:
    return any(marker in content for marker in _REACT_MARKERS)


def is_test_type(file_type: str) -> bool:
    return file_type.endswith(TEST_SUFFIX)


def is_react_type(file_type: str) -> bool:
    return file_type.endswith(REACT_SUFFIX)
