"""Core extractor protocol and data types."""

from __future__ import annotations

import re
from collections.abc import Iterable
from dataclasses import dataclass
from typing import Protocol


@dataclass(slots=True, frozen=True)
class ExtractedMetadata:
    """Heuristic structural metadata for one file."""

    symbols: tuple[str, ...]
    imports: tuple[str, ...]
    exports: tuple[str, ...]
    comments: tuple[str, ...]
    file_type: str
    failed_fields: tuple[str, ...] = ()


class LanguageExtractor(Protocol):
    """Protocol implemented by per-language extractors."""

    name: str
    languages: tuple[str, ...]

    def symbols(self, content: str) -> list[str]:
        """Return declared function, class, type and binding names."""

    def imports(self, content: str) -> list[str]:
        """Return referenced module paths."""

    def exports(self, content: str) -> list[str]:
        """Return exported names; default exports carry a ``default: `` prefix."""


def dedupe(items: Iterable[str]) -> tuple[str, ...]:
    """Drop empty and repeated entries, keeping first occurrences."""
    seen: set[str] = set()
    output: list[str] = []
    for item in items:
        if not item or item in seen:
            continue
        seen.add(item)
        output.append(item)
    return tuple(output)


def capture_all(pattern: re.Pattern[str], content: str, group: int = 1) -> list[str]:
    """Return one capture group from every match of a pattern."""
    output: list[str] = []
    for match in pattern.finditer(content):
        value = match.group(group)
        if value:
            output.append(value.strip())
    return output
