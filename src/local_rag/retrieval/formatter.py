"""Render ranked results into one prompt-ready text block."""

from __future__ import annotations

from collections.abc import Sequence
from pathlib import Path

from local_rag.retrieval.models import SearchResult

CONTEXT_HEADER = "Relevant code from the codebase:"


class ContextFormatter:
    """Formats results in the order given; never re-ranks."""

    def __init__(self, roots: Sequence[Path] = ()) -> None:
        self._roots = tuple(root.resolve() for root in roots)

    def display_path(self, path: str) -> str:
        """Path relative to the innermost containing root, else unchanged."""
        candidate = Path(path)
        best: Path | None = None
        for root in self._roots:
            if candidate.is_relative_to(root) and (
                best is None or len(root.parts) > len(best.parts)
            ):
                best = root
        if best is None:
            return path
        return candidate.relative_to(best).as_posix()

    def format(self, results: Sequence[SearchResult]) -> str:
        if not results:
            return ""
        parts = [f"{CONTEXT_HEADER}\n\n"]
        for result in results:
            doc = result.document
            label = doc.language
            if doc.file_type and doc.file_type != doc.language:
                label = f"{doc.language}, {doc.file_type}"
            parts.append(f"File: {self.display_path(doc.path)} ({label})\n")
            if doc.symbols:
                parts.append(f"Symbols: {', '.join(doc.symbols)}\n")
            if doc.imports:
                parts.append(f"Imports: {', '.join(doc.imports)}\n")
            if doc.exports:
                parts.append(f"Exports: {', '.join(doc.exports)}\n")
            parts.append(f"```{doc.language}\n{doc.content}\n```\n\n")
        return "".join(parts)
