from __future__ import annotations

from pathlib import Path

from local_rag.index import DocumentStore, IndexedDocument, estimate_token_count
from local_rag.retrieval import CONTEXT_HEADER, ContextFormatter, RelevanceEngine, SearchResult


def _doc(
    path: str,
    content: str,
    *,
    language: str = "typescript",
    symbols: tuple[str, ...] = (),
    exports: tuple[str, ...] = (),
    file_type: str = "",
) -> IndexedDocument:
    return IndexedDocument(
        path=path,
        content=content,
        language=language,
        last_modified=1,
        token_count=estimate_token_count(content),
        symbols=symbols,
        exports=exports,
        file_type=file_type or language,
    )


def test_formatter_renders_header_metadata_lines_and_fences(tmp_path: Path) -> None:
    root = tmp_path.resolve()
    formatter = ContextFormatter([root])
    results = [
        SearchResult(
            document=_doc(
                str(root / "src" / "a.ts"),
                "export function foo() {}",
                symbols=("foo",),
                exports=("foo",),
            ),
            relevance_score=2.0,
        ),
        SearchResult(
            document=_doc(
                str(root / "tests" / "test_a.py"),
                "assert True",
                language="python",
                file_type="python-test",
            ),
            relevance_score=1.0,
        ),
    ]

    text = formatter.format(results)

    assert text == (
        f"{CONTEXT_HEADER}\n\n"
        "File: src/a.ts (typescript)\n"
        "Symbols: foo\n"
        "Exports: foo\n"
        "```typescript\nexport function foo() {}\n```\n\n"
        "File: tests/test_a.py (python, python-test)\n"
        "```python\nassert True\n```\n\n"
    )


def test_formatter_returns_empty_string_for_no_results() -> None:
    assert ContextFormatter().format([]) == ""


def test_display_path_uses_innermost_root_and_keeps_outside_paths(tmp_path: Path) -> None:
    outer = tmp_path.resolve()
    inner = outer / "packages" / "core"
    formatter = ContextFormatter([outer, inner])

    assert formatter.display_path(str(inner / "lib.rs")) == "lib.rs"
    assert formatter.display_path(str(outer / "README.md")) == "README.md"
    assert formatter.display_path("/elsewhere/x.py") == "/elsewhere/x.py"


def test_get_context_is_empty_when_nothing_matches() -> None:
    store = DocumentStore()
    store.upsert(_doc("a.ts", "function foo() {}", symbols=("foo",)))
    engine = RelevanceEngine(store)

    assert engine.get_context("nonexistent_term_zzz", 1000) == ""
    assert engine.get_context("foo", 1000).startswith(CONTEXT_HEADER)
