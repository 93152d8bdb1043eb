from __future__ import annotations

from local_rag.index import DocumentStore, IndexedDocument, estimate_token_count
from local_rag.retrieval import (
    COMMENT_BOOST,
    FILE_TYPE_BOOST,
    IMPORT_BOOST,
    RelevanceEngine,
    query_terms,
    score_breakdown,
)


def _doc(
    path: str,
    content: str,
    *,
    language: str = "typescript",
    symbols: tuple[str, ...] = (),
    imports: tuple[str, ...] = (),
    exports: tuple[str, ...] = (),
    comments: tuple[str, ...] = (),
    file_type: str = "",
) -> IndexedDocument:
    return IndexedDocument(
        path=path,
        content=content,
        language=language,
        last_modified=1,
        token_count=estimate_token_count(content),
        symbols=symbols,
        imports=imports,
        exports=exports,
        comments=comments,
        file_type=file_type or language,
    )


def _engine(*documents: IndexedDocument) -> RelevanceEngine:
    store = DocumentStore()
    for document in documents:
        store.upsert(document)
    return RelevanceEngine(store)


def test_symbol_match_ranks_single_document() -> None:
    engine = _engine(_doc("a.ts", "function foo() {}", symbols=("foo",)))

    results = engine.search("foo")

    assert [result.document.path for result in results] == ["a.ts"]
    assert results[0].relevance_score > 0
    assert results[0].breakdown is not None
    assert results[0].breakdown.symbol_boost == 5.0


def test_query_terms_drop_short_words_and_fold_case() -> None:
    assert query_terms("Fix the DB in UserService") == ["fix", "the", "userservice"]
    assert query_terms("a of to") == []


def test_documents_without_positive_score_are_excluded() -> None:
    engine = _engine(
        _doc("match.ts", "const widget = 1;"),
        _doc("other.ts", "const gadget = 2;"),
    )

    results = engine.search("widget")

    assert [result.document.path for result in results] == ["match.ts"]
    assert engine.search("xy") == []


def test_metadata_boosts_accumulate_per_term_and_value() -> None:
    document = _doc(
        "svc.ts",
        "nothing relevant here",
        imports=("./auth/session", "session-store"),
        comments=("Refresh the session token",),
        file_type="typescript-test",
    )

    breakdown = score_breakdown(document, query_terms("session test"))

    assert breakdown.content_matches == 0
    assert breakdown.import_boost == IMPORT_BOOST * 2
    assert breakdown.comment_boost == COMMENT_BOOST
    assert breakdown.file_type_boost == FILE_TYPE_BOOST


def test_scores_are_normalized_by_document_size() -> None:
    small = _doc("small.ts", "parser " * 4)
    large = _doc("large.ts", "parser " * 4 + "filler text " * 200)

    results = _engine(large, small).search("parser")

    assert [result.document.path for result in results] == ["small.ts", "large.ts"]


def test_equal_scores_keep_store_insertion_order() -> None:
    engine = _engine(
        _doc("second.ts", "lookup()"),
        _doc("first.ts", "lookup()"),
    )

    first = [result.document.path for result in engine.search("lookup")]
    again = [result.document.path for result in engine.search("lookup")]

    assert first == ["second.ts", "first.ts"]
    assert again == first


def test_empty_content_document_scores_without_division_error() -> None:
    engine = _engine(_doc("empty.ts", "", symbols=("emptyHandler",)))

    results = engine.search("emptyhandler")

    assert results[0].document.token_count == 0
    assert results[0].relevance_score == 5.0


def test_invalid_limits_return_no_results() -> None:
    engine = _engine(_doc("a.ts", "function foo() {}", symbols=("foo",)))

    assert engine.search("foo", max_results=0) == []
    assert engine.search("foo", max_tokens=-1) == []
