"""Document store keyed by path, with a single-blob durable copy."""

from __future__ import annotations

import json
from pathlib import Path

from local_rag.index.models import IndexedDocument

STORE_SCHEMA_VERSION = 1

_TUPLE_FIELDS = ("symbols", "imports", "exports", "comments")


class StoreLoadError(Exception):
    """Raised when the durable store cannot be parsed."""

    def __init__(self, path: Path, reason: str) -> None:
        super().__init__(f"{path}: {reason}")
        self.path = path
        self.reason = reason


class DocumentStore:
    """In-memory map of path -> IndexedDocument.

    Documents are frozen, so readers can hold on to what ``get`` and
    ``documents`` return while an indexing pass replaces entries.
    """

    def __init__(self, storage_path: Path | None = None) -> None:
        self._storage_path = storage_path
        self._documents: dict[str, IndexedDocument] = {}

    @property
    def storage_path(self) -> Path | None:
        return self._storage_path

    def __len__(self) -> int:
        return len(self._documents)

    def __contains__(self, path: object) -> bool:
        return path in self._documents

    def get(self, path: str) -> IndexedDocument | None:
        """Return the document stored for a path."""
        return self._documents.get(path)

    def upsert(self, document: IndexedDocument) -> None:
        """Insert or wholesale-replace the document for its path."""
        self._documents[document.path] = document

    def remove(self, path: str) -> bool:
        """Remove a document; return True when one existed."""
        return self._documents.pop(path, None) is not None

    def clear(self) -> None:
        self._documents = {}

    def paths(self) -> tuple[str, ...]:
        """Return stored paths in insertion order."""
        return tuple(self._documents.keys())

    def documents(self) -> tuple[IndexedDocument, ...]:
        """Return a snapshot of stored documents in insertion order."""
        return tuple(self._documents.values())

    def to_payload(self) -> dict[str, object]:
        """Serialize as ordered (path, document) pairs."""
        return {
            "schema_version": STORE_SCHEMA_VERSION,
            "documents": [[path, doc.to_dict()] for path, doc in self._documents.items()],
        }

    def save(self) -> None:
        """Atomically write the durable copy. Raises OSError on failure."""
        if self._storage_path is None:
            return
        self._storage_path.parent.mkdir(parents=True, exist_ok=True)
        tmp = self._storage_path.with_suffix(self._storage_path.suffix + ".tmp")
        try:
            with tmp.open("w", encoding="utf-8") as handle:
                json.dump(self.to_payload(), handle, sort_keys=True)
                handle.write("\n")
            tmp.replace(self._storage_path)
        except OSError:
            tmp.unlink(missing_ok=True)
            raise

    def load(self) -> bool:
        """Replace contents from the durable copy.

        Returns False when there is no durable copy yet. Raises StoreLoadError
        when it exists but cannot be parsed; the in-memory contents are left
        untouched in that case.
        """
        if self._storage_path is None or not self._storage_path.exists():
            return False
        path = self._storage_path
        try:
            raw = path.read_text(encoding="utf-8")
        except OSError as error:
            raise StoreLoadError(path, f"unreadable: {error}") from error
        except UnicodeDecodeError as error:
            raise StoreLoadError(path, f"not UTF-8: {error.reason}") from error
        try:
            payload = json.loads(raw)
        except json.JSONDecodeError as error:
            raise StoreLoadError(path, f"malformed JSON: {error.msg}") from error
        except (ValueError, RecursionError) as error:
            raise StoreLoadError(path, f"undecodable JSON: {error}") from error
        self._documents = documents_from_payload(path, payload)
        return True


def documents_from_payload(path: Path, payload: object) -> dict[str, IndexedDocument]:
    """Validate a decoded store payload into an ordered document map."""
    if not isinstance(payload, dict):
        raise StoreLoadError(path, "top-level value must be an object")
    schema = payload.get("schema_version")
    if schema != STORE_SCHEMA_VERSION:
        raise StoreLoadError(
            path, f"schema_version {schema!r} is unsupported; expected {STORE_SCHEMA_VERSION}"
        )
    rows = payload.get("documents")
    if not isinstance(rows, list):
        raise StoreLoadError(path, "documents must be a list")
    output: dict[str, IndexedDocument] = {}
    for index, row in enumerate(rows):
        if not isinstance(row, list) or len(row) != 2:
            raise StoreLoadError(path, f"documents[{index}] must be a [path, document] pair")
        key, obj = row
        document = _document_from_dict(obj)
        if document is None or not isinstance(key, str) or key != document.path:
            raise StoreLoadError(path, f"documents[{index}] is not a valid document")
        output[key] = document
    return output


def _document_from_dict(obj: object) -> IndexedDocument | None:
    if not isinstance(obj, dict):
        return None
    path = obj.get("path")
    content = obj.get("content")
    language = obj.get("language")
    last_modified = obj.get("last_modified")
    token_count = obj.get("token_count")
    file_type = obj.get("file_type")
    if not isinstance(path, str) or not path:
        return None
    if not isinstance(content, str):
        return None
    if not isinstance(language, str):
        return None
    if isinstance(last_modified, bool) or not isinstance(last_modified, int):
        return None
    if isinstance(token_count, bool) or not isinstance(token_count, int):
        return None
    if not isinstance(file_type, str):
        return None
    lists: dict[str, tuple[str, ...]] = {}
    for field in _TUPLE_FIELDS:
        value = obj.get(field, [])
        if not isinstance(value, list) or not all(isinstance(item, str) for item in value):
            return None
        lists[field] = tuple(value)
    return IndexedDocument(
        path=path,
        content=content,
        language=language,
        last_modified=last_modified,
        token_count=token_count,
        symbols=lists["symbols"],
        imports=lists["imports"],
        exports=lists["exports"],
        comments=lists["comments"],
        file_type=file_type,
    )
