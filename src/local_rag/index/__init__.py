"""Indexing and document storage package."""

from .discovery import DiscoveryScan, RootEnumerationError, discover_files, looks_binary
from .indexer import Indexer
from .models import (
    CHARS_PER_TOKEN,
    IndexedDocument,
    IndexPassResult,
    IndexStatus,
    estimate_token_count,
)
from .store import STORE_SCHEMA_VERSION, DocumentStore, StoreLoadError, documents_from_payload

__all__ = [
    "CHARS_PER_TOKEN",
    "DiscoveryScan",
    "DocumentStore",
    "IndexPassResult",
    "IndexStatus",
    "IndexedDocument",
    "Indexer",
    "RootEnumerationError",
    "STORE_SCHEMA_VERSION",
    "StoreLoadError",
    "discover_files",
    "documents_from_payload",
    "estimate_token_count",
    "looks_binary",
]
