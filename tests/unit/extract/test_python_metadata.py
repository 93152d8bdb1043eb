from __future__ import annotations

from local_rag.extract import extract

SOURCE = '''"""Module docstring."""
import os, sys as system
from .models import Widget
from collections.abc import Iterable

__all__ = ["build", "Registry"]

DEFAULT_LIMIT: int = 10


class Registry(Base):
    # Tracks registered widgets
    def register(self, item):
        return item


async def build(items):
    if items == None:
        return []
    return list(items)
'''


def test_python_symbols_include_functions_classes_and_module_bindings() -> None:
    metadata = extract(SOURCE, "python", "pkg/registry.py")

    assert "Registry" in metadata.symbols
    assert "register" in metadata.symbols
    assert "build" in metadata.symbols
    assert "DEFAULT_LIMIT" in metadata.symbols
    assert "items" not in metadata.symbols


def test_python_imports_split_multi_module_statements() -> None:
    metadata = extract(SOURCE, "python", "pkg/registry.py")

    assert metadata.imports == ("os", "sys", ".models", "collections.abc")


def test_python_exports_come_from_dunder_all() -> None:
    metadata = extract(SOURCE, "python", "pkg/registry.py")

    assert metadata.exports == ("build", "Registry")


def test_python_hash_comments_only() -> None:
    metadata = extract(SOURCE, "python", "pkg/registry.py")

    assert metadata.comments == ("Tracks registered widgets",)
    assert metadata.file_type == "python"


def test_python_without_all_has_no_exports() -> None:
    metadata = extract("def run():\n    pass\n", "python", "run.py")

    assert metadata.symbols == ("run",)
    assert metadata.exports == ()
