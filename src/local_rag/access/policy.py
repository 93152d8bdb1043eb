"""Access filter protocol and the default ignore-file implementation."""

from __future__ import annotations

import fnmatch
from pathlib import Path
from typing import Protocol

from local_rag.access.ignore import IgnoreRule, match_ignore_rules, parse_ignore_rules

_SENSITIVE_BASENAME_GLOBS = ("*.pem", "*.key", "*.pfx", "*.p12", "id_rsa*", "secrets.*")


class AccessFilter(Protocol):
    """Yes/no decision on whether a path may be read."""

    def is_accessible(self, path: Path) -> bool:
        """Return True when the absolute path may be indexed."""


class AllowAllAccessFilter:
    """Filter that admits every path."""

    def is_accessible(self, path: Path) -> bool:
        _ = path
        return True


def is_denylisted(path: Path) -> bool:
    """Return True when the file name looks like a credential or secret."""
    basename = path.name.lower()
    if basename == ".env" or basename.startswith(".env."):
        return True
    return any(fnmatch.fnmatch(basename, pattern) for pattern in _SENSITIVE_BASENAME_GLOBS)


class IgnoreFileAccessFilter:
    """Gitignore-style filter driven by one ignore file per workspace root.

    Paths outside every configured root are allowed. Once an ignore file
    exists it denies itself as well.
    """

    def __init__(
        self,
        roots: tuple[Path, ...],
        ignore_file_name: str = ".ragignore",
        *,
        deny_sensitive: bool = True,
    ) -> None:
        self._roots = tuple(root.resolve() for root in roots)
        self._ignore_file_name = ignore_file_name
        self._deny_sensitive = deny_sensitive
        self._rules: dict[Path, tuple[IgnoreRule, ...] | None] = {}
        self.reload()

    def reload(self) -> None:
        """Re-read every root's ignore file."""
        rules: dict[Path, tuple[IgnoreRule, ...] | None] = {}
        for root in self._roots:
            ignore_path = root / self._ignore_file_name
            try:
                text = ignore_path.read_text(encoding="utf-8", errors="replace")
            except OSError:
                rules[root] = None
                continue
            rules[root] = parse_ignore_rules(text)
        self._rules = rules

    def has_ignore_file(self, root: Path) -> bool:
        """Return True when an ignore file was loaded for the root."""
        return self._rules.get(root.resolve()) is not None

    def is_accessible(self, path: Path) -> bool:
        """Return False when the path is denylisted or matched by the owning root's rules."""
        absolute = path if path.is_absolute() else path.resolve()
        if self._deny_sensitive and is_denylisted(absolute):
            return False
        root = self._owning_root(absolute)
        if root is None:
            return True
        rules = self._rules.get(root)
        if rules is None:
            return True
        relative = absolute.relative_to(root).as_posix()
        if relative == self._ignore_file_name:
            return False
        return not match_ignore_rules(rules, relative)

    def filter_paths(self, paths: list[Path]) -> list[Path]:
        """Return the accessible subset of paths in input order."""
        return [path for path in paths if self.is_accessible(path)]

    def _owning_root(self, path: Path) -> Path | None:
        best: Path | None = None
        for root in self._roots:
            if not path.is_relative_to(root):
                continue
            if best is None or len(root.parts) > len(best.parts):
                best = root
        return best
