"""Deterministic workspace walk."""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path

BINARY_SNIFF_BYTES = 4096


class RootEnumerationError(Exception):
    """Raised when a root directory cannot be listed at all."""

    def __init__(self, root: Path, reason: str) -> None:
        super().__init__(f"{root}: {reason}")
        self.root = root
        self.reason = reason


@dataclass(slots=True, frozen=True)
class DiscoveryScan:
    """Files found under one root plus directories that could not be listed."""

    root: Path
    files: tuple[Path, ...]
    unreadable_dirs: tuple[Path, ...]


def discover_files(
    root: Path,
    exclude_dir_names: tuple[str, ...],
    skip_dirs: tuple[Path, ...] = (),
) -> DiscoveryScan:
    """Walk a root depth-first in name order, pruning excluded directories."""
    resolved_root = root.resolve()
    if not resolved_root.is_dir():
        raise RootEnumerationError(resolved_root, "not a directory")
    try:
        with os.scandir(resolved_root) as entries:
            first_level = sorted(entries, key=lambda item: item.name)
    except OSError as error:
        raise RootEnumerationError(resolved_root, str(error)) from error

    excluded = set(exclude_dir_names)
    skipped = {path.resolve() for path in skip_dirs}
    files: list[Path] = []
    unreadable: list[Path] = []
    stack: list[list[os.DirEntry[str]]] = [first_level]
    while stack:
        ordered_entries = stack.pop()
        subdirs: list[Path] = []
        for entry in ordered_entries:
            full_path = Path(entry.path)
            try:
                if entry.is_dir(follow_symlinks=False):
                    if entry.name in excluded or full_path in skipped:
                        continue
                    subdirs.append(full_path)
                    continue
                if entry.is_file(follow_symlinks=False):
                    files.append(full_path)
            except OSError:
                continue
        for subdir in subdirs:
            try:
                with os.scandir(subdir) as entries:
                    stack.append(sorted(entries, key=lambda item: item.name))
            except OSError:
                unreadable.append(subdir)
    files.sort()
    unreadable.sort()
    return DiscoveryScan(root=resolved_root, files=tuple(files), unreadable_dirs=tuple(unreadable))


def looks_binary(sample: bytes) -> bool:
    """Treat content with NUL bytes in its leading sample as binary."""
    return b"\x00" in sample[:BINARY_SNIFF_BYTES]
