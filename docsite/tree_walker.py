"""Lazy discovery of generated documentation files."""

from __future__ import annotations

import os
from pathlib import Path
from typing import Iterator

from .highlight.constants import DEFAULT_SUFFIX


def walk_files(root: Path | str, suffix: str = DEFAULT_SUFFIX) -> Iterator[Path]:
    """Yield regular files under ``root`` whose name ends with ``suffix``.

    The root is checked before the iterator is returned, so a missing or
    unreadable root fails at the call site rather than on first iteration.
    Symlinks are never followed or yielded, which keeps every file visited
    exactly once even when the tree links back into itself.
    """
    root_path = Path(root).expanduser().resolve()
    if not root_path.exists():
        raise FileNotFoundError(f"Documentation root not found: {root}")
    if not root_path.is_dir():
        raise NotADirectoryError(f"Documentation root is not a directory: {root}")
    if not os.access(root_path, os.R_OK | os.X_OK):
        raise PermissionError(f"Documentation root is not readable: {root}")
    return _iter_files(root_path, suffix)


def _iter_files(root: Path, suffix: str) -> Iterator[Path]:
    for dirpath, dirnames, filenames in os.walk(root, onerror=_raise):
        current_dir = Path(dirpath)
        dirnames[:] = sorted(
            name for name in dirnames if not (current_dir / name).is_symlink()
        )
        for filename in sorted(filenames):
            if not filename.endswith(suffix):
                continue
            path = current_dir / filename
            if path.is_symlink() or not path.is_file():
                continue
            yield path


def _raise(error: OSError) -> None:
    raise error


__all__ = ["walk_files"]
