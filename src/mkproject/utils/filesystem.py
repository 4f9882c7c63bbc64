"""File system utilities."""

from __future__ import annotations

import shutil
from pathlib import Path


def remove_path(path: Path) -> bool:
    """Remove a file, symlink or directory tree.

    Returns False when nothing existed at ``path``.
    """
    if path.is_symlink() or path.is_file():
        path.unlink()
        return True
    if path.is_dir():
        shutil.rmtree(path)
        return True
    return False


def is_empty_directory(path: Path) -> bool:
    """Return True if ``path`` is a directory with no entries."""
    return path.is_dir() and not any(path.iterdir())


def clear_directory(path: Path) -> None:
    """Delete every entry inside ``path`` while keeping the directory itself."""
    for child in path.iterdir():
        remove_path(child)
