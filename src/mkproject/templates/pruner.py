"""Remove feature-gated files and directories from a fetched template."""

from __future__ import annotations

from pathlib import Path
from typing import Iterable, List

from ..errors import MkprojectError
from ..utils import console, remove_path


def prune_tree(target_dir: Path, relative_paths: Iterable[str]) -> List[str]:
    """Delete each of ``relative_paths`` under ``target_dir`` that exists.

    Absent paths are skipped silently. Returns the paths that were removed.
    The entry itself is never resolved, so a symlink is unlinked rather than
    followed.
    """
    root = target_dir.resolve()
    removed: List[str] = []
    for rel in relative_paths:
        path = target_dir / rel
        inside = path.parent.resolve().is_relative_to(root)
        if path == target_dir or path.name == ".." or not inside:
            raise MkprojectError(f"Refusing to prune {rel!r} outside {target_dir}")
        if remove_path(path):
            console.print(f"Removed {rel}")
            removed.append(rel)
    return removed
