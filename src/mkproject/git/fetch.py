"""Retrieve a template source into a target directory."""

from __future__ import annotations

import shutil
from pathlib import Path

from ..errors import CommandError, FetchError
from ..utils import console, remove_path, run


def _is_local_source(source: str) -> bool:
    return Path(source).expanduser().is_dir()


def fetch_template(source: str, target_dir: Path) -> None:
    """Populate ``target_dir`` with the template at ``source`` as a plain file tree.

    ``source`` is either a git URL, cloned shallowly, or a local directory,
    copied. The target must exist and be empty. Version-control metadata is
    stripped either way.
    """
    if _is_local_source(source):
        console.print(f"Copying template from {source}")
        try:
            shutil.copytree(
                Path(source).expanduser(),
                target_dir,
                ignore=shutil.ignore_patterns(".git"),
                dirs_exist_ok=True,
            )
        except (OSError, shutil.Error) as e:
            raise FetchError(f"Failed to copy template from {source}: {e}") from e
    else:
        console.print(f"Cloning template from {source}")
        try:
            run(["git", "clone", "--depth", "1", source, str(target_dir)])
        except CommandError as e:
            raise FetchError(f"Failed to clone template repository {source}") from e
    remove_path(target_dir / ".git")
