"""Git repository setup for generated projects."""

from __future__ import annotations

from pathlib import Path

from ..errors import CommandError
from ..utils import console, run

INITIAL_COMMIT_MESSAGE = "Initial commit from template"


def init_repository(project_dir: Path) -> bool:
    """Create a git repository in ``project_dir`` holding one initial commit.

    Returns False, after printing a warning, when git is unavailable or any
    step fails. The project itself is complete either way.
    """
    console.print("Initializing git repository...")
    try:
        run(["git", "init"], cwd=project_dir, quiet=True)
        run(["git", "add", "-A"], cwd=project_dir, quiet=True)
        run(
            ["git", "commit", "-m", INITIAL_COMMIT_MESSAGE],
            cwd=project_dir,
            quiet=True,
        )
    except CommandError:
        console.print(
            "Git repository initialization failed, please initialize it manually",
            style="yellow",
        )
        return False
    console.print("✓ Git repository initialized", style="green")
    return True
