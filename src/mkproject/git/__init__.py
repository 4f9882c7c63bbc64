"""Git operations for mkproject."""

from .fetch import fetch_template
from .patches import PATCHES_DIR, SYNTAX_PATCH, PatchReport, apply_patch, apply_patches
from .repository import init_repository

__all__ = [
    "fetch_template",
    "PATCHES_DIR",
    "SYNTAX_PATCH",
    "PatchReport",
    "apply_patch",
    "apply_patches",
    "init_repository",
]
