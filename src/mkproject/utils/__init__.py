"""Utility modules for mkproject."""

from .console import console
from .filesystem import clear_directory, is_empty_directory, remove_path
from .subprocess_utils import run

__all__ = [
    "console",
    "clear_directory",
    "is_empty_directory",
    "remove_path",
    "run",
]
