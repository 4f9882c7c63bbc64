"""Shared console for user-facing output."""

from __future__ import annotations

from rich.console import Console

console = Console(highlight=False, markup=False, emoji=False, soft_wrap=True)
