"""Interactive prompts used to collect template parameters."""

from __future__ import annotations

from typing import List, Optional, Sequence, Tuple

import click

from .templates.env_file import EnvVarInfo
from .utils import console


def select(
    question: str, choices: Sequence[Tuple[str, str]], default: Optional[str] = None
) -> str:
    """Ask for one of ``choices``, given as ``(value, label)`` pairs."""
    console.print(question, style="bold")
    for value, label in choices:
        console.print(f"  {value} - {label}")
    return click.prompt(
        "Choice",
        type=click.Choice([value for value, _ in choices], case_sensitive=False),
        default=default,
        show_choices=False,
    ).lower()


def confirm(question: str, default: bool = True) -> bool:
    return click.confirm(question, default=default)


def select_many(
    question: str, choices: Sequence[Tuple[str, str]], default: bool = False
) -> List[str]:
    """Ask a yes/no question per choice and return the accepted values in order."""
    console.print(question, style="bold")
    return [
        value
        for value, label in choices
        if click.confirm(f"  {label}", default=default)
    ]


def text(question: str, default: Optional[str] = None) -> str:
    """Ask for a non-empty line of text."""

    def _not_blank(value: str) -> str:
        if not value.strip():
            raise click.BadParameter("a value is required")
        return value.strip()

    return click.prompt(question, default=default, value_proc=_not_blank)


def ask_env_value(var: EnvVarInfo) -> str:
    """Ask for the value of an environment variable declared without one."""
    question = f"Value for {var.name}"
    if var.comment:
        question += f" ({var.comment})"
    return click.prompt(question, default="", show_default=False)
