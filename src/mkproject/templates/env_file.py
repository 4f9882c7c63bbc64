"""Read environment declarations (``.env.example``) and write ``.env`` files.

Declarations use the ``KEY=value`` format. A ``#`` comment line directly
above a key documents it. A key with an empty value has to be supplied by the
user before the ``.env`` file is written.
"""

from __future__ import annotations

from dataclasses import dataclass, replace
from pathlib import Path
from typing import Callable, Iterable, List, Optional

DEFAULT_DECLARATION_FILE = ".env.example"
ENV_FILE = ".env"


@dataclass(frozen=True)
class EnvVarInfo:
    name: str
    value: Optional[str] = None
    comment: Optional[str] = None


def parse_env_declarations(content: str) -> List[EnvVarInfo]:
    """Parse ``content`` into one ``EnvVarInfo`` per declared key, in order."""
    result: List[EnvVarInfo] = []
    comment: Optional[str] = None
    for raw_line in content.splitlines():
        line = raw_line.strip()
        if not line:
            comment = None
            continue
        if line.startswith("#"):
            comment = line.lstrip("#").strip() or None
            continue
        if line.startswith("export "):
            line = line[len("export ") :].lstrip()
        name, sep, value = line.partition("=")
        name = name.strip()
        if not sep or not name:
            continue
        value = value.strip()
        result.append(EnvVarInfo(name=name, value=value or None, comment=comment))
        comment = None
    return result


def read_env_declarations(path: Path) -> List[EnvVarInfo]:
    """Read declarations from ``path``; an absent file declares nothing."""
    if not path.is_file():
        return []
    return parse_env_declarations(path.read_text(encoding="utf-8"))


def fill_env_values(
    variables: Iterable[EnvVarInfo], ask: Callable[[EnvVarInfo], str]
) -> List[EnvVarInfo]:
    """Return ``variables`` with every missing value obtained from ``ask``."""
    return [
        var if var.value is not None else replace(var, value=ask(var))
        for var in variables
    ]


def format_env_file(variables: Iterable[EnvVarInfo]) -> str:
    lines: List[str] = []
    for var in variables:
        if var.comment:
            lines.append(f"# {var.comment}")
        lines.append(f"{var.name}={var.value or ''}")
    return "\n".join(lines) + "\n" if lines else ""


def write_env_file(path: Path, variables: Iterable[EnvVarInfo]) -> None:
    path.write_text(format_env_file(variables), encoding="utf-8")
