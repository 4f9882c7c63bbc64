"""Line-based editing of a dependency declaration file (``requirements.txt``)."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, List, Tuple

from ..errors import MissingTemplateFileError
from ..utils import console


@dataclass(frozen=True)
class ManifestRules:
    """How to rewrite a manifest.

    ``drop`` lists substrings whose lines are removed. ``replace`` maps a
    substring to the lines that take the place of any line containing it.
    Dropping wins over replacing.
    """

    drop: Tuple[str, ...] = ()
    replace: Dict[str, Tuple[str, ...]] = field(default_factory=dict)


def edit_lines(lines: List[str], rules: ManifestRules) -> List[str]:
    """Apply ``rules`` to ``lines``; unmatched lines pass through in order."""
    out: List[str] = []
    for line in lines:
        if any(token in line for token in rules.drop):
            continue
        for token, replacement in rules.replace.items():
            if token in line:
                out.extend(replacement)
                break
        else:
            out.append(line)
    return out


def edit_manifest(path: Path, rules: ManifestRules, required: bool = False) -> bool:
    """Rewrite the manifest at ``path`` according to ``rules``.

    Returns False when the file is absent and not ``required``.
    """
    if not path.is_file():
        if required:
            raise MissingTemplateFileError(f"Template is missing {path.name}")
        return False
    with open(path, "r", encoding="utf-8", newline="") as f:
        content = f.read()
    newline = "\r\n" if "\r\n" in content else "\n"
    new_content = newline.join(edit_lines(content.split(newline), rules))
    if new_content != content:
        with open(path, "w", encoding="utf-8", newline="") as f:
            f.write(new_content)
        console.print(f"Updated {path.name}")
    return True
