"""Render every file of a materialized template in place with Handlebars."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, List, Mapping, Optional

import pybars

from ..utils import console


@dataclass
class RenderReport:
    rendered: List[Path] = field(default_factory=list)
    unchanged: List[Path] = field(default_factory=list)
    failed: List[Path] = field(default_factory=list)


def render_string(
    template_string: str,
    variables: Mapping[str, Any],
    compiler: Optional[pybars.Compiler] = None,
) -> str:
    """Render a Handlebars template string with ``variables``.

    Names missing from ``variables`` render as empty strings.
    """
    if "{{" not in template_string:
        return template_string
    compiler = compiler or pybars.Compiler()
    template = compiler.compile(template_string)
    return str(template(dict(variables)))


def render_file(
    path: Path, context: Mapping[str, Any], compiler: pybars.Compiler
) -> bool:
    """Render ``path`` in place. Returns False if the output equals the input."""
    with open(path, "r", encoding="utf-8", newline="") as f:
        original = f.read()
    rendered = render_string(original, context, compiler)
    if rendered == original:
        return False
    with open(path, "w", encoding="utf-8", newline="") as f:
        f.write(rendered)
    return True


def _walk(
    directory: Path,
    context: Mapping[str, Any],
    compiler: pybars.Compiler,
    report: RenderReport,
) -> None:
    for entry in sorted(directory.iterdir()):
        if entry.is_symlink():
            continue
        if entry.is_dir():
            _walk(entry, context, compiler, report)
        elif entry.is_file():
            try:
                changed = render_file(entry, context, compiler)
            except UnicodeDecodeError:
                console.print(
                    f"Skipping {entry}: not a UTF-8 text file", style="yellow"
                )
                report.failed.append(entry)
                continue
            except Exception as e:
                console.print(f"Failed to render {entry}: {e}", style="yellow")
                report.failed.append(entry)
                continue
            if changed:
                report.rendered.append(entry)
            else:
                report.unchanged.append(entry)


def render_tree(root: Path, context: Mapping[str, Any]) -> RenderReport:
    """Render every regular file under ``root`` against ``context``.

    Files whose output is identical to their content are not rewritten. A file
    that cannot be decoded or rendered is reported and left as it was.
    """
    report = RenderReport()
    _walk(root, context, pybars.Compiler(), report)
    return report
