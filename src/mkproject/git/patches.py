"""Apply template patches shipped in a fetched template tree.

Templates keep their Handlebars syntax and optional feature code out of the
upstream source so it stays runnable on its own. The missing pieces ship as
diffs under ``.patches/``:

- ``handlebars.patch`` restores the template syntax and is always applied first.
- every other ``<name>.patch`` is a feature patch, applied only when the
  parameter flag it is gated by is true. By default the flag is the file stem.

Patches are applied with ``git apply`` directly against the working tree. Git
repository discovery is fenced at the target's parent so the tree is never
mistaken for part of an enclosing repository and no repository is created.
``git apply`` is atomic per patch, so a failing patch leaves no partial hunks.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import List, Mapping, Optional

from ..errors import CommandError
from ..utils import console, remove_path, run

PATCHES_DIR = ".patches"
SYNTAX_PATCH = "handlebars.patch"


@dataclass
class PatchReport:
    applied: List[str] = field(default_factory=list)
    skipped: List[str] = field(default_factory=list)
    failed: List[str] = field(default_factory=list)


def apply_patch(patch: Path, target_dir: Path) -> None:
    """Apply a single patch file to ``target_dir``. Raises ``CommandError`` on failure."""
    run(
        ["git", "apply", "--whitespace=nowarn", str(patch.resolve())],
        cwd=target_dir,
        env={"GIT_CEILING_DIRECTORIES": str(target_dir.resolve().parent)},
        quiet=True,
    )


def _try_apply(patch: Path, target_dir: Path, report: PatchReport) -> None:
    console.print(f"Applying patch {patch.name}...")
    try:
        apply_patch(patch, target_dir)
    except CommandError as e:
        console.print(f"Failed to apply patch {patch.name}", style="bold red")
        if e.output:
            console.print(e.output.rstrip(), style="yellow")
        report.failed.append(patch.name)
        return
    console.print(f"✓ Patch {patch.name} applied", style="green")
    report.applied.append(patch.name)


def apply_patches(
    target_dir: Path,
    flags: Mapping[str, bool],
    patch_flags: Optional[Mapping[str, str]] = None,
) -> PatchReport:
    """Apply the syntax patch and the enabled feature patches, then drop ``.patches/``.

    ``patch_flags`` maps a patch file name to the flag that gates it when the
    flag name differs from the file stem. A declared feature patch whose flag is
    on but whose file is missing is reported as skipped.
    """
    report = PatchReport()
    patches_dir = target_dir / PATCHES_DIR
    if not patches_dir.is_dir():
        console.print("No patches directory found, skipping patches")
        return report

    patch_flags = patch_flags or {}
    try:
        syntax_patch = patches_dir / SYNTAX_PATCH
        if syntax_patch.is_file():
            _try_apply(syntax_patch, target_dir, report)

        for patch in sorted(patches_dir.glob("*.patch")):
            if patch.name == SYNTAX_PATCH:
                continue
            flag = patch_flags.get(patch.name, patch.stem)
            if flags.get(flag) is True:
                _try_apply(patch, target_dir, report)
            else:
                console.print(f"Skipping patch {patch.name} ({flag} is off)")
                report.skipped.append(patch.name)

        for name, flag in patch_flags.items():
            if flags.get(flag) is True and not (patches_dir / name).is_file():
                console.print(
                    f"Patch {name} for {flag} not found, skipping", style="yellow"
                )
                report.skipped.append(name)
    finally:
        remove_path(patches_dir)
    return report
