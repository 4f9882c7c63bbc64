"""The materialization pipeline shared by every template.

A template describes what it wants as a ``MaterializePlan``; ``execute_plan``
runs the stages in a fixed order against the target directory:

fetch -> patches -> prune -> manifest -> template-specific edits ->
environment values -> render -> write ``.env``
"""

from __future__ import annotations

import dataclasses
from dataclasses import dataclass, field
from datetime import date
from pathlib import Path
from typing import Any, Callable, Dict, List, Mapping, Optional, Tuple

from .. import prompts
from ..git import PatchReport, apply_patches, fetch_template
from ..utils import console
from .env_file import (
    DEFAULT_DECLARATION_FILE,
    ENV_FILE,
    EnvVarInfo,
    fill_env_values,
    read_env_declarations,
    write_env_file,
)
from .manifest import ManifestRules, edit_manifest
from .pruner import prune_tree
from .renderer import RenderReport, render_tree


@dataclass(frozen=True)
class MaterializePlan:
    source: str
    context: Mapping[str, Any]
    flags: Mapping[str, bool] = field(default_factory=dict)
    patch_flags: Mapping[str, str] = field(default_factory=dict)
    prune: Tuple[str, ...] = ()
    manifest: Optional[ManifestRules] = None
    manifest_file: str = "requirements.txt"
    edits: Tuple[Callable[[Path], None], ...] = ()
    env_declaration: Optional[str] = DEFAULT_DECLARATION_FILE


@dataclass
class MaterializeReport:
    source: str
    patches: PatchReport
    pruned: List[str]
    render: RenderReport
    env: List[EnvVarInfo]


def snake_case(name: str) -> str:
    return name.replace("-", "_").lower()


def build_context(
    project_name: str,
    params: Any,
    derived: Optional[Mapping[str, Any]] = None,
    names: Optional[Mapping[str, str]] = None,
) -> Dict[str, Any]:
    """Build the render context: parameters, derived values and project naming.

    Template sources refer to values by their camelCase names. ``names`` maps a
    parameter field to the key it is published under; unmapped fields keep
    their own name.
    """
    names = names or {}
    context: Dict[str, Any] = {
        "projectName": project_name,
        "projectNameSnakeCase": snake_case(project_name),
        "currentYear": date.today().year,
    }
    for key, value in dataclasses.asdict(params).items():
        if isinstance(value, tuple):
            value = list(value)
        context[names.get(key, key)] = value
    context.update(derived or {})
    return context


def execute_plan(
    target_dir: Path,
    plan: MaterializePlan,
    ask_env: Optional[Callable[[EnvVarInfo], str]] = None,
) -> MaterializeReport:
    """Materialize ``plan`` into ``target_dir``, which must exist and be empty."""
    ask_env = ask_env or prompts.ask_env_value

    console.print(f"Using template source: {plan.source}")
    fetch_template(plan.source, target_dir)

    patches = apply_patches(target_dir, plan.flags, plan.patch_flags)
    pruned = prune_tree(target_dir, plan.prune)
    if plan.manifest is not None:
        edit_manifest(target_dir / plan.manifest_file, plan.manifest)
    for edit in plan.edits:
        edit(target_dir)

    env_vars: List[EnvVarInfo] = []
    if plan.env_declaration:
        declared = read_env_declarations(target_dir / plan.env_declaration)
        env_vars = fill_env_values(declared, ask_env)

    console.print("Rendering template files...")
    render = render_tree(target_dir, plan.context)
    if env_vars:
        write_env_file(target_dir / ENV_FILE, env_vars)
        console.print(f"Wrote {ENV_FILE}")

    if patches.failed:
        console.print(
            "Some optional features could not be patched in and need manual wiring: "
            + ", ".join(patches.failed),
            style="yellow",
        )
    console.print("✓ Project files generated", style="green")
    return MaterializeReport(
        source=plan.source,
        patches=patches,
        pruned=pruned,
        render=render,
        env=env_vars,
    )
