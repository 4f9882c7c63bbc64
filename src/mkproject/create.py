"""Create a new project from a template."""

from __future__ import annotations

from pathlib import Path
from typing import Optional

from . import prompts
from .errors import MkprojectError
from .git import init_repository
from .templates.registry import get_template, load_templates
from .templates.types import Template
from .utils import clear_directory, console, is_empty_directory


def prepare_target(target_dir: Path) -> bool:
    """Make ``target_dir`` an existing, empty directory.

    A non-empty directory is only emptied after the user confirms. Returns
    False when they decline.
    """
    if target_dir.exists() and not target_dir.is_dir():
        raise MkprojectError(f"{target_dir} already exists and is not a directory")
    if target_dir.is_dir():
        if is_empty_directory(target_dir):
            return True
        if not prompts.confirm(
            f"Directory {target_dir.name} already exists. Overwrite it?", default=False
        ):
            return False
        clear_directory(target_dir)
        return True
    target_dir.mkdir(parents=True)
    return True


def choose_template(template_id: Optional[str]) -> Template:
    if template_id:
        return get_template(template_id)
    templates = load_templates()
    chosen = prompts.select(
        "Project template:",
        [(t.id, f"{t.name}: {t.description}") for t in templates],
    )
    return get_template(chosen)


def print_next_steps(project_name: str, template: Template) -> None:
    console.print("\nProject created successfully!\n", style="green")
    console.print("Next steps:", style="cyan")
    console.print(f"  cd {project_name}", style="cyan")
    if template.post_install_instructions:
        console.print(template.post_install_instructions, style="cyan")


def create_project(
    project_name: Optional[str] = None,
    template_id: Optional[str] = None,
    base_dir: Optional[Path] = None,
) -> Optional[Path]:
    """Create ``project_name`` under ``base_dir`` (the current directory by default).

    Returns the project directory, or None when the user declined to overwrite
    an existing directory.
    """
    if not project_name:
        project_name = prompts.text("Project name")
    target_dir = (base_dir or Path.cwd()) / project_name
    console.print(f"Creating project: {project_name}", style="blue")

    if not prepare_target(target_dir):
        console.print("Operation cancelled", style="yellow")
        return None

    template = choose_template(template_id)
    console.print(f"Using template: {template.name}", style="blue")
    params = template.collect_parameters()
    template.materialize(target_dir, project_name, params)

    init_repository(target_dir)
    print_next_steps(project_name, template)
    return target_dir
