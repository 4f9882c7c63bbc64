"""CLI interface for mkproject - project scaffolding from templates."""

from __future__ import annotations

import sys
from typing import Optional

import click

from . import __version__
from .create import create_project
from .errors import MkprojectError
from .templates.registry import load_templates
from .utils import console


def _list_templates(ctx: click.Context, _param: click.Parameter, value: bool) -> None:
    if not value or ctx.resilient_parsing:
        return
    for template in load_templates():
        console.print(f"{template.id} - {template.name}: {template.description}")
    ctx.exit()


@click.command()
@click.argument("project_name", required=False)
@click.option(
    "--template",
    "-t",
    "template_id",
    default=None,
    help="Template id to use instead of choosing interactively",
)
@click.option(
    "--list-templates",
    "-l",
    is_flag=True,
    is_eager=True,
    expose_value=False,
    callback=_list_templates,
    help="List available templates and exit",
)
@click.version_option(__version__, prog_name="mkproject")
def cli(project_name: Optional[str], template_id: Optional[str]) -> None:
    """
    Create a new project from a template.

    PROJECT_NAME is the directory created in the current directory; it is asked
    for when omitted.
    """
    try:
        project_dir = create_project(project_name, template_id)
    except MkprojectError as e:
        console.print(f"Error: {e}", style="bold red")
        sys.exit(1)
    if project_dir is not None:
        console.print(f"✓ Project {project_dir.name} created", style="bold green")


if __name__ == "__main__":
    cli()
