"""Template resolution and materialization for mkproject."""

from .env_file import EnvVarInfo, parse_env_declarations
from .manifest import ManifestRules, edit_manifest
from .pruner import prune_tree
from .renderer import RenderReport, render_string, render_tree
from .resolver import resolve_source
from .types import Template

__all__ = [
    "EnvVarInfo",
    "parse_env_declarations",
    "ManifestRules",
    "edit_manifest",
    "prune_tree",
    "RenderReport",
    "render_string",
    "render_tree",
    "resolve_source",
    "Template",
]
