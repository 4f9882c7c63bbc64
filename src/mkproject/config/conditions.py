"""Template condition table configuration.

The condition table maps each template id to an ordered list of condition
entries and a default source location:

    templates:
      python-api:
        conditions:
          - web_framework: fastapi
            orm: true
            repo: https://github.com/...
        default: https://github.com/...

Every key of an entry other than ``repo`` is a predicate on the template's
condition fields. The table is bundled with the package; the
``MKPROJECT_TEMPLATES_FILE`` environment variable points at a replacement file.
Loading is memoized so callers can treat it like a constant.
"""

from __future__ import annotations

import os
from functools import lru_cache
from importlib.resources import files
from pathlib import Path
from typing import Any, Dict, List, Optional, TypedDict, cast

import yaml

from ..errors import TemplateConfigError

TEMPLATES_FILE_ENV = "MKPROJECT_TEMPLATES_FILE"


class ConditionEntry(TypedDict):
    """A predicate set and the source location it selects."""

    when: Dict[str, Any]  # {"web_framework": "fastapi", "orm": True}
    repo: str  # https://github.com/dongjak-templates/fastapi-template.git


class TemplateSources(TypedDict):
    """Source locations for one template."""

    conditions: List[ConditionEntry]
    default: Optional[str]


def _parse_entry(template_id: str, index: int, raw: object) -> ConditionEntry:
    if not isinstance(raw, dict):
        raise TemplateConfigError(
            f"Condition {index} of template {template_id!r} must be a mapping"
        )
    raw = cast(Dict[str, Any], raw)
    repo = raw.get("repo")
    if not isinstance(repo, str) or not repo:
        raise TemplateConfigError(
            f"Condition {index} of template {template_id!r} is missing 'repo'"
        )
    when = {k: v for k, v in raw.items() if k != "repo"}
    return ConditionEntry(when=when, repo=repo)


def _parse_table(data: Dict[str, Any]) -> Dict[str, TemplateSources]:
    templates_section = data.get("templates", {})
    if not isinstance(templates_section, dict):
        raise TemplateConfigError("'templates' must be a mapping of template ids")
    out: Dict[str, TemplateSources] = {}
    for template_id, cfg in templates_section.items():
        if not isinstance(cfg, dict):
            raise TemplateConfigError(f"Template {template_id!r} must be a mapping")
        raw_conditions = cfg.get("conditions") or []
        if not isinstance(raw_conditions, list):
            raise TemplateConfigError(
                f"'conditions' of template {template_id!r} must be a list"
            )
        default = cfg.get("default")
        if default is not None and not isinstance(default, str):
            raise TemplateConfigError(
                f"'default' of template {template_id!r} must be a string"
            )
        out[str(template_id)] = TemplateSources(
            conditions=[
                _parse_entry(template_id, i, entry)
                for i, entry in enumerate(raw_conditions)
            ],
            default=default,
        )
    return out


def load_condition_table(path: Path) -> Dict[str, TemplateSources]:
    """Load a condition table from a YAML file path."""
    try:
        with path.open("r", encoding="utf-8") as f:
            data = yaml.safe_load(f) or {}
    except (OSError, yaml.YAMLError) as e:
        raise TemplateConfigError(f"Unable to read condition table {path}: {e}") from e
    if not isinstance(data, dict):
        raise TemplateConfigError(f"Condition table {path} must be a mapping")
    return _parse_table(data)


def load_bundled_table() -> Dict[str, TemplateSources]:
    """Load the condition table bundled with the package."""
    content = files("mkproject.config").joinpath("templates.yml").read_text(
        encoding="utf-8"
    )
    data = yaml.safe_load(content) or {}
    assert isinstance(data, dict)
    return _parse_table(data)


def configured_table_path() -> Optional[Path]:
    """Return the override path from the environment, if one is set."""
    value = os.getenv(TEMPLATES_FILE_ENV)
    return Path(value).expanduser() if value else None


@lru_cache(maxsize=1)
def get_condition_table() -> Dict[str, TemplateSources]:
    """Return the condition table, from the override file or the bundled one (memoized)."""
    path = configured_table_path()
    if path is not None:
        return load_condition_table(path)
    return load_bundled_table()


def get_template_sources(template_id: str) -> TemplateSources:
    """Return the source locations configured for ``template_id``.

    A template missing from the table has neither conditions nor a default.
    """
    return get_condition_table().get(
        template_id, TemplateSources(conditions=[], default=None)
    )
