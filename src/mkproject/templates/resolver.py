"""Choose a template source location from the condition table."""

from __future__ import annotations

from typing import Any, Mapping, Optional

from ..config import TemplateSources, get_template_sources
from ..errors import SourceResolutionError


def entry_matches(when: Mapping[str, Any], fields: Mapping[str, Any]) -> bool:
    """Return True if every predicate in ``when`` equals the corresponding field.

    Predicates the entry does not define are wildcards.
    """
    return all(fields.get(key) == value for key, value in when.items())


def resolve_source(
    template_id: str,
    fields: Mapping[str, Any],
    sources: Optional[TemplateSources] = None,
) -> str:
    """Return the source location of the first matching entry, else the default.

    ``sources`` defaults to the configured condition table entry for
    ``template_id``.
    """
    if sources is None:
        sources = get_template_sources(template_id)
    for entry in sources["conditions"]:
        if entry_matches(entry["when"], fields):
            return entry["repo"]
    default = sources.get("default")
    if not default:
        raise SourceResolutionError(
            f"No template source matches the selected options for {template_id!r} "
            "and no default is configured"
        )
    return default
