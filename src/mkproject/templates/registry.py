"""The set of templates mkproject can create projects from."""

from __future__ import annotations

from typing import List

from ..errors import TemplateNotFoundError
from . import (
    docker_compose,
    fastapi,
    python_api,
    python_library,
    python_web,
    refine_admin,
)
from .types import Template

TEMPLATES: List[Template] = [
    python_web.TEMPLATE,
    python_api.TEMPLATE,
    python_library.TEMPLATE,
    refine_admin.TEMPLATE,
    fastapi.TEMPLATE,
    docker_compose.TEMPLATE,
]


def load_templates() -> List[Template]:
    return list(TEMPLATES)


def get_template(template_id: str) -> Template:
    for template in TEMPLATES:
        if template.id == template_id:
            return template
    available = ", ".join(t.id for t in TEMPLATES)
    raise TemplateNotFoundError(
        f"Unknown template {template_id!r}. Available templates: {available}"
    )
