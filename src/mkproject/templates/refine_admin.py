"""Refine admin dashboard template (React)."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Any, Callable, Dict, Mapping, Optional

from .. import prompts
from .env_file import EnvVarInfo
from .pipeline import MaterializePlan, MaterializeReport, build_context, execute_plan
from .resolver import resolve_source
from .types import Template, boolean_flags, params_from_mapping, require_bool

TEMPLATE_ID = "refine-admin"

FEATURES = [
    ("multi_env", "Multiple environments (development, test, production)"),
    ("include_unocss", "UnoCSS atomic CSS"),
]

# parameter field -> key used by the template sources
CONTEXT_NAMES = {"multi_env": "multiEnv", "include_unocss": "includeUnocss"}

# patch file -> parameter that gates it
PATCH_FLAGS = {
    "multiEnv.patch": "multi_env",
    "unocss.patch": "include_unocss",
}


@dataclass(frozen=True)
class RefineAdminParams:
    multi_env: bool = False
    include_unocss: bool = False

    def __post_init__(self) -> None:
        require_bool("multi_env", self.multi_env)
        require_bool("include_unocss", self.include_unocss)

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any]) -> "RefineAdminParams":
        return params_from_mapping(cls, data)


def derived_flags(params: RefineAdminParams) -> Dict[str, bool]:
    return {"hasMultiEnv": params.multi_env, "hasUnocss": params.include_unocss}


def collect_parameters() -> RefineAdminParams:
    features = prompts.select_many("Features to include:", FEATURES)
    return RefineAdminParams(
        multi_env="multi_env" in features,
        include_unocss="include_unocss" in features,
    )


def materialize(
    target_dir: Path,
    project_name: str,
    params: RefineAdminParams,
    ask_env: Optional[Callable[[EnvVarInfo], str]] = None,
) -> MaterializeReport:
    flags = derived_flags(params)
    plan = MaterializePlan(
        source=resolve_source(TEMPLATE_ID, {}),
        context=build_context(project_name, params, flags, CONTEXT_NAMES),
        flags={**boolean_flags(params), **flags},
        patch_flags=PATCH_FLAGS,
    )
    return execute_plan(target_dir, plan, ask_env)


TEMPLATE = Template(
    id=TEMPLATE_ID,
    name="Refine Admin",
    description="React admin dashboard built on Refine",
    collect_parameters=collect_parameters,
    materialize=materialize,
    post_install_instructions="""\
  npm install  # install dependencies
  npm run dev  # start the development server""",
)
