"""Python library project template."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Any, Callable, Mapping, Optional

from .. import prompts
from ..errors import InvalidParametersError
from .env_file import EnvVarInfo
from .pipeline import MaterializePlan, MaterializeReport, build_context, execute_plan
from .resolver import resolve_source
from .types import Template, params_from_mapping

TEMPLATE_ID = "python-library"


@dataclass(frozen=True)
class PythonLibraryParams:
    project_description: str = "A Python library"

    def __post_init__(self) -> None:
        if not isinstance(self.project_description, str):
            raise InvalidParametersError("project_description must be a string")

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any]) -> "PythonLibraryParams":
        return params_from_mapping(cls, data)


def collect_parameters() -> PythonLibraryParams:
    return PythonLibraryParams(
        project_description=prompts.text(
            "Project description", default="A Python library"
        )
    )


def materialize(
    target_dir: Path,
    project_name: str,
    params: PythonLibraryParams,
    ask_env: Optional[Callable[[EnvVarInfo], str]] = None,
) -> MaterializeReport:
    plan = MaterializePlan(
        source=resolve_source(TEMPLATE_ID, {}),
        context=build_context(
            project_name, params, names={"project_description": "projectDescription"}
        ),
    )
    return execute_plan(target_dir, plan, ask_env)


TEMPLATE = Template(
    id=TEMPLATE_ID,
    name="Python Library",
    description="Reusable Python package ready for publishing",
    collect_parameters=collect_parameters,
    materialize=materialize,
    post_install_instructions="""\
  python -m venv venv       # create a virtual environment
  source venv/bin/activate  # activate it (Linux/macOS)
  pip install -e .[dev]     # install in editable mode
  pytest                    # run the tests""",
)
