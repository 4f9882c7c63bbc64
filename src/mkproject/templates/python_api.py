"""Python API project template."""

from __future__ import annotations

import re
from dataclasses import dataclass
from functools import partial
from pathlib import Path
from typing import Any, Callable, Dict, List, Mapping, Optional, Tuple

import tomlkit
from tomlkit.exceptions import TOMLKitError

from .. import prompts
from ..utils import console
from .env_file import EnvVarInfo
from .manifest import ManifestRules
from .pipeline import MaterializePlan, MaterializeReport, build_context, execute_plan
from .resolver import resolve_source
from .types import (
    Template,
    boolean_flags,
    params_from_mapping,
    require_bool,
    require_choice,
)

TEMPLATE_ID = "python-api"
ORM_FRAMEWORKS = ("sqlmodel",)
WEB_FRAMEWORKS = ("flask", "fastapi")

FLASK_REQUIREMENT = "flask==2.3.3"
FASTAPI_REQUIREMENTS = ("fastapi==0.103.1", "uvicorn==0.23.2")

SETUP_NAME_RE = re.compile(r'name=".*?"')


@dataclass(frozen=True)
class PythonApiParams:
    orm: bool = True
    orm_framework: Optional[str] = "sqlmodel"
    web_framework_choice: Optional[str] = "fastapi"
    use_alembic: bool = True

    def __post_init__(self) -> None:
        require_bool("orm", self.orm)
        require_bool("use_alembic", self.use_alembic)
        if self.orm:
            require_choice("orm_framework", self.orm_framework, ORM_FRAMEWORKS)
        if self.web_framework_choice is not None:
            require_choice(
                "web_framework_choice", self.web_framework_choice, WEB_FRAMEWORKS
            )

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any]) -> "PythonApiParams":
        return params_from_mapping(cls, data)

    @property
    def has_alembic(self) -> bool:
        return self.orm and self.use_alembic

    def condition_fields(self) -> Dict[str, Any]:
        return {
            "web_framework": self.web_framework_choice,
            "orm": self.orm,
            "orm_framework": self.orm_framework if self.orm else None,
        }


def derived_flags(params: PythonApiParams) -> Dict[str, bool]:
    has_web_framework = params.web_framework_choice is not None
    return {
        "web_framework": has_web_framework,
        "hasOrm": params.orm,
        "hasWebFramework": has_web_framework,
        "isFlask": params.web_framework_choice == "flask",
        "isFastApi": params.web_framework_choice == "fastapi",
        "hasSqlModel": params.orm and params.orm_framework == "sqlmodel",
        "hasAlembic": params.has_alembic,
    }


def manifest_rules(params: PythonApiParams) -> ManifestRules:
    """Requirement edits for the chosen ORM, migrations and web framework."""
    drop: List[str] = []
    if not params.orm:
        drop += ["sqlmodel", "sqlalchemy"]
    if not params.has_alembic:
        drop.append("alembic")

    replace: Dict[str, Tuple[str, ...]] = {}
    if params.web_framework_choice == "flask":
        replace["fastapi"] = (FLASK_REQUIREMENT,)
    elif params.web_framework_choice == "fastapi":
        replace["flask"] = FASTAPI_REQUIREMENTS
    return ManifestRules(drop=tuple(drop), replace=replace)


def pruned_paths(params: PythonApiParams) -> List[str]:
    paths: List[str] = []
    if not params.orm:
        paths += ["app/models", "app/db"]
    if not params.has_alembic:
        paths += ["alembic", "alembic.ini"]
    return paths


def update_project_name(project_name: str, target_dir: Path) -> None:
    """Write ``project_name`` into ``pyproject.toml`` and ``setup.py`` when present."""
    pyproject = target_dir / "pyproject.toml"
    if pyproject.is_file():
        try:
            with open(pyproject, "r", encoding="utf-8") as f:
                doc = tomlkit.load(f)
        except TOMLKitError as e:
            console.print(
                f"Could not parse pyproject.toml, project name not updated: {e}",
                style="yellow",
            )
        else:
            project = doc.get("project")
            if project is not None and "name" in project:
                project["name"] = project_name
                with open(pyproject, "w", encoding="utf-8") as f:
                    tomlkit.dump(doc, f)

    setup_py = target_dir / "setup.py"
    if setup_py.is_file():
        content = setup_py.read_text(encoding="utf-8")
        updated = SETUP_NAME_RE.sub(f'name="{project_name}"', content)
        if updated != content:
            setup_py.write_text(updated, encoding="utf-8")


def collect_parameters() -> PythonApiParams:
    orm = prompts.confirm("Use an ORM?", default=True)
    orm_framework = None
    use_alembic = False
    if orm:
        orm_framework = prompts.select(
            "ORM framework:", [("sqlmodel", "SQLModel")], default="sqlmodel"
        )

    web_framework_choice = None
    if prompts.confirm("Use a web framework?", default=True):
        web_framework_choice = prompts.select(
            "Web framework:",
            [("flask", "Flask"), ("fastapi", "FastAPI")],
            default="fastapi",
        )

    if orm:
        use_alembic = prompts.confirm(
            "Manage the database schema with Alembic?", default=True
        )
    return PythonApiParams(
        orm=orm,
        orm_framework=orm_framework,
        web_framework_choice=web_framework_choice,
        use_alembic=use_alembic,
    )


def build_plan(project_name: str, params: PythonApiParams) -> MaterializePlan:
    flags = derived_flags(params)
    return MaterializePlan(
        source=resolve_source(TEMPLATE_ID, params.condition_fields()),
        context=build_context(project_name, params, flags),
        flags={**boolean_flags(params), **flags},
        prune=tuple(pruned_paths(params)),
        manifest=manifest_rules(params),
        edits=(partial(update_project_name, project_name),),
    )


def materialize(
    target_dir: Path,
    project_name: str,
    params: PythonApiParams,
    ask_env: Optional[Callable[[EnvVarInfo], str]] = None,
) -> MaterializeReport:
    return execute_plan(target_dir, build_plan(project_name, params), ask_env)


TEMPLATE = Template(
    id=TEMPLATE_ID,
    name="Python API",
    description="Python API service with optional ORM and web framework",
    collect_parameters=collect_parameters,
    materialize=materialize,
    post_install_instructions="""\
  python -m venv venv              # create a virtual environment
  source venv/bin/activate         # activate it (Linux/macOS)
  venv\\Scripts\\activate            # activate it (Windows)
  pip install -r requirements.txt  # install dependencies
  python main.py                   # run the project""",
)
