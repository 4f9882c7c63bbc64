"""Python web project template (ORM + web framework, optional Aliyun services)."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Any, Callable, Dict, List, Mapping, Optional

from .. import prompts
from .env_file import EnvVarInfo
from .pipeline import MaterializePlan, MaterializeReport, build_context, execute_plan
from .resolver import resolve_source
from .types import (
    Template,
    boolean_flags,
    params_from_mapping,
    require_bool,
    require_choice,
)

TEMPLATE_ID = "python-web"
ORM_FRAMEWORKS = ("sqlmodel",)
WEB_FRAMEWORKS = ("flask", "fastapi")

CLOUD_SERVICES = [
    ("include_ali_sms", "Aliyun SMS (AliSMS)"),
    ("include_ali_oss", "Aliyun Object Storage (AliOSS)"),
]

# parameter field -> key used by the template sources
CONTEXT_NAMES = {
    "include_ali_sms": "includeAliSms",
    "include_ali_oss": "includeAliOss",
}

# patch file -> parameter that gates it
PATCH_FLAGS = {
    "includeAliSms.patch": "include_ali_sms",
    "includeAliOss.patch": "include_ali_oss",
}


@dataclass(frozen=True)
class PythonWebParams:
    orm_framework: str = "sqlmodel"
    web_framework_choice: str = "fastapi"
    use_alembic: bool = True
    include_ali_sms: bool = False
    include_ali_oss: bool = False

    def __post_init__(self) -> None:
        require_choice("orm_framework", self.orm_framework, ORM_FRAMEWORKS)
        require_choice(
            "web_framework_choice", self.web_framework_choice, WEB_FRAMEWORKS
        )
        require_bool("use_alembic", self.use_alembic)
        require_bool("include_ali_sms", self.include_ali_sms)
        require_bool("include_ali_oss", self.include_ali_oss)

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any]) -> "PythonWebParams":
        return params_from_mapping(cls, data)

    def condition_fields(self) -> Dict[str, Any]:
        return {
            "web_framework": self.web_framework_choice,
            "orm": True,
            "orm_framework": self.orm_framework,
        }


def derived_flags(params: PythonWebParams) -> Dict[str, bool]:
    return {
        "hasOrm": True,
        "hasWebFramework": True,
        "isFlask": params.web_framework_choice == "flask",
        "isFastApi": params.web_framework_choice == "fastapi",
        "hasSqlModel": params.orm_framework == "sqlmodel",
        "hasAlembic": params.use_alembic,
        "hasAliSms": params.include_ali_sms,
        "hasAliOss": params.include_ali_oss,
    }


def pruned_paths(params: PythonWebParams) -> List[str]:
    paths: List[str] = []
    if not params.use_alembic:
        paths += ["alembic", "alembic.ini"]
    if not params.include_ali_sms:
        paths.append("app/services/ali_sms")
    if not params.include_ali_oss:
        paths.append("app/services/ali_oss")
    return paths


def collect_parameters() -> PythonWebParams:
    orm_framework = prompts.select(
        "ORM framework:", [("sqlmodel", "SQLModel")], default="sqlmodel"
    )
    web_framework_choice = prompts.select(
        "Web framework:", [("flask", "Flask"), ("fastapi", "FastAPI")], default="fastapi"
    )
    use_alembic = prompts.confirm(
        "Manage the database schema with Alembic?", default=True
    )
    services = prompts.select_many("Cloud services to include:", CLOUD_SERVICES)
    return PythonWebParams(
        orm_framework=orm_framework,
        web_framework_choice=web_framework_choice,
        use_alembic=use_alembic,
        include_ali_sms="include_ali_sms" in services,
        include_ali_oss="include_ali_oss" in services,
    )


def build_plan(project_name: str, params: PythonWebParams) -> MaterializePlan:
    flags = derived_flags(params)
    return MaterializePlan(
        source=resolve_source(TEMPLATE_ID, params.condition_fields()),
        context=build_context(project_name, params, flags, CONTEXT_NAMES),
        flags={**boolean_flags(params), **flags},
        patch_flags=PATCH_FLAGS,
        prune=tuple(pruned_paths(params)),
    )


def materialize(
    target_dir: Path,
    project_name: str,
    params: PythonWebParams,
    ask_env: Optional[Callable[[EnvVarInfo], str]] = None,
) -> MaterializeReport:
    return execute_plan(target_dir, build_plan(project_name, params), ask_env)


TEMPLATE = Template(
    id=TEMPLATE_ID,
    name="Python Web",
    description="Python web application with an ORM and optional cloud services",
    collect_parameters=collect_parameters,
    materialize=materialize,
    post_install_instructions="""\
  python -m venv venv              # create a virtual environment
  source venv/bin/activate         # activate it (Linux/macOS)
  venv\\Scripts\\activate            # activate it (Windows)
  pip install -r requirements.txt  # install dependencies
  python main.py                   # run the project""",
)
