"""Docker Compose stack template.

The services offered are whatever the template's ``docker-compose.yml``
defines, so parameter collection fetches the template once into a temporary
directory to read them.
"""

from __future__ import annotations

import tempfile
from dataclasses import dataclass
from functools import partial
from pathlib import Path
from typing import Any, Callable, Dict, Iterable, List, Mapping, Optional, Tuple

import yaml

from .. import prompts
from ..errors import InvalidParametersError, MissingTemplateFileError
from ..git import fetch_template
from ..utils import console
from .env_file import EnvVarInfo
from .pipeline import MaterializePlan, MaterializeReport, build_context, execute_plan
from .resolver import resolve_source
from .types import Template, params_from_mapping

TEMPLATE_ID = "docker-compose"
COMPOSE_FILE = "docker-compose.yml"


@dataclass(frozen=True)
class DockerComposeParams:
    selected_services: Tuple[str, ...] = ()

    def __post_init__(self) -> None:
        services = self.selected_services
        if not isinstance(services, (list, tuple)) or not all(
            isinstance(s, str) for s in services
        ):
            raise InvalidParametersError("selected_services must be a list of names")
        object.__setattr__(self, "selected_services", tuple(services))

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any]) -> "DockerComposeParams":
        return params_from_mapping(cls, data)


def load_compose(path: Path) -> Dict[str, Any]:
    """Load a compose file that must define at least one service."""
    if not path.is_file():
        raise MissingTemplateFileError(f"Template does not contain {COMPOSE_FILE}")
    try:
        with open(path, "r", encoding="utf-8") as f:
            compose = yaml.safe_load(f)
    except yaml.YAMLError as e:
        raise MissingTemplateFileError(f"Unable to parse {COMPOSE_FILE}: {e}") from e
    if not isinstance(compose, dict) or not isinstance(compose.get("services"), dict):
        raise MissingTemplateFileError(f"{COMPOSE_FILE} has no services mapping")
    if not compose["services"]:
        raise MissingTemplateFileError(f"{COMPOSE_FILE} does not define any services")
    return compose


def keep_services(compose: Dict[str, Any], selected: Iterable[str]) -> List[str]:
    """Drop every service of ``compose`` not in ``selected``; return the removed names."""
    keep = set(selected)
    services = compose["services"]
    removed = [name for name in services if name not in keep]
    for name in removed:
        del services[name]
    return removed


def filter_services(selected: Tuple[str, ...], target_dir: Path) -> None:
    compose_path = target_dir / COMPOSE_FILE
    if not compose_path.is_file():
        console.print(f"{COMPOSE_FILE} not found, skipping", style="yellow")
        return
    compose = load_compose(compose_path)
    keep_services(compose, selected)
    with open(compose_path, "w", encoding="utf-8") as f:
        yaml.safe_dump(compose, f, sort_keys=False, allow_unicode=True)
    console.print(
        f"Updated {COMPOSE_FILE}, keeping services: {', '.join(selected) or 'none'}"
    )


def available_services(source: str) -> List[str]:
    """Fetch ``source`` into a temporary directory and list its compose services."""
    with tempfile.TemporaryDirectory(prefix="mkproject-") as tmp:
        fetch_template(source, Path(tmp))
        compose = load_compose(Path(tmp) / COMPOSE_FILE)
    return list(compose["services"])


def collect_parameters() -> DockerComposeParams:
    services = available_services(resolve_source(TEMPLATE_ID, {}))
    selected = prompts.select_many(
        "Services to keep:", [(name, name) for name in services], default=True
    )
    return DockerComposeParams(selected_services=tuple(selected))


def materialize(
    target_dir: Path,
    project_name: str,
    params: DockerComposeParams,
    ask_env: Optional[Callable[[EnvVarInfo], str]] = None,
) -> MaterializeReport:
    plan = MaterializePlan(
        source=resolve_source(TEMPLATE_ID, {}),
        context=build_context(
            project_name, params, names={"selected_services": "selectedServices"}
        ),
        edits=(partial(filter_services, params.selected_services),),
    )
    return execute_plan(target_dir, plan, ask_env)


TEMPLATE = Template(
    id=TEMPLATE_ID,
    name="Docker Compose",
    description="Multi-container application defined with Docker Compose",
    collect_parameters=collect_parameters,
    materialize=materialize,
    post_install_instructions="""\
  docker-compose up -d  # start all services
  docker-compose ps     # show service status
  docker-compose logs   # show service logs
  docker-compose down   # stop and remove all services""",
)
