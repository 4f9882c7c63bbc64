"""The template capability contract and parameter helpers."""

from __future__ import annotations

import dataclasses
from dataclasses import dataclass
from typing import Any, Callable, Dict, Mapping, Optional, Tuple, Type, TypeVar

from ..errors import InvalidParametersError

P = TypeVar("P")


@dataclass(frozen=True)
class Template:
    """A project archetype.

    ``collect_parameters`` asks the user for the template's options and returns
    its validated parameter record. ``materialize`` turns that record into a
    finished project inside an existing, empty target directory:
    ``materialize(target_dir, project_name, params)``.
    """

    id: str
    name: str
    description: str
    collect_parameters: Callable[[], Any]
    materialize: Callable[..., Any]
    post_install_instructions: Optional[str] = None


def params_from_mapping(cls: Type[P], data: Mapping[str, Any]) -> P:
    """Build the parameter dataclass ``cls`` from a plain mapping.

    Unknown keys are rejected; omitted keys take the dataclass defaults.
    """
    known = {f.name for f in dataclasses.fields(cls)}  # type: ignore[arg-type]
    unknown = sorted(set(data) - known)
    if unknown:
        raise InvalidParametersError(f"Unknown parameters: {', '.join(unknown)}")
    return cls(**data)


def require_choice(name: str, value: Any, allowed: Tuple[str, ...]) -> None:
    if value not in allowed:
        raise InvalidParametersError(
            f"{name} must be one of {', '.join(allowed)}, got {value!r}"
        )


def require_bool(name: str, value: Any) -> None:
    if not isinstance(value, bool):
        raise InvalidParametersError(f"{name} must be true or false, got {value!r}")


def boolean_flags(params: Any) -> Dict[str, bool]:
    """Return the boolean fields of a parameter dataclass."""
    return {
        key: value
        for key, value in dataclasses.asdict(params).items()
        if isinstance(value, bool)
    }
