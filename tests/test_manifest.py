from __future__ import annotations

from pathlib import Path

import pytest

from mkproject.errors import MissingTemplateFileError
from mkproject.templates.manifest import ManifestRules, edit_lines, edit_manifest
from mkproject.templates.python_api import PythonApiParams, manifest_rules


def test_flask_without_orm(tmp_path: Path) -> None:
    manifest = tmp_path / "requirements.txt"
    manifest.write_text("fastapi==x\nsqlalchemy==y")
    params = PythonApiParams(orm=False, web_framework_choice="flask")

    assert edit_manifest(manifest, manifest_rules(params)) is True

    lines = manifest.read_text().split("\n")
    assert "flask==2.3.3" in lines
    assert not any("sqlalchemy" in line for line in lines)
    assert not any("fastapi" in line for line in lines)


def test_fastapi_replaces_flask_with_two_pins() -> None:
    rules = manifest_rules(PythonApiParams(web_framework_choice="fastapi"))
    assert edit_lines(["flask>=2", "sqlmodel==0.0.8", "alembic==1.12"], rules) == [
        "fastapi==0.103.1",
        "uvicorn==0.23.2",
        "sqlmodel==0.0.8",
        "alembic==1.12",
    ]


def test_alembic_dropped_when_disabled() -> None:
    rules = manifest_rules(PythonApiParams(use_alembic=False))
    assert edit_lines(["alembic==1.12", "sqlmodel"], rules) == ["sqlmodel"]


def test_no_web_framework_leaves_framework_lines() -> None:
    rules = manifest_rules(PythonApiParams(web_framework_choice=None))
    assert edit_lines(["flask==2.0", "fastapi==0.1"], rules) == [
        "flask==2.0",
        "fastapi==0.1",
    ]


def test_unmatched_lines_keep_their_order() -> None:
    rules = ManifestRules(drop=("sqlalchemy",), replace={"flask": ("fastapi",)})
    lines = ["# deps", "requests==2.31", "sqlalchemy", "", "pydantic", "flask"]
    assert edit_lines(lines, rules) == [
        "# deps",
        "requests==2.31",
        "",
        "pydantic",
        "fastapi",
    ]


def test_unchanged_manifest_is_not_rewritten(tmp_path: Path) -> None:
    manifest = tmp_path / "requirements.txt"
    manifest.write_bytes(b"requests\r\npydantic\r\n")
    edit_manifest(manifest, ManifestRules(drop=("sqlalchemy",)))
    assert manifest.read_bytes() == b"requests\r\npydantic\r\n"


def test_absent_manifest(tmp_path: Path) -> None:
    assert edit_manifest(tmp_path / "requirements.txt", ManifestRules()) is False
    with pytest.raises(MissingTemplateFileError):
        edit_manifest(tmp_path / "requirements.txt", ManifestRules(), required=True)


def test_crlf_manifest_keeps_its_line_endings(tmp_path: Path) -> None:
    manifest = tmp_path / "requirements.txt"
    manifest.write_bytes(b"fastapi==0.100.0\r\nsqlalchemy==2.0\r\nrequests==2.31\r\n")
    params = PythonApiParams(orm=False, web_framework_choice="flask")

    edit_manifest(manifest, manifest_rules(params))

    assert manifest.read_bytes() == b"flask==2.3.3\r\nrequests==2.31\r\n"
