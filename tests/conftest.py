"""Shared fixtures for the mkproject test suite."""

from __future__ import annotations

from pathlib import Path
from typing import Callable, Dict, Iterator

import pytest
import yaml

import mkproject.config.conditions as conditions_mod
from mkproject.config import TEMPLATES_FILE_ENV


def write_files(root: Path, files: Dict[str, str]) -> Path:
    for rel, content in files.items():
        path = root / rel
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(content, encoding="utf-8")
    return root


@pytest.fixture
def make_tree(tmp_path: Path) -> Callable[[str, Dict[str, str]], Path]:
    """Create a directory under tmp_path holding ``files`` (relative path -> text)."""

    def _make(name: str, files: Dict[str, str]) -> Path:
        root = tmp_path / name
        root.mkdir(parents=True, exist_ok=True)
        return write_files(root, files)

    return _make


@pytest.fixture
def templates_table(
    tmp_path: Path, monkeypatch: pytest.MonkeyPatch
) -> Iterator[Callable[[Dict[str, object]], Path]]:
    """Point the condition table at a temporary YAML file built from a dict."""

    def _write(templates: Dict[str, object]) -> Path:
        path = tmp_path / "templates.yml"
        path.write_text(yaml.safe_dump({"templates": templates}), encoding="utf-8")
        monkeypatch.setenv(TEMPLATES_FILE_ENV, str(path))
        conditions_mod.get_condition_table.cache_clear()
        return path

    yield _write
    conditions_mod.get_condition_table.cache_clear()
