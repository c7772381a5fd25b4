"""Shared pytest fixtures and test helpers for vidctl tests."""

from __future__ import annotations

import os
from collections.abc import Generator
from pathlib import Path
from typing import Any

import pytest
from click.testing import CliRunner

from vidctl.config.settings import VidSettings
from vidctl.infrastructure.workspace import Workspace
from vidctl.plugins.manager import PluginManager


@pytest.fixture(autouse=True)
def _clean_env(monkeypatch: pytest.MonkeyPatch) -> None:
    """Keep a developer's VIDCTL_* environment out of the tests."""
    for key in list(os.environ):
        if key.startswith("VIDCTL_"):
            monkeypatch.delenv(key)


@pytest.fixture(autouse=True)
def _reset_telemetry() -> Generator[None]:
    """CLI runs with -v switch telemetry on for the whole thread; switch it back off."""
    yield
    from vidctl.services.telemetry import disable_telemetry

    disable_telemetry()


@pytest.fixture
def cli_runner() -> CliRunner:
    """Provide a Click CLI test runner."""
    return CliRunner()


@pytest.fixture
def workspace_root(tmp_path: Path) -> Path:
    """Temporary workspace directory with an empty content root.

    This is the single source of truth for the workspace layout.
    """
    (tmp_path / "manuscript").mkdir()
    return tmp_path


@pytest.fixture
def workspace(workspace_root: Path) -> Workspace:
    """Workspace on a temp directory with no plugins loaded."""
    settings = VidSettings.from_cli(workspace_root=workspace_root)
    ws = Workspace(settings)
    ws.use_plugins(PluginManager())
    return ws


@pytest.fixture
def _isolated_workspace(workspace_root: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    """Change CWD to a temp workspace root so the CLI operates in isolation.

    Use via ``@pytest.mark.usefixtures("_isolated_workspace")`` on command
    test classes.
    """
    monkeypatch.chdir(workspace_root)


# ---------------------------------------------------------------------------
# Shared test helpers
# ---------------------------------------------------------------------------


def create_item(workspace: Workspace, name: str, category: str) -> dict[str, Any]:
    """Create an item via CatalogService, asserting success."""
    from vidctl.services.catalog import CatalogService

    result = CatalogService(workspace).create(name, category)
    assert result.ok, result.error
    return result.data


def set_fields(workspace: Workspace, name: str, category: str, **changes: str) -> None:
    """Apply field changes via CatalogService, asserting success."""
    from vidctl.services.catalog import CatalogService

    result = CatalogService(workspace).set_fields(name, category, changes)
    assert result.ok, result.error


DONE = {"completed": 1, "total": 1}


def write_document(workspace: Workspace, name: str, category: str, **fields: Any) -> Path:
    """Write a raw document for (name, category) and return its path."""
    from vidctl.infrastructure.filesystem import atomic_write_text, dump_yaml

    path = workspace.documents.resolve_path(name, category)
    atomic_write_text(path, dump_yaml({"name": name, "category": category, **fields}))
    return path
