"""Tests for the single-item CLI commands."""

from __future__ import annotations

import json
from pathlib import Path

import pytest
from click.testing import CliRunner

from vidctl.cli import cli


def _json(runner: CliRunner, *args: str) -> dict:
    result = runner.invoke(cli, ["--json", *args])
    return json.loads(result.output)


@pytest.mark.usefixtures("_isolated_workspace")
class TestCreateCommand:
    def test_create(self, cli_runner: CliRunner, workspace_root: Path) -> None:
        result = cli_runner.invoke(cli, ["--json", "create", "My Video", "Development"])
        assert result.exit_code == 0
        data = json.loads(result.output)
        assert data["ok"] is True
        assert data["data"]["phase"] == "ideas"
        assert (workspace_root / "manuscript" / "development" / "my-video.yaml").is_file()
        assert (workspace_root / "index.yaml").is_file()

    def test_create_rich_output(self, cli_runner: CliRunner) -> None:
        result = cli_runner.invoke(cli, ["create", "v", "dev"])
        assert result.exit_code == 0
        assert "OK" in result.output
        assert "manuscript/dev/v.yaml" in result.output

    def test_create_twice_warns(self, cli_runner: CliRunner) -> None:
        cli_runner.invoke(cli, ["create", "v", "dev"])
        result = cli_runner.invoke(cli, ["create", "v", "dev"])
        assert result.exit_code == 0
        assert "WARNING" in result.stderr

    def test_blank_name_fails(self, cli_runner: CliRunner) -> None:
        result = cli_runner.invoke(cli, ["create", "", "dev"])
        assert result.exit_code == 1
        assert "INVALID_ARGUMENT" in result.stderr


@pytest.mark.usefixtures("_isolated_workspace")
class TestShowCommand:
    def test_show(self, cli_runner: CliRunner) -> None:
        cli_runner.invoke(cli, ["create", "v", "dev"])
        result = cli_runner.invoke(cli, ["show", "v", "dev"])
        assert result.exit_code == 0
        assert "dev / v" in result.output
        assert "Ideas" in result.output

    def test_show_missing(self, cli_runner: CliRunner) -> None:
        result = cli_runner.invoke(cli, ["show", "v", "dev"])
        assert result.exit_code == 1
        assert "NOT_FOUND" in result.stderr

    def test_show_json(self, cli_runner: CliRunner) -> None:
        cli_runner.invoke(cli, ["create", "v", "dev"])
        data = _json(cli_runner, "show", "v", "dev")
        assert data["data"]["item"]["name"] == "v"
        assert data["data"]["path"] == "manuscript/dev/v.yaml"


@pytest.mark.usefixtures("_isolated_workspace")
class TestUpdateCommand:
    def test_update_fields(self, cli_runner: CliRunner) -> None:
        cli_runner.invoke(cli, ["create", "v", "dev"])
        args = ["update", "v", "dev", "--set", "title=Argo CD", "--set", "initiation.done=true"]
        result = cli_runner.invoke(cli, ["--json", *args])
        assert result.exit_code == 0
        data = json.loads(result.output)
        assert data["data"]["item"]["title"] == "Argo CD"
        assert data["data"]["phase"] == "started"

    def test_update_requires_changes(self, cli_runner: CliRunner) -> None:
        cli_runner.invoke(cli, ["create", "v", "dev"])
        result = cli_runner.invoke(cli, ["update", "v", "dev"])
        assert result.exit_code == 1
        assert "No changes" in result.stderr

    def test_update_bad_assignment(self, cli_runner: CliRunner) -> None:
        result = cli_runner.invoke(cli, ["update", "v", "dev", "--set", "title"])
        assert result.exit_code == 2
        assert "KEY=VALUE" in result.output

    def test_update_unknown_field(self, cli_runner: CliRunner) -> None:
        cli_runner.invoke(cli, ["create", "v", "dev"])
        result = cli_runner.invoke(cli, ["update", "v", "dev", "--set", "bogus=1"])
        assert result.exit_code == 1
        assert "Unknown field" in result.stderr


@pytest.mark.usefixtures("_isolated_workspace")
class TestRefreshCommand:
    def test_refresh(self, cli_runner: CliRunner) -> None:
        cli_runner.invoke(cli, ["create", "v", "dev"])
        data = _json(cli_runner, "refresh", "v", "dev")
        assert data["ok"] is True
        assert data["data"]["stages"]["initiation"]["total"] == 8


@pytest.mark.usefixtures("_isolated_workspace")
class TestDeleteCommand:
    def test_delete_with_yes(self, cli_runner: CliRunner, workspace_root: Path) -> None:
        cli_runner.invoke(cli, ["create", "v", "dev"])
        result = cli_runner.invoke(cli, ["delete", "v", "dev", "--yes"])
        assert result.exit_code == 0
        assert not (workspace_root / "manuscript" / "dev" / "v.yaml").exists()

    def test_delete_confirm_declined(self, cli_runner: CliRunner, workspace_root: Path) -> None:
        cli_runner.invoke(cli, ["create", "v", "dev"])
        result = cli_runner.invoke(cli, ["delete", "v", "dev"], input="n\n")
        assert result.exit_code == 1
        assert (workspace_root / "manuscript" / "dev" / "v.yaml").exists()

    def test_delete_confirm_accepted(self, cli_runner: CliRunner) -> None:
        cli_runner.invoke(cli, ["create", "v", "dev"])
        result = cli_runner.invoke(cli, ["delete", "v", "dev"], input="y\n")
        assert result.exit_code == 0


@pytest.mark.usefixtures("_isolated_workspace")
class TestMoveCommand:
    def test_move(self, cli_runner: CliRunner, workspace_root: Path) -> None:
        cli_runner.invoke(cli, ["create", "v", "dev"])
        data = _json(cli_runner, "move", "v", "dev", "tools")
        assert data["ok"] is True
        assert data["data"]["category"] == "tools"
        assert (workspace_root / "manuscript" / "tools" / "v.md").is_file()

    def test_move_missing(self, cli_runner: CliRunner) -> None:
        result = cli_runner.invoke(cli, ["move", "v", "dev", "tools"])
        assert result.exit_code == 1
        assert "NOT_FOUND" in result.stderr


@pytest.mark.usefixtures("_isolated_workspace")
class TestDispatchCommands:
    def test_notify_without_plugin(self, cli_runner: CliRunner) -> None:
        cli_runner.invoke(cli, ["create", "v", "dev"])
        result = cli_runner.invoke(cli, ["notify", "v", "dev", "slack"])
        assert result.exit_code == 1
        assert "NO_HANDLER" in result.stderr

    def test_upload_with_local_plugin(self, cli_runner: CliRunner, workspace_root: Path) -> None:
        plugin_dir = workspace_root / ".vidctl" / "plugins"
        plugin_dir.mkdir(parents=True)
        (plugin_dir / "fake_upload.py").write_text(
            "import pluggy\n\n"
            'hookimpl = pluggy.HookimplMarker("vidctl")\n\n\n'
            "class FakeUpload:\n"
            "    @hookimpl\n"
            "    def upload(self, item):\n"
            '        return "vid-" + item.name\n',
            encoding="utf-8",
        )
        cli_runner.invoke(cli, ["create", "v", "dev"])
        data = _json(cli_runner, "upload", "v", "dev")
        assert data["ok"] is True
        assert data["data"]["video_id"] == "vid-v"
        shown = _json(cli_runner, "show", "v", "dev")
        assert shown["data"]["item"]["video_id"] == "vid-v"
