"""Tests for starter script rendering."""

from __future__ import annotations

from pathlib import Path

from vidctl.infrastructure.templates import render_starter_script


class TestRenderStarterScript:
    def test_packaged_template(self) -> None:
        text = render_starter_script("Argo CD", "Development")
        assert text.startswith("# Argo CD")
        assert "FIXME:" in text

    def test_workspace_override(self, tmp_path: Path) -> None:
        override = tmp_path / ".vidctl" / "templates" / "script"
        override.mkdir(parents=True)
        (override / "script.md.j2").write_text("{{ category }}: {{ name }}\n")
        text = render_starter_script("Argo CD", "Development", workspace_root=tmp_path)
        assert text == "Development: Argo CD\n"

    def test_flat_override(self, tmp_path: Path) -> None:
        override = tmp_path / ".vidctl" / "templates"
        override.mkdir(parents=True)
        (override / "script.md.j2").write_text("flat {{ name }}\n")
        assert render_starter_script("v", "c", workspace_root=tmp_path) == "flat v\n"

    def test_missing_override_falls_back(self, tmp_path: Path) -> None:
        text = render_starter_script("v", "c", workspace_root=tmp_path)
        assert text.startswith("# v")
