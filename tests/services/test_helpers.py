"""Tests for shared service helpers."""

from __future__ import annotations

from pathlib import Path

from vidctl.infrastructure.errors import CorruptError, NotFoundError
from vidctl.services._helpers import blank, failure, relative_to, storage_failure


class TestFailure:
    def test_builds_error(self) -> None:
        result = failure("get", "NOT_FOUND", "gone", path="/x")
        assert result.ok is False
        assert result.op == "get"
        assert result.error is not None
        assert result.error.code == "NOT_FOUND"
        assert result.error.detail == {"path": "/x"}

    def test_storage_failure_uses_exception_code(self) -> None:
        result = storage_failure("get", CorruptError("bad yaml", path="/w/v.yaml"))
        assert result.error is not None
        assert result.error.code == "CORRUPT"
        assert result.error.message == "bad yaml"
        assert result.error.detail["path"] == str(Path("/w/v.yaml"))

    def test_storage_failure_not_found(self) -> None:
        result = storage_failure("move", NotFoundError("missing", path="/w/v.yaml"))
        assert result.error is not None
        assert result.error.code == "NOT_FOUND"


class TestRelativeTo:
    def test_inside_root(self, tmp_path: Path) -> None:
        assert relative_to(tmp_path / "a" / "b.yaml", tmp_path) == str(Path("a/b.yaml"))

    def test_outside_root(self, tmp_path: Path) -> None:
        other = tmp_path.parent / "elsewhere.yaml"
        assert relative_to(other, tmp_path / "root") == str(other)


class TestBlank:
    def test_blank(self) -> None:
        assert blank("", "x")
        assert blank("x", "  ")
        assert not blank("x", "y")
