"""Tests for the catalog index file."""

from __future__ import annotations

from pathlib import Path

import pytest

from vidctl.domain.item import IndexEntry
from vidctl.infrastructure.errors import CorruptError, NotFoundError
from vidctl.infrastructure.index import CatalogIndex


@pytest.fixture
def index(tmp_path: Path) -> CatalogIndex:
    return CatalogIndex(tmp_path / "index.yaml")


class TestCatalogIndex:
    def test_save_and_load_preserves_order(self, index: CatalogIndex) -> None:
        entries = [
            IndexEntry(name="b", category="x"),
            IndexEntry(name="a", category="y"),
        ]
        index.save(entries)
        assert index.load() == entries

    def test_file_format(self, index: CatalogIndex) -> None:
        index.save([IndexEntry(name="v", category="Dev")])
        assert index.path.read_text(encoding="utf-8") == "- name: v\n  category: Dev\n"

    def test_missing_file(self, index: CatalogIndex) -> None:
        with pytest.raises(NotFoundError):
            index.load()

    def test_missing_file_is_empty(self, index: CatalogIndex) -> None:
        assert index.load_or_empty() == []

    def test_empty_file(self, index: CatalogIndex) -> None:
        index.path.write_text("", encoding="utf-8")
        assert index.load() == []

    def test_not_a_list(self, index: CatalogIndex) -> None:
        index.path.write_text("name: v\n", encoding="utf-8")
        with pytest.raises(CorruptError):
            index.load_or_empty()

    def test_bad_row(self, index: CatalogIndex) -> None:
        index.path.write_text("- name: v\n- just a string\n", encoding="utf-8")
        with pytest.raises(CorruptError):
            index.load()

    def test_invalid_yaml(self, index: CatalogIndex) -> None:
        index.path.write_text("- [unclosed\n", encoding="utf-8")
        with pytest.raises(CorruptError):
            index.load_or_empty()
