"""Catalog index: ordered list of (name, category) pairs, read and written whole.

There is no per-entry API. Callers load the list, change it in memory,
and save the full list back.
"""

from __future__ import annotations

import logging
from pathlib import Path

from pydantic import ValidationError

from vidctl.domain.item import IndexEntry
from vidctl.infrastructure.errors import CorruptError, NotFoundError
from vidctl.infrastructure.filesystem import atomic_write_text, dump_yaml, read_yaml

logger = logging.getLogger(__name__)


class CatalogIndex:
    """The index file at *path*."""

    def __init__(self, path: Path) -> None:
        self._path = path

    @property
    def path(self) -> Path:
        return self._path

    def load(self) -> list[IndexEntry]:
        """Read every entry in file order.

        Raises:
            NotFoundError: The index file does not exist.
            CorruptError: The file is not a list of name/category mappings.
        """
        data = read_yaml(self._path)
        if data is None:
            return []
        if not isinstance(data, list):
            msg = f"Index at {self._path} is not a list"
            raise CorruptError(msg, path=self._path)
        try:
            return [IndexEntry.model_validate(dict(row)) for row in data]
        except (TypeError, ValueError, ValidationError) as exc:
            msg = f"Index at {self._path} has an invalid entry: {exc}"
            raise CorruptError(msg, path=self._path) from exc

    def load_or_empty(self) -> list[IndexEntry]:
        """Like :meth:`load`, but a missing index file is an empty catalog."""
        try:
            return self.load()
        except NotFoundError:
            logger.debug("No index at %s, starting empty", self._path)
            return []

    def save(self, entries: list[IndexEntry]) -> None:
        """Overwrite the index with *entries* (atomic)."""
        rows = [entry.model_dump() for entry in entries]
        atomic_write_text(self._path, dump_yaml(rows))
        logger.debug("Saved index with %d entries", len(rows))
