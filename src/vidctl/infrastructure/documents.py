"""Document store: one YAML document per item.

Documents live at ``{content_root}/{category-dir}/{sanitized-name}.yaml``.
The auxiliary script shares the base path with a different extension.
"""

from __future__ import annotations

import logging
from pathlib import Path

from pydantic import ValidationError

from vidctl.domain.item import Item
from vidctl.domain.names import category_dir_name, sanitize_name
from vidctl.infrastructure.errors import CorruptError
from vidctl.infrastructure.filesystem import (
    atomic_write_text,
    dump_yaml,
    list_files,
    read_yaml,
    remove_file,
)

DOCUMENT_EXTENSION = "yaml"

logger = logging.getLogger(__name__)


class DocumentStore:
    """Reads and writes item documents below *content_root*."""

    def __init__(self, content_root: Path) -> None:
        self._root = content_root

    @property
    def root(self) -> Path:
        return self._root

    def category_dir(self, category: str) -> Path:
        """Directory holding the documents of *category*."""
        return self._root / category_dir_name(category)

    def resolve_path(self, name: str, category: str, ext: str = DOCUMENT_EXTENSION) -> Path:
        """Deterministic path for the (name, category) pair.

        Raises:
            ValueError: If the resolved path escapes the content root.
        """
        result = self.category_dir(category) / f"{sanitize_name(name)}.{ext}"
        if not result.resolve().is_relative_to(self._root.resolve()):
            msg = f"Path escapes content root: {result}"
            raise ValueError(msg)
        return result

    def exists(self, path: Path) -> bool:
        return path.is_file()

    def read(self, path: Path) -> Item:
        """Load the item stored at *path*.

        Raises:
            NotFoundError: No document at *path*.
            CorruptError: The document is not a valid item.
        """
        data = read_yaml(path)
        if not isinstance(data, dict):
            msg = f"Document at {path} is not a mapping"
            raise CorruptError(msg, path=path)
        try:
            item = Item.model_validate(dict(data))
        except ValidationError as exc:
            msg = f"Document at {path} is not a valid item: {exc.error_count()} error(s)"
            raise CorruptError(msg, path=path) from exc
        return item.model_copy(update={"path": str(path)})

    def write(self, item: Item, path: Path) -> None:
        """Overwrite the document at *path* with *item* (atomic)."""
        atomic_write_text(path, dump_yaml(item.model_dump(mode="json")))
        logger.debug("Wrote document %s", path)

    def remove(self, path: Path) -> None:
        """Delete the document at *path*; an absent document is not an error."""
        if remove_file(path):
            logger.debug("Removed document %s", path)

    def find_all(self) -> list[Path]:
        """Every document below the content root."""
        return list_files(self._root, f".{DOCUMENT_EXTENSION}")
