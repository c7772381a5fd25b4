"""Storage exceptions raised by the document store and catalog index.

Every error carries the path it concerns so callers can surface it.
The service layer translates these into ``ServiceError`` codes.
"""

from __future__ import annotations

from pathlib import Path


class StorageError(Exception):
    """Base class for storage failures."""

    code = "IO_ERROR"

    def __init__(self, message: str, *, path: Path | str) -> None:
        super().__init__(message)
        self.path = Path(path)


class NotFoundError(StorageError):
    """No document or index exists at the path."""

    code = "NOT_FOUND"


class CorruptError(StorageError):
    """Stored bytes do not deserialize into a valid record."""

    code = "CORRUPT"


class StorageIOError(StorageError):
    """The file system rejected a read, write, move, or delete."""

    code = "IO_ERROR"
