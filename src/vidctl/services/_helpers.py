"""Shared service-layer helper functions."""

from __future__ import annotations

from pathlib import Path
from typing import Any

from vidctl.infrastructure.errors import StorageError
from vidctl.services.result import ErrorCode, ServiceError, ServiceResult


def failure(op: str, code: ErrorCode, message: str, **detail: Any) -> ServiceResult:
    """Build a failed ServiceResult."""
    return ServiceResult(
        ok=False,
        op=op,
        error=ServiceError(code=code, message=message, detail=detail),
    )


def storage_failure(op: str, exc: StorageError, **detail: Any) -> ServiceResult:
    """Translate a storage exception into a failed ServiceResult.

    The error code follows the exception type; the path is always attached.
    """
    return failure(op, exc.code, str(exc), path=str(exc.path), **detail)


def relative_to(path: Path, root: Path) -> str:
    """*path* relative to *root* when possible, else the path as given.

    >>> relative_to(Path("/w/manuscript/a.yaml"), Path("/w"))
    'manuscript/a.yaml'
    """
    for candidate, base in ((path, root), (path.resolve(), root.resolve())):
        if candidate.is_relative_to(base):
            return str(candidate.relative_to(base))
    return str(path)


def blank(*values: str) -> bool:
    """True if any of *values* is empty or whitespace."""
    return any(not v or not v.strip() for v in values)
