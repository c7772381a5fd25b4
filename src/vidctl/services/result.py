"""The value every service operation hands back to its caller.

Services never raise for expected failures (bad input, missing items,
unreadable documents, plugin refusals). They return a ``ServiceResult``
with ``ok=False`` and a :class:`ServiceError` whose ``code`` says which
kind of failure it was, so the CLI can render it and choose an exit code.
"""

from __future__ import annotations

from typing import Any, Literal

from pydantic import BaseModel, Field

ErrorCode = Literal[
    "INVALID_ARGUMENT",  # blank name/category, unknown field or channel
    "NOT_FOUND",  # the addressed document does not exist
    "CORRUPT",  # a document or the index cannot be parsed
    "IO_ERROR",  # the filesystem refused a read or write
    "PARTIAL_FAILURE",  # a multi-file change stopped halfway
    "NO_HANDLER",  # no plugin implements the requested hook
    "DISPATCH_FAILED",  # a plugin raised or rejected the item
]


class ServiceError(BaseModel):
    """Why an operation failed. ``detail`` usually carries the ``path``."""

    model_config = {"frozen": True}

    code: ErrorCode
    message: str
    detail: dict[str, Any] = Field(default_factory=dict)


class ServiceResult(BaseModel):
    """Outcome of one service operation.

    Attributes:
        ok: Whether the operation succeeded.
        op: Operation name (``"create"``, ``"list_by_phase"``, ...). Output
            renderers are chosen by it.
        data: Operation payload; items are returned as ``Item`` models.
        warnings: Non-fatal problems, e.g. a lifecycle hook that raised.
        error: Set exactly when ``ok`` is False.
        meta: Extra information such as the telemetry span tree.
    """

    model_config = {"frozen": True}

    ok: bool
    op: str
    data: dict[str, Any] = Field(default_factory=dict)
    warnings: list[str] = Field(default_factory=list)
    error: ServiceError | None = None
    meta: dict[str, Any] | None = None

    def as_op(self, op: str) -> ServiceResult:
        """The same outcome reported under another operation name.

        Used when one operation delegates to another, e.g. ``notify``
        failing because the underlying ``get`` did.
        """
        return self.model_copy(update={"op": op})
