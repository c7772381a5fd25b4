"""Timing spans for ``--verbose`` runs.

Telemetry is off unless :func:`enable_telemetry` is called. While it is
on, each :func:`traced` service call opens a :class:`Span`; calls made
inside it (other traced methods, :func:`trace_span` blocks) hang off it
as children. The outermost call attaches the finished tree to its
result as ``meta["telemetry"]``.
"""

from __future__ import annotations

import functools
import time
from collections.abc import Callable, Generator
from contextlib import contextmanager
from contextvars import ContextVar
from dataclasses import dataclass, field
from typing import Any, ParamSpec, TypeVar

import structlog

from vidctl.services.result import ServiceResult

_enabled: ContextVar[bool] = ContextVar("_telemetry_enabled", default=False)
_current_span: ContextVar[Span | None] = ContextVar("_current_span", default=None)

log = structlog.get_logger("vidctl.telemetry")

_P = ParamSpec("_P")
_R = TypeVar("_R")


@dataclass
class Span:
    name: str
    children: list[Span] = field(default_factory=list)
    annotations: dict[str, Any] = field(default_factory=dict)
    # "ok", "failed" (ServiceResult with ok=False) or "raised"; None for plain blocks.
    outcome: str | None = None
    start_time: float = field(default_factory=time.perf_counter)
    end_time: float | None = None

    @property
    def duration_ms(self) -> float:
        if self.end_time is None:
            return 0.0
        return (self.end_time - self.start_time) * 1000

    def annotate(self, key: str, value: Any) -> None:
        self.annotations[key] = value

    def end(self) -> None:
        self.end_time = time.perf_counter()

    def to_dict(self) -> dict[str, Any]:
        data: dict[str, Any] = {"name": self.name, "duration_ms": round(self.duration_ms, 2)}
        if self.outcome is not None:
            data["outcome"] = self.outcome
        if self.annotations:
            data["annotations"] = dict(self.annotations)
        if self.children:
            data["children"] = [child.to_dict() for child in self.children]
        return data


@contextmanager
def _open_span(name: str, parent: Span | None) -> Generator[Span]:
    span = Span(name=name)
    if parent is not None:
        parent.children.append(span)
    token = _current_span.set(span)
    try:
        yield span
    except BaseException:
        span.outcome = "raised"
        raise
    finally:
        span.end()
        _current_span.reset(token)
        log.debug(
            "span.complete",
            span_name=span.name,
            duration_ms=round(span.duration_ms, 2),
            outcome=span.outcome,
            nested=parent is not None,
        )


@contextmanager
def trace_span(name: str) -> Generator[Span | None]:
    """Time a block as a child of the running traced call.

    Yields None when telemetry is off or no traced call is running, so
    callers guard annotations with ``if span is not None``.
    """
    parent = _current_span.get() if _enabled.get() else None
    if parent is None:
        yield None
        return
    with _open_span(name, parent) as span:
        yield span


def traced(func: Callable[_P, _R]) -> Callable[_P, _R]:  # noqa: UP047
    """Record a service method in the span tree.

    A failed :class:`ServiceResult` marks the span ``failed`` and
    annotates it with the error code.
    """

    @functools.wraps(func)
    def wrapper(*args: _P.args, **kwargs: _P.kwargs) -> _R:
        if not _enabled.get():
            return func(*args, **kwargs)

        parent = _current_span.get()
        with _open_span(func.__qualname__, parent) as span:
            result = func(*args, **kwargs)
            if isinstance(result, ServiceResult):
                span.outcome = "ok" if result.ok else "failed"
                if result.error is not None:
                    span.annotate("error", result.error.code)

        if parent is None and isinstance(result, ServiceResult):
            meta = {**(result.meta or {}), "telemetry": span.to_dict()}
            return result.model_copy(update={"meta": meta})  # type: ignore[return-value]
        return result

    return wrapper


def enable_telemetry() -> None:
    _enabled.set(True)


def disable_telemetry() -> None:
    _enabled.set(False)
