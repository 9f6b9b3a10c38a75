"""Decode telemetry — timing spans for ``--verbose`` runs.

Spans are recorded only while telemetry is enabled *and* a root span opened
by :func:`traced` is active; otherwise every helper costs one ContextVar
lookup.  The finished tree is attached to ``ServiceResult.meta["telemetry"]``::

    DecodeService.decode_file   3.10ms  ok=True
      read                      0.08ms  bytes=1843
      unmarshal                 2.95ms  schema=Page
"""

from __future__ import annotations

import functools
import time
from collections.abc import Callable, Generator, Iterator
from contextlib import contextmanager
from contextvars import ContextVar
from dataclasses import dataclass, field
from typing import Any, ParamSpec, TypeVar

import structlog

from soupdecode.services.result import ServiceResult

log = structlog.get_logger("soupdecode.telemetry")

_enabled: ContextVar[bool] = ContextVar("soupdecode_telemetry", default=False)
_active: ContextVar[Span | None] = ContextVar("soupdecode_active_span", default=None)


@dataclass
class Span:
    """One timed step of a service call, with nested sub-steps."""

    name: str
    annotations: dict[str, Any] = field(default_factory=dict)
    children: list[Span] = field(default_factory=list)
    started: float = field(default_factory=time.perf_counter)
    finished: float | None = None

    @property
    def duration_ms(self) -> float:
        if self.finished is None:
            return 0.0
        return (self.finished - self.started) * 1000

    def end(self) -> None:
        self.finished = time.perf_counter()

    def annotate(self, key: str, value: Any) -> None:
        self.annotations[key] = value

    def child(self, name: str, **annotations: Any) -> Span:
        """Open a sub-step under this span."""
        span = Span(name=name, annotations=dict(annotations))
        self.children.append(span)
        return span

    def walk(self) -> Iterator[Span]:
        """This span and all descendants, depth-first."""
        yield self
        for span in self.children:
            yield from span.walk()

    def to_dict(self) -> dict[str, Any]:
        data: dict[str, Any] = {"name": self.name, "duration_ms": round(self.duration_ms, 2)}
        if self.annotations:
            data["annotations"] = dict(self.annotations)
        if self.children:
            data["children"] = [span.to_dict() for span in self.children]
        return data


def active_span() -> Span | None:
    """The innermost open span, or None when nothing is being recorded."""
    return _active.get() if _enabled.get() else None


@contextmanager
def trace_span(name: str, **annotations: Any) -> Generator[Span | None]:
    """Time a sub-step of the active span.

    Yields None when telemetry is off or no root span is open, so callers
    guard annotations with ``if span:``.
    """
    parent = active_span()
    if parent is None:
        yield None
        return

    span = parent.child(name, **annotations)
    token = _active.set(span)
    try:
        yield span
    finally:
        span.end()
        _active.reset(token)


_P = ParamSpec("_P")
_R = TypeVar("_R")


def traced(func: Callable[_P, _R]) -> Callable[_P, _R]:
    """Open a root span around a service method.

    When the method returns a :class:`ServiceResult`, the span tree is
    merged into a copy of its ``meta`` (results are frozen).
    """

    @functools.wraps(func)
    def wrapper(*args: _P.args, **kwargs: _P.kwargs) -> _R:
        if not _enabled.get():
            return func(*args, **kwargs)

        root = Span(name=func.__qualname__)
        token = _active.set(root)
        try:
            result = func(*args, **kwargs)
        finally:
            root.end()
            _active.reset(token)

        if isinstance(result, ServiceResult):
            root.annotate("ok", result.ok)
            result = result.with_meta(telemetry=root.to_dict())  # type: ignore[assignment]
        log.debug(
            "span.complete",
            span_name=root.name,
            duration_ms=round(root.duration_ms, 2),
            spans=sum(1 for _ in root.walk()),
        )
        return result

    return wrapper


def enable_telemetry() -> None:
    """Start recording spans (``--verbose``)."""
    _enabled.set(True)


def disable_telemetry() -> None:
    _enabled.set(False)
