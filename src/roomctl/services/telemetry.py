"""Stage timings for service operations, shown by ``roomctl -v``.

A service method wrapped in :func:`traced` times itself and every
:func:`stage` opened while it runs. Counts noted on a stage (rows read,
records skipped, rows written) travel with its duration into
``ServiceResult.meta["timing"]``. While timing is off, both helpers cost a
single ContextVar lookup.
"""

from __future__ import annotations

import functools
import time
from collections.abc import Callable, Iterator
from contextlib import contextmanager
from contextvars import ContextVar
from dataclasses import dataclass, field
from typing import Any, ParamSpec

import structlog

from roomctl.services.result import ServiceResult

_timing_on: ContextVar[bool] = ContextVar("_timing_on", default=False)
_stages: ContextVar[list[Stage] | None] = ContextVar("_stages", default=None)

log = structlog.get_logger("roomctl.timing")


def _elapsed_ms(started: float) -> float:
    return round((time.perf_counter() - started) * 1000, 2)


@dataclass
class Stage:
    """One timed step of a service operation."""

    name: str
    started: float = field(default_factory=time.perf_counter)
    elapsed_ms: float | None = None
    counts: dict[str, int] = field(default_factory=dict)

    def note(self, **counts: int) -> None:
        self.counts.update(counts)

    def finish(self) -> None:
        self.elapsed_ms = _elapsed_ms(self.started)

    def as_dict(self) -> dict[str, Any]:
        return {"stage": self.name, "elapsed_ms": self.elapsed_ms, **self.counts}


def set_timing(enabled: bool) -> None:
    """Switch stage timing on or off for the current context."""
    _timing_on.set(enabled)


@contextmanager
def stage(name: str) -> Iterator[Stage | None]:
    """Time the enclosed block as stage *name* of the running operation.

    Yields None when timing is off or no :func:`traced` call is running.
    """
    stages = _stages.get()
    if stages is None:
        yield None
        return
    current = Stage(name)
    stages.append(current)
    try:
        yield current
    finally:
        current.finish()
        log.debug("stage.done", stage=name, elapsed_ms=current.elapsed_ms, **current.counts)


_P = ParamSpec("_P")


def traced(func: Callable[_P, ServiceResult]) -> Callable[_P, ServiceResult]:
    """Attach the operation's total and per-stage timings to its result."""

    @functools.wraps(func)
    def wrapper(*args: _P.args, **kwargs: _P.kwargs) -> ServiceResult:
        if not _timing_on.get():
            return func(*args, **kwargs)

        started = time.perf_counter()
        stages: list[Stage] = []
        token = _stages.set(stages)
        try:
            result = func(*args, **kwargs)
        finally:
            _stages.reset(token)

        timing = {
            "operation": func.__qualname__,
            "total_ms": _elapsed_ms(started),
            "stages": [s.as_dict() for s in stages],
        }
        log.debug("operation.done", operation=timing["operation"], total_ms=timing["total_ms"])
        return result.model_copy(update={"meta": {**(result.meta or {}), "timing": timing}})

    return wrapper
