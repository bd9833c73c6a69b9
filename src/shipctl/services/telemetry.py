"""Telemetry primitives: @traced and the verbose switch.

Near-zero overhead when disabled (single ContextVar.get per call).
When enabled via --verbose, each traced service call is timed, logged as
``span.complete`` and its duration is injected into ServiceResult.meta.
"""

from __future__ import annotations

import functools
import time
from collections.abc import Callable
from contextvars import ContextVar
from typing import ParamSpec, TypeVar

import structlog

from shipctl.services.result import ServiceResult

log = structlog.get_logger("shipctl.telemetry")

_verbose_enabled: ContextVar[bool] = ContextVar("_verbose_enabled", default=False)

_P = ParamSpec("_P")
_R = TypeVar("_R")


def _inject_meta(result: ServiceResult, name: str, duration_ms: float) -> ServiceResult:
    telemetry = {"telemetry": {"name": name, "duration_ms": duration_ms}}
    return result.model_copy(update={"meta": {**(result.meta or {}), **telemetry}})


def traced(func: Callable[_P, _R]) -> Callable[_P, _R]:  # noqa: UP047
    """Decorator: time a service method and record it in ServiceResult.meta."""

    @functools.wraps(func)
    def wrapper(*args: _P.args, **kwargs: _P.kwargs) -> _R:
        if not _verbose_enabled.get():
            return func(*args, **kwargs)

        name = func.__qualname__
        start = time.perf_counter()
        try:
            result = func(*args, **kwargs)
        except Exception:
            elapsed = round((time.perf_counter() - start) * 1000, 2)
            log.debug("span.complete", span_name=name, duration_ms=elapsed, ok=False)
            raise

        elapsed = round((time.perf_counter() - start) * 1000, 2)
        if isinstance(result, ServiceResult):
            log.debug("span.complete", span_name=name, duration_ms=elapsed, ok=result.ok)
            return _inject_meta(result, name, elapsed)  # type: ignore[return-value]
        log.debug("span.complete", span_name=name, duration_ms=elapsed, ok=True)
        return result

    return wrapper


def enable_telemetry() -> None:
    """Enable verbose telemetry (called by AppContext at startup)."""
    _verbose_enabled.set(True)


def disable_telemetry() -> None:
    _verbose_enabled.set(False)
