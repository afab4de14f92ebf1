"""Cached OpenTelemetry tracer lookup.

Tracers are created lazily and cached per name. If the OpenTelemetry
global state cannot hand out a tracer, a NoOpTracer is returned and no
further attempts are made until ``reset_tracer()`` is called.
"""

from __future__ import annotations

import threading
from typing import TYPE_CHECKING

from opentelemetry import trace

if TYPE_CHECKING:
    from opentelemetry.trace import Tracer

_tracers: dict[str, Tracer] = {}
_tracer_init_failed: bool = False
_lock = threading.Lock()


def get_tracer(name: str = "helm_chartgen") -> Tracer:
    """Get or create the tracer for ``name``.

    Args:
        name: Instrumenting module name.

    Returns:
        Cached tracer, or a NoOpTracer when initialization failed.

    Example:
        >>> tracer = get_tracer("helm_chartgen.helm.generator")
        >>> with tracer.start_as_current_span("helm_chartgen.generate"):
        ...     pass
    """
    global _tracer_init_failed

    if name in _tracers:
        return _tracers[name]

    with _lock:
        if name in _tracers:
            return _tracers[name]
        if _tracer_init_failed:
            return trace.NoOpTracer()

        try:
            tracer = trace.get_tracer(name)
        except RecursionError:
            # Global provider state corrupted, typically by test fixtures
            _tracer_init_failed = True
            return trace.NoOpTracer()

        _tracers[name] = tracer
        return tracer


def reset_tracer() -> None:
    """Clear cached tracers and the failure flag (test isolation)."""
    global _tracer_init_failed
    with _lock:
        _tracers.clear()
        _tracer_init_failed = False


__all__: list[str] = ["get_tracer", "reset_tracer"]
