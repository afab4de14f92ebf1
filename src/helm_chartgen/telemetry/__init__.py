"""Logging and tracing setup for helm-chartgen."""

from __future__ import annotations

from helm_chartgen.telemetry.logging import add_trace_context, configure_logging
from helm_chartgen.telemetry.tracer_factory import get_tracer, reset_tracer

__all__: list[str] = [
    "add_trace_context",
    "configure_logging",
    "get_tracer",
    "reset_tracer",
]
