"""structlog configuration with OpenTelemetry trace correlation.

Log events emitted inside an active span carry ``trace_id`` and
``span_id`` so that build logs can be matched with traces.
"""

from __future__ import annotations

import logging
import sys
from collections.abc import MutableMapping
from typing import Any

import structlog
from opentelemetry import trace
from opentelemetry.trace import INVALID_SPAN_ID, INVALID_TRACE_ID

EventDict = MutableMapping[str, Any]

LOG_LEVELS: tuple[str, ...] = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


def add_trace_context(
    logger: Any,  # noqa: ARG001
    method_name: str,  # noqa: ARG001
    event_dict: EventDict,
) -> EventDict:
    """Add the active span's trace and span ids to a log event.

    structlog processor; events outside a valid span are left untouched.
    """
    ctx = trace.get_current_span().get_span_context()

    if ctx.trace_id != INVALID_TRACE_ID and ctx.span_id != INVALID_SPAN_ID:
        event_dict["trace_id"] = format(ctx.trace_id, "032x")
        event_dict["span_id"] = format(ctx.span_id, "016x")

    return event_dict


def configure_logging(
    log_level: str = "INFO",
    json_output: bool = False,
) -> None:
    """Configure structlog for the chartgen CLI.

    Args:
        log_level: Minimum level emitted (DEBUG, INFO, WARNING, ERROR, CRITICAL).
        json_output: Render JSON lines instead of the console format.

    Raises:
        ValueError: If ``log_level`` is not a known level name.

    Example:
        >>> configure_logging(log_level="DEBUG")
        >>> structlog.get_logger().debug("helm.generator.started")
    """
    level_name = log_level.upper()
    if level_name not in LOG_LEVELS:
        msg = f"Unknown log level: {log_level}"
        raise ValueError(msg)

    renderer: Any = (
        structlog.processors.JSONRenderer()
        if json_output
        else structlog.dev.ConsoleRenderer(colors=False)
    )

    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            structlog.processors.add_log_level,
            structlog.processors.TimeStamper(fmt="iso"),
            add_trace_context,
            renderer,
        ],
        wrapper_class=structlog.make_filtering_bound_logger(
            getattr(logging, level_name)
        ),
        logger_factory=_stderr_logger_factory,
        cache_logger_on_first_use=False,
    )


def _stderr_logger_factory(*args: Any) -> structlog.PrintLogger:  # noqa: ARG001
    # Resolved per logger so redirected streams (CliRunner, capsys) are honoured
    return structlog.PrintLogger(file=sys.stderr)


__all__: list[str] = [
    "LOG_LEVELS",
    "add_trace_context",
    "configure_logging",
]
