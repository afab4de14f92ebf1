"""Unit tests for structlog configuration."""

from __future__ import annotations

import json

import pytest
import structlog
from opentelemetry import trace
from opentelemetry.trace import SpanContext, TraceFlags

from helm_chartgen.telemetry.logging import add_trace_context, configure_logging


class TestConfigureLogging:
    """Tests for configure_logging."""

    def test_unknown_level_rejected(self) -> None:
        """Unknown level names raise ValueError."""
        with pytest.raises(ValueError, match="Unknown log level: verbose"):
            configure_logging(log_level="verbose")

    def test_level_filters_events(self, capsys: pytest.CaptureFixture[str]) -> None:
        """Events below the configured level are dropped."""
        configure_logging(log_level="warning")
        logger = structlog.get_logger("test")

        logger.info("helm.test.hidden")
        logger.warning("helm.test.shown")

        err = capsys.readouterr().err
        assert "helm.test.hidden" not in err
        assert "helm.test.shown" in err

    def test_json_output(self, capsys: pytest.CaptureFixture[str]) -> None:
        """JSON output carries the event, level, timestamp and fields."""
        configure_logging(log_level="DEBUG", json_output=True)

        structlog.get_logger("test").debug("helm.test.event", chart="demo")

        captured = capsys.readouterr()
        assert captured.out == ""
        event = json.loads(captured.err.strip())
        assert event["event"] == "helm.test.event"
        assert event["level"] == "debug"
        assert event["chart"] == "demo"
        assert "timestamp" in event


class TestAddTraceContext:
    """Tests for the add_trace_context processor."""

    def test_no_active_span(self) -> None:
        """Events outside a span are unchanged."""
        event = {"event": "helm.test"}

        assert add_trace_context(None, "info", event) == {"event": "helm.test"}

    def test_active_span(self) -> None:
        """Events inside a valid span get trace and span ids."""
        ctx = SpanContext(
            trace_id=0x0AF7651916CD43DD8448EB211C80319C,
            span_id=0x00F067AA0BA902B7,
            is_remote=False,
            trace_flags=TraceFlags(TraceFlags.SAMPLED),
        )

        with trace.use_span(trace.NonRecordingSpan(ctx)):
            event = add_trace_context(None, "info", {"event": "helm.test"})

        assert event["trace_id"] == "0af7651916cd43dd8448eb211c80319c"
        assert event["span_id"] == "00f067aa0ba902b7"
