"""Shared pytest fixtures for helm-chartgen tests.

NOTE: Do NOT add __init__.py to test directories - pytest runs in importlib
mode and package-style test directories collide on module names.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

import pytest
import structlog

from helm_chartgen.telemetry.tracer_factory import reset_tracer

if TYPE_CHECKING:
    from collections.abc import Generator


@pytest.fixture(autouse=True)
def reset_telemetry() -> Generator[None, None, None]:
    """Restore default structlog configuration and tracer cache per test.

    CLI tests reconfigure structlog; without the reset, later tests would
    inherit their level filter and renderer.
    """
    reset_tracer()
    yield
    structlog.reset_defaults()
    reset_tracer()
