"""Unit test fixtures for the chartgen CLI.

CLI tests invoke commands through click's CliRunner; generated files go
to ``tmp_path``. Shared configuration fixtures live in ../conftest.py.
"""

from __future__ import annotations

from pathlib import Path

import pytest
from click.testing import CliRunner


@pytest.fixture
def cli_runner() -> CliRunner:
    """Provide a Click CLI test runner.

    Returns:
        CliRunner instance for testing Click commands.
    """
    return CliRunner()


@pytest.fixture
def output_dir(tmp_path: Path) -> Path:
    """Directory generated artifacts are written to."""
    return tmp_path / "target" / "helm"
