"""Command-line interface for helm-chartgen.

Command Groups:
    chartgen helm: Helm dependency commands (generate, wait)
"""

from __future__ import annotations

from helm_chartgen.cli.main import cli, main

__all__: list[str] = ["cli", "main"]
