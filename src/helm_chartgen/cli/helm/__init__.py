"""Helm CLI commands.

    chartgen helm generate: Write Chart.yaml, values.yaml and init-containers.yaml
    chartgen helm wait: Print the wait-for-service init-container of one service
"""

from __future__ import annotations

import click

from helm_chartgen.cli.helm.generate import generate_command
from helm_chartgen.cli.helm.wait import wait_command


@click.group(
    name="helm",
    help="Helm dependency commands.",
)
def helm() -> None:
    """Helm command group."""
    pass


helm.add_command(generate_command)
helm.add_command(wait_command)


__all__: list[str] = ["helm"]
