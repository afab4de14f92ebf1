"""``chartgen helm wait`` command.

Prints the wait-for-service init-container for a single service, which is
handy to check custom command templates before adding them to the chart
configuration.

Example:
    $ chartgen helm wait demo-db:5432
    - name: wait-for-demo-db
      image: busybox:1.34.1
      command:
      - sh
      - -c
      - for i in $(seq 1 200); do nc -z -w3 demo-db 5432 && exit 0; done; exit 1
"""

from __future__ import annotations

import click
import yaml

from helm_chartgen.cli.utils import ExitCode, error_exit
from helm_chartgen.errors import CommandTemplateError
from helm_chartgen.helm.schemas import (
    DEFAULT_ONLY_COMMAND_TEMPLATE,
    DEFAULT_PORT_COMMAND_TEMPLATE,
    DEFAULT_WAIT_FOR_SERVICE_IMAGE,
    HelmDependency,
)
from helm_chartgen.helm.wait import ServiceWaitResolver


@click.command(
    name="wait",
    help="Print the init-container waiting for SERVICE (name or name:port).",
    context_settings={"help_option_names": ["-h", "--help"]},
)
@click.argument("service")
@click.option(
    "--image",
    default=DEFAULT_WAIT_FOR_SERVICE_IMAGE,
    show_default=True,
    help="Init-container image.",
)
@click.option(
    "--port-template",
    default=DEFAULT_PORT_COMMAND_TEMPLATE,
    help="Command template used when a port is given.",
)
@click.option(
    "--only-template",
    default=DEFAULT_ONLY_COMMAND_TEMPLATE,
    help="Command template used when only a service name is given.",
)
def wait_command(
    service: str,
    image: str,
    port_template: str,
    only_template: str,
) -> None:
    """Print the wait-for-service init-container as YAML."""
    # Only wait-related fields matter; version and repository are placeholders
    dependency = HelmDependency(
        version="0.0.0",
        repository="file://.",
        wait_for_service=service,
        wait_for_service_image=image,
        wait_for_service_port_command_template=port_template,
        wait_for_service_only_command_template=only_template,
    )

    try:
        spec = ServiceWaitResolver().resolve(dependency, key=service)
    except CommandTemplateError as e:
        error_exit(str(e), exit_code=ExitCode.VALIDATION_ERROR)

    if spec is None:
        error_exit(
            "Nothing to wait for: a service name is required",
            exit_code=ExitCode.VALIDATION_ERROR,
            service=service,
        )

    click.echo(
        yaml.safe_dump([spec.to_container()], default_flow_style=False, sort_keys=False),
        nl=False,
    )


__all__: list[str] = ["wait_command"]
