"""Main entry point for the chartgen CLI.

Example:
    $ chartgen --help
    $ chartgen helm generate --config helm.yaml --output-dir target/helm
    $ chartgen helm wait demo-db:5432
"""

from __future__ import annotations

import sys
from importlib.metadata import PackageNotFoundError
from importlib.metadata import version as get_version

import click

from helm_chartgen.cli.helm import helm
from helm_chartgen.telemetry.logging import LOG_LEVELS, configure_logging


def _get_version() -> str:
    """Return the installed helm-chartgen version, or 'unknown'."""
    try:
        return get_version("helm-chartgen")
    except PackageNotFoundError:
        return "unknown"


@click.group(
    name="chartgen",
    help="chartgen - Helm dependency and init-container generation.",
    epilog="Use 'chartgen <command> --help' for command-specific help.",
    context_settings={"help_option_names": ["-h", "--help"]},
)
@click.version_option(
    version=_get_version(),
    prog_name="chartgen",
    message="%(prog)s %(version)s",
)
@click.option(
    "--log-level",
    type=click.Choice(LOG_LEVELS, case_sensitive=False),
    default="WARNING",
    show_default=True,
    help="Minimum level of log events written to stderr.",
)
@click.option(
    "--json-logs",
    is_flag=True,
    default=False,
    help="Write log events as JSON lines.",
)
@click.pass_context
def cli(ctx: click.Context, log_level: str, json_logs: bool) -> None:
    """Root command group for the chartgen CLI."""
    ctx.ensure_object(dict)
    configure_logging(log_level=log_level, json_output=json_logs)


cli.add_command(helm)


def main(argv: list[str] | None = None) -> None:
    """Run the chartgen CLI.

    Args:
        argv: Command-line arguments (uses sys.argv if None).
    """
    try:
        cli(args=argv, standalone_mode=False)
    except click.ClickException as e:
        e.show()
        sys.exit(e.exit_code)
    except click.Abort:
        click.echo("Aborted!", err=True)
        sys.exit(1)


if __name__ == "__main__":
    main()
