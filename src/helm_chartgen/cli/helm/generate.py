"""``chartgen helm generate`` command.

Reads the chart configuration, renders the dependency artifacts and writes
them to the output directory:

    target/helm/Chart.yaml
    target/helm/values.yaml
    target/helm/init-containers.yaml

Example:
    $ chartgen helm generate --config helm.yaml
    $ chartgen helm generate -c helm.yaml --set app.postgresql.enabled=false
    $ chartgen helm generate -c helm.yaml --dry-run
"""

from __future__ import annotations

from pathlib import Path

import click
import yaml

from helm_chartgen.cli.utils import ExitCode, error, error_exit, info, success, warn
from helm_chartgen.errors import ChartConfigError, DependencyConfigurationError
from helm_chartgen.helm.config import load_chart_config
from helm_chartgen.helm.generator import HelmDependencyGenerator
from helm_chartgen.helm.parsing import parse_set_values


@click.command(
    name="generate",
    help="""\b
Generate Helm dependency artifacts from a chart configuration.

Output:
    Chart.yaml            chart metadata and dependencies
    values.yaml           dependency enabled flags and --set overrides
    init-containers.yaml  wait-for-service init-containers

Examples:
    $ chartgen helm generate --config helm.yaml
    $ chartgen helm generate -c helm.yaml --output-dir build/chart
    $ chartgen helm generate -c helm.yaml --set app.redis.enabled=false
""",
    context_settings={"help_option_names": ["-h", "--help"]},
)
@click.option(
    "--config",
    "-c",
    "config_path",
    type=click.Path(dir_okay=False, path_type=Path),
    required=True,
    help="Chart configuration file (YAML).",
    metavar="PATH",
)
@click.option(
    "--output-dir",
    "-o",
    type=click.Path(file_okay=False, path_type=Path),
    default=Path("target/helm"),
    show_default=True,
    help="Directory the artifacts are written to.",
    metavar="DIR",
)
@click.option(
    "--set",
    "set_values",
    multiple=True,
    help="Override values using key=value syntax. Can be repeated.",
    metavar="KEY=VALUE",
)
@click.option(
    "--dry-run",
    is_flag=True,
    default=False,
    help="Print the generated artifacts instead of writing files.",
)
def generate_command(
    config_path: Path,
    output_dir: Path,
    set_values: tuple[str, ...],
    dry_run: bool,
) -> None:
    """Generate Chart.yaml, values.yaml and init-containers.yaml."""
    if not config_path.exists():
        error_exit(
            "Chart configuration not found",
            exit_code=ExitCode.FILE_NOT_FOUND,
            path=str(config_path),
        )

    try:
        config = load_chart_config(config_path)
    except ChartConfigError as e:
        for detail in e.errors:
            error(detail)
        error_exit(str(e), exit_code=ExitCode.VALIDATION_ERROR, path=str(config_path))

    generator = HelmDependencyGenerator(config)
    overrides = parse_set_values(set_values, warn_fn=warn)
    if overrides:
        generator.set_user_overrides(overrides)

    try:
        result = generator.generate()
    except DependencyConfigurationError as e:
        error_exit(str(e), exit_code=ExitCode.VALIDATION_ERROR)

    if dry_run:
        info("Dry-run mode: no files will be written")
        documents = {
            "Chart.yaml": generator.chart_document(result),
            "values.yaml": result.values,
            "init-containers.yaml": result.init_container_manifests(),
        }
        for filename, document in documents.items():
            click.echo(f"# {filename}")
            click.echo(yaml.safe_dump(document, default_flow_style=False, sort_keys=False))
        return

    try:
        paths = generator.write(output_dir, result)
    except OSError as e:
        error_exit(
            f"Cannot write artifacts: {e}",
            exit_code=ExitCode.GENERAL_ERROR,
            path=str(output_dir),
        )

    success(f"Generated {len(paths)} files for chart '{config.name}':")
    for path in paths:
        info(f"  {path}")
    if result.init_containers:
        info(
            "Wait-for-service init-containers: "
            + ", ".join(spec.name for spec in result.init_containers)
        )


__all__: list[str] = ["generate_command"]
