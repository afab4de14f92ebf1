"""Helm dependency generator.

Combines every configured dependency into the three artifacts consumed by
the chart renderer:

1. ``Chart.yaml`` with the ``dependencies`` list
2. ``values.yaml`` with the dependency ``enabled`` flags, then user overrides
3. ``init-containers.yaml`` with the wait-for-service init-containers

Output order always follows the order the dependencies were declared in.

Example:
    >>> from helm_chartgen.helm.config import load_chart_config
    >>> from helm_chartgen.helm.generator import HelmDependencyGenerator
    >>>
    >>> generator = HelmDependencyGenerator(load_chart_config("helm.yaml"))
    >>> generator.set_user_overrides({"app": {"replicas": 2}})
    >>> generator.write("target/helm")
"""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import TYPE_CHECKING, Any

import structlog
import yaml

from helm_chartgen.helm.dependencies import (
    dependency_values,
    resolve_condition,
    to_chart_dependency,
)
from helm_chartgen.helm.merger import conflicting_paths, deep_merge
from helm_chartgen.helm.wait import ServiceWaitResolver
from helm_chartgen.telemetry.tracer_factory import get_tracer

if TYPE_CHECKING:
    from helm_chartgen.helm.schemas import HelmChartConfig, InitContainerSpec

logger = structlog.get_logger(__name__)

CHART_API_VERSION = "v2"

CHART_FILE = "Chart.yaml"
VALUES_FILE = "values.yaml"
INIT_CONTAINERS_FILE = "init-containers.yaml"


@dataclass
class DependencyGenerationResult:
    """Artifacts generated for one chart.

    Attributes:
        chart_dependencies: Chart.yaml ``dependencies`` entries
        values: values.yaml content
        init_containers: Wait-for-service init-containers
    """

    chart_dependencies: list[dict[str, Any]] = field(default_factory=list)
    values: dict[str, Any] = field(default_factory=dict)
    init_containers: list[InitContainerSpec] = field(default_factory=list)

    def init_container_manifests(self) -> list[dict[str, Any]]:
        """Init-containers as Kubernetes container mappings."""
        return [spec.to_container() for spec in self.init_containers]


class HelmDependencyGenerator:
    """Generate chart artifacts from a HelmChartConfig.

    Attributes:
        config: Chart configuration
        resolver: Resolver used for wait-for-service init-containers
    """

    def __init__(
        self,
        config: HelmChartConfig,
        *,
        resolver: ServiceWaitResolver | None = None,
    ) -> None:
        """Initialize the generator.

        Args:
            config: Chart configuration.
            resolver: Wait resolver. A default ServiceWaitResolver is used if None.
        """
        self.config = config
        self.resolver = resolver or ServiceWaitResolver()
        self._user_overrides: dict[str, Any] = {}

    def set_user_overrides(self, overrides: dict[str, Any]) -> None:
        """Set values overrides, applied after the dependency values.

        Args:
            overrides: Nested values dictionary (e.g. from ``--set``)
        """
        self._user_overrides = overrides

    def generate(self) -> DependencyGenerationResult:
        """Generate all artifacts.

        Returns:
            DependencyGenerationResult for the configured chart

        Raises:
            CommandTemplateError: If a wait-for-service command cannot be built
        """
        tracer = get_tracer(__name__)
        with tracer.start_as_current_span("helm_chartgen.generate") as span:
            span.set_attribute("chart.name", self.config.name)
            span.set_attribute("chart.dependencies", len(self.config.dependencies))

            root = self.config.values_root_alias
            dependencies = self.config.dependencies

            chart_dependencies = [
                to_chart_dependency(key, dep, root) for key, dep in dependencies.items()
            ]
            values = self._dependency_values()
            if self._user_overrides:
                values = deep_merge(values, self._user_overrides)

            init_containers = self.resolver.resolve_all(dependencies)

            logger.info(
                "helm.generator.completed",
                chart=self.config.name,
                dependencies=len(chart_dependencies),
                init_containers=[spec.name for spec in init_containers],
            )

            return DependencyGenerationResult(
                chart_dependencies=chart_dependencies,
                values=values,
                init_containers=init_containers,
            )

    def _dependency_values(self) -> dict[str, Any]:
        """Merge the values fragments of all dependencies in declaration order.

        A fragment overwriting a value set by an earlier dependency is
        logged as ``helm.generator.values_conflict``; the later value wins.
        """
        root = self.config.values_root_alias
        values: dict[str, Any] = {}
        written: list[tuple[str, str]] = []

        for key, dep in self.config.dependencies.items():
            fragment = dependency_values(key, dep, root)
            condition = resolve_condition(key, dep, root)
            if not fragment or condition is None:
                continue

            for path in conflicting_paths(values, fragment):
                overwritten = [
                    owner
                    for owner_path, owner in written
                    if owner_path == path or owner_path.startswith(f"{path}.")
                ]
                logger.warning(
                    "helm.generator.values_conflict",
                    path=path,
                    dependency=key,
                    overwritten=overwritten,
                )

            written.append((condition, key))
            values = deep_merge(values, fragment)

        return values

    def chart_document(
        self, result: DependencyGenerationResult | None = None
    ) -> dict[str, Any]:
        """Build the Chart.yaml document.

        Args:
            result: Generation result. If None, generates one.

        Returns:
            Chart.yaml content
        """
        if result is None:
            result = self.generate()

        chart: dict[str, Any] = {
            "apiVersion": CHART_API_VERSION,
            "name": self.config.name,
            "version": self.config.version,
        }
        if result.chart_dependencies:
            chart["dependencies"] = result.chart_dependencies
        return chart

    def write(
        self,
        output_dir: Path | str,
        result: DependencyGenerationResult | None = None,
    ) -> list[Path]:
        """Write Chart.yaml, values.yaml and init-containers.yaml.

        Args:
            output_dir: Directory to write to (created if missing)
            result: Generation result. If None, generates one.

        Returns:
            Paths of the written files
        """
        if result is None:
            result = self.generate()

        output_dir = Path(output_dir)
        output_dir.mkdir(parents=True, exist_ok=True)

        documents: dict[str, Any] = {
            CHART_FILE: self.chart_document(result),
            VALUES_FILE: result.values,
            INIT_CONTAINERS_FILE: result.init_container_manifests(),
        }

        written: list[Path] = []
        for filename, document in documents.items():
            path = output_dir / filename
            with path.open("w") as f:
                yaml.safe_dump(document, f, default_flow_style=False, sort_keys=False)
            written.append(path)

        logger.info("helm.generator.written", output_dir=str(output_dir), files=len(written))
        return written


def generate_from_config(
    config: HelmChartConfig,
    user_overrides: dict[str, Any] | None = None,
) -> DependencyGenerationResult:
    """Convenience function generating artifacts for a configuration.

    Args:
        config: Chart configuration
        user_overrides: Optional values overrides

    Returns:
        DependencyGenerationResult
    """
    generator = HelmDependencyGenerator(config)
    if user_overrides:
        generator.set_user_overrides(user_overrides)
    return generator.generate()


__all__: list[str] = [
    "CHART_FILE",
    "INIT_CONTAINERS_FILE",
    "VALUES_FILE",
    "DependencyGenerationResult",
    "HelmDependencyGenerator",
    "generate_from_config",
]
