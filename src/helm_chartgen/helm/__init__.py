"""Helm dependency rendering.

Modules:
    schemas: Pydantic models for dependency configuration and init-containers
    wait: ServiceWaitResolver for wait-for-service init-containers
    dependencies: Chart.yaml dependency entries and values flags
    merger: Deep merge utilities for values
    parsing: Helm ``--set`` override parsing
    config: Chart configuration file loading
    generator: HelmDependencyGenerator writing the chart artifacts

Example:
    >>> from helm_chartgen.helm import HelmDependency, ServiceWaitResolver
    >>> dep = HelmDependency(
    ...     version="12.1.0",
    ...     repository="https://charts.bitnami.com/bitnami",
    ...     waitForService="demo-db:5432",
    ... )
    >>> ServiceWaitResolver().resolve(dep).command
    'for i in $(seq 1 200); do nc -z -w3 demo-db 5432 && exit 0; done; exit 1'
"""

from __future__ import annotations

from helm_chartgen.helm.config import chart_config_from_dict, load_chart_config
from helm_chartgen.helm.dependencies import (
    dependency_name,
    dependency_values,
    resolve_condition,
    to_chart_dependency,
)
from helm_chartgen.helm.generator import (
    DependencyGenerationResult,
    HelmDependencyGenerator,
    generate_from_config,
)
from helm_chartgen.helm.merger import deep_merge, merge_all, set_value, unflatten_dict
from helm_chartgen.helm.parsing import parse_set_values, parse_value
from helm_chartgen.helm.schemas import (
    HelmChartConfig,
    HelmDependency,
    InitContainerSpec,
)
from helm_chartgen.helm.wait import (
    ServiceWaitResolver,
    WaitTarget,
    init_container_name,
    parse_wait_target,
)

__all__: list[str] = [
    # Schemas
    "HelmChartConfig",
    "HelmDependency",
    "InitContainerSpec",
    # Wait-for-service
    "ServiceWaitResolver",
    "WaitTarget",
    "init_container_name",
    "parse_wait_target",
    # Chart dependencies
    "dependency_name",
    "dependency_values",
    "resolve_condition",
    "to_chart_dependency",
    # Generation
    "DependencyGenerationResult",
    "HelmDependencyGenerator",
    "generate_from_config",
    # Configuration
    "chart_config_from_dict",
    "load_chart_config",
    # Values utilities
    "deep_merge",
    "merge_all",
    "parse_set_values",
    "parse_value",
    "set_value",
    "unflatten_dict",
]
