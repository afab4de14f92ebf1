"""Chart.yaml dependency entries and their values.yaml flags.

Helm reads a dependency's ``condition`` from the parent chart's values.
Generated charts nest their values under a root alias (``app`` by default),
so conditions are prefixed with that alias unless they start with ``@.``:

==============================  ============================
Configured condition            Rendered condition
==============================  ============================
``postgresql.enabled``          ``app.postgresql.enabled``
``@.global.postgresql.enabled`` ``global.postgresql.enabled``
==============================  ============================

When ``enabled`` is configured, the flag is written to values.yaml at the
rendered condition path. Without an explicit condition the path defaults
to ``<root>.<alias or name>.enabled``.

Example:
    >>> from helm_chartgen.helm.dependencies import to_chart_dependency
    >>> from helm_chartgen.helm.schemas import HelmDependency
    >>> dep = HelmDependency(
    ...     version="12.1.0",
    ...     repository="https://charts.bitnami.com/bitnami",
    ...     condition="postgresql.enabled",
    ... )
    >>> to_chart_dependency("postgresql", dep, "app")["condition"]
    'app.postgresql.enabled'
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from helm_chartgen.helm.merger import set_value
from helm_chartgen.helm.schemas import ROOT_CONDITION_PREFIX

if TYPE_CHECKING:
    from helm_chartgen.helm.schemas import HelmDependency


def dependency_name(key: str, dependency: HelmDependency) -> str:
    """Return the chart name of a dependency, defaulting to its key."""
    return dependency.name or key


def resolve_condition(
    key: str,
    dependency: HelmDependency,
    values_root_alias: str,
) -> str | None:
    """Compute the condition written to Chart.yaml.

    Args:
        key: Dependency key in the configuration.
        dependency: Dependency configuration.
        values_root_alias: Root key of the generated values.yaml.

    Returns:
        Rendered condition path, or None when the dependency is
        unconditional.
    """
    condition = dependency.condition
    if condition is None:
        if dependency.enabled is None:
            return None
        reference = dependency.alias or dependency_name(key, dependency)
        return f"{values_root_alias}.{reference}.enabled"

    if condition.startswith(ROOT_CONDITION_PREFIX):
        return condition[len(ROOT_CONDITION_PREFIX) :]

    return f"{values_root_alias}.{condition}"


def to_chart_dependency(
    key: str,
    dependency: HelmDependency,
    values_root_alias: str,
) -> dict[str, Any]:
    """Render one entry of the Chart.yaml ``dependencies`` list.

    Optional fields are only emitted when configured.

    Args:
        key: Dependency key in the configuration.
        dependency: Dependency configuration.
        values_root_alias: Root key of the generated values.yaml.

    Returns:
        Chart.yaml dependency mapping.
    """
    entry: dict[str, Any] = {
        "name": dependency_name(key, dependency),
        "version": dependency.version,
        "repository": dependency.repository,
    }

    condition = resolve_condition(key, dependency, values_root_alias)
    if condition is not None:
        entry["condition"] = condition
    if dependency.tags:
        entry["tags"] = list(dependency.tags)
    if dependency.alias is not None:
        entry["alias"] = dependency.alias

    return entry


def dependency_values(
    key: str,
    dependency: HelmDependency,
    values_root_alias: str,
) -> dict[str, Any]:
    """Render the values.yaml fragment of a dependency.

    Returns:
        ``{<condition path>: enabled}`` as a nested mapping, or an empty
        mapping when ``enabled`` is not configured.
    """
    if dependency.enabled is None:
        return {}

    condition = resolve_condition(key, dependency, values_root_alias)
    if condition is None:
        return {}

    return set_value({}, condition, dependency.enabled)


__all__: list[str] = [
    "dependency_name",
    "dependency_values",
    "resolve_condition",
    "to_chart_dependency",
]
