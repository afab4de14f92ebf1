"""Pydantic schemas for Helm dependency configuration.

This module defines the configuration records read from the chart
configuration file and the init-container record produced for
dependencies that declare ``waitForService``.

Models:
    HelmDependency: One Helm chart dependency and its wait-for-service settings
    InitContainerSpec: Init-container (name, image, command) gating pod start-up
    HelmChartConfig: Chart name, values root alias and the dependency map

YAML keys are camelCase (``waitForService``); Python attributes are
snake_case (``wait_for_service``). Both spellings are accepted on input.

Example:
    >>> from helm_chartgen.helm.schemas import HelmDependency
    >>> dep = HelmDependency.model_validate({
    ...     "version": "12.1.0",
    ...     "repository": "https://charts.bitnami.com/bitnami",
    ...     "waitForService": "postgresql:5432",
    ... })
    >>> dep.wait_for_service_image
    'busybox:1.34.1'
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator

SERVICE_NAME_PLACEHOLDER = "::service-name"
SERVICE_PORT_PLACEHOLDER = "::service-port"

# Conditions starting with this prefix are not nested under the values root alias
ROOT_CONDITION_PREFIX = "@."

DEFAULT_WAIT_FOR_SERVICE_IMAGE = "busybox:1.34.1"
DEFAULT_PORT_COMMAND_TEMPLATE = (
    "for i in $(seq 1 200); do nc -z -w3 ::service-name ::service-port "
    "&& exit 0; done; exit 1"
)
DEFAULT_ONLY_COMMAND_TEMPLATE = (
    "until nslookup ::service-name; do echo waiting for service; sleep 2; done"
)

DEFAULT_VALUES_ROOT_ALIAS = "app"


def _coerce_version(v: Any) -> Any:
    # YAML reads `version: 17.10` as the float 17.1
    if isinstance(v, bool):
        return v
    if isinstance(v, int):
        return str(v)
    if isinstance(v, float):
        msg = f"Version {v!r} was read as a number; quote the version, e.g. '17.10'"
        raise ValueError(msg)
    return v


class HelmDependency(BaseModel):
    """A Helm chart dependency declared by the generated chart.

    Attributes:
        name: Dependency chart name. Defaults to the key in the dependency map.
        version: Version (or version range) of the dependency chart.
        repository: Repository URL hosting the dependency chart.
        condition: Values path toggling the dependency. A leading ``@.``
            keeps it out of the values root alias.
        tags: Tags used for conditional inclusion.
        enabled: Whether the dependency is loaded. ``None`` means enabled.
        alias: In-chart reference name override.
        wait_for_service: ``service`` or ``service:port`` to wait for.
        wait_for_service_image: Image running the wait init-container.
        wait_for_service_port_command_template: Command used when a port is set.
        wait_for_service_only_command_template: Command used for a bare service name.
    """

    model_config = ConfigDict(frozen=True, extra="forbid", populate_by_name=True)

    name: str | None = Field(
        default=None,
        min_length=1,
        description="Dependency chart name (defaults to the map key)",
    )
    version: str = Field(
        ...,
        min_length=1,
        description="Dependency chart version",
        examples=["12.1.0", "~1.2.3"],
    )
    repository: str = Field(
        ...,
        min_length=1,
        description="Repository URL of the dependency",
        examples=["https://charts.bitnami.com/bitnami", "oci://registry/charts"],
    )
    condition: str | None = Field(
        default=None,
        description="Values path enabling the dependency",
        examples=["postgresql.enabled", "@.global.postgresql.enabled"],
    )
    tags: list[str] | None = Field(
        default=None,
        description="Dependency tags",
    )
    enabled: bool | None = Field(
        default=None,
        description="Whether this dependency should be loaded",
    )
    alias: str | None = Field(
        default=None,
        min_length=1,
        description="Alias of the dependency",
    )
    wait_for_service: str | None = Field(
        default=None,
        alias="waitForService",
        description="Service (optionally service:port) to wait for before start-up",
        examples=["postgresql", "postgresql:5432"],
    )
    wait_for_service_image: str = Field(
        default=DEFAULT_WAIT_FOR_SERVICE_IMAGE,
        alias="waitForServiceImage",
        description="Image used by the wait-for-service init-container",
    )
    wait_for_service_port_command_template: str = Field(
        default=DEFAULT_PORT_COMMAND_TEMPLATE,
        alias="waitForServicePortCommandTemplate",
        description="Init-container command when a port is given",
    )
    wait_for_service_only_command_template: str = Field(
        default=DEFAULT_ONLY_COMMAND_TEMPLATE,
        alias="waitForServiceOnlyCommandTemplate",
        description="Init-container command when only a service name is given",
    )

    @field_validator("version", mode="before")
    @classmethod
    def coerce_numeric_version(cls, v: Any) -> Any:
        """Accept integer versions; reject floats, which YAML may have altered."""
        return _coerce_version(v)

    @field_validator("condition")
    @classmethod
    def validate_condition(cls, v: str | None) -> str | None:
        """Reject conditions that are empty once the root prefix is removed."""
        if v is None:
            return v
        path = v.removeprefix(ROOT_CONDITION_PREFIX)
        if not path.strip():
            msg = f"Condition must name a values path: {v!r}"
            raise ValueError(msg)
        return v

    @field_validator("tags")
    @classmethod
    def validate_tags(cls, v: list[str] | None) -> list[str] | None:
        """Validate tags are non-empty strings."""
        if v is None:
            return v
        for tag in v:
            if not tag.strip():
                msg = "Dependency tags must not be empty"
                raise ValueError(msg)
        return v


class InitContainerSpec(BaseModel):
    """Init-container blocking pod start-up until a service is reachable.

    Attributes:
        name: Deterministic container name derived from the service name
        image: Container image running the command
        command: Shell command, run by the caller as ``sh -c "<command>"``
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    name: str = Field(
        ...,
        description="Init-container name (DNS-1123 label)",
        pattern=r"^[a-z0-9]([-a-z0-9]*[a-z0-9])?$",
        max_length=63,
    )
    image: str = Field(..., min_length=1, description="Container image")
    command: str = Field(..., min_length=1, description="Shell command")

    def to_container(self) -> dict[str, Any]:
        """Convert to a Kubernetes container mapping.

        Returns:
            Dictionary suitable for a pod spec ``initContainers`` list
        """
        return {
            "name": self.name,
            "image": self.image,
            "command": ["sh", "-c", self.command],
        }


class HelmChartConfig(BaseModel):
    """Helm configuration of a generated chart.

    Attributes:
        name: Chart name
        version: Chart version written to Chart.yaml
        values_root_alias: Root key under which dependency values are nested
        dependencies: Dependencies by key, in declaration order

    Example:
        >>> config = HelmChartConfig(
        ...     name="demo",
        ...     dependencies={
        ...         "postgresql": HelmDependency(
        ...             version="12.1.0",
        ...             repository="https://charts.bitnami.com/bitnami",
        ...         )
        ...     },
        ... )
        >>> list(config.dependencies)
        ['postgresql']
    """

    model_config = ConfigDict(frozen=True, extra="forbid", populate_by_name=True)

    name: str = Field(
        ...,
        description="Chart name",
        pattern=r"^[a-z0-9]([-a-z0-9]*[a-z0-9])?$",
    )
    version: str = Field(
        default="0.1.0",
        min_length=1,
        description="Chart version",
    )
    values_root_alias: str = Field(
        default=DEFAULT_VALUES_ROOT_ALIAS,
        alias="valuesRootAlias",
        min_length=1,
        description="Root key of the generated values.yaml",
    )
    dependencies: dict[str, HelmDependency] = Field(
        default_factory=dict,
        description="Helm dependencies by key",
    )

    @field_validator("version", mode="before")
    @classmethod
    def coerce_numeric_version(cls, v: Any) -> Any:
        """Accept integer versions; reject floats."""
        return _coerce_version(v)

    @field_validator("dependencies")
    @classmethod
    def validate_dependency_keys(
        cls, v: dict[str, HelmDependency]
    ) -> dict[str, HelmDependency]:
        """Validate dependency keys are non-empty."""
        for key in v:
            if not key.strip():
                msg = "Dependency keys must not be empty"
                raise ValueError(msg)
        return v


__all__: list[str] = [
    "DEFAULT_ONLY_COMMAND_TEMPLATE",
    "DEFAULT_PORT_COMMAND_TEMPLATE",
    "DEFAULT_VALUES_ROOT_ALIAS",
    "DEFAULT_WAIT_FOR_SERVICE_IMAGE",
    "ROOT_CONDITION_PREFIX",
    "SERVICE_NAME_PLACEHOLDER",
    "SERVICE_PORT_PLACEHOLDER",
    "HelmChartConfig",
    "HelmDependency",
    "InitContainerSpec",
]
