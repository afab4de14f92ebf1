"""Wait-for-service init-container resolution.

A Helm dependency may declare ``waitForService`` so that the application
pods do not start before a service installed by that dependency is
reachable. This module turns that declaration into an init-container:

1. ``service:port`` selects the port command template (``nc -z`` loop)
2. ``service`` selects the service-only template (``nslookup`` loop)
3. ``::service-name`` and ``::service-port`` are substituted
4. The image defaults to ``busybox:1.34.1``

Resolution is pure: the same dependency always yields the same spec.

Example:
    >>> from helm_chartgen.helm.schemas import HelmDependency
    >>> from helm_chartgen.helm.wait import ServiceWaitResolver
    >>> dep = HelmDependency(
    ...     version="12.1.0",
    ...     repository="https://charts.bitnami.com/bitnami",
    ...     waitForService="demo-db",
    ... )
    >>> ServiceWaitResolver().resolve(dep).command
    'until nslookup demo-db; do echo waiting for service; sleep 2; done'
"""

from __future__ import annotations

import hashlib
import re
from dataclasses import dataclass
from typing import TYPE_CHECKING

import structlog

from helm_chartgen.errors import CommandTemplateError
from helm_chartgen.helm.schemas import (
    SERVICE_NAME_PLACEHOLDER,
    SERVICE_PORT_PLACEHOLDER,
    InitContainerSpec,
)

if TYPE_CHECKING:
    from collections.abc import Collection, Mapping

    from helm_chartgen.helm.schemas import HelmDependency

logger = structlog.get_logger(__name__)

INIT_CONTAINER_PREFIX = "wait-for-"
_MAX_NAME_LENGTH = 63
_SUFFIX_LENGTH = 8
_INVALID_NAME_CHARS = re.compile(r"[^a-z0-9-]+")


@dataclass(frozen=True)
class WaitTarget:
    """Parsed ``waitForService`` value.

    Attributes:
        service_name: Service to wait for.
        port: Port to probe, or None when only DNS resolution is awaited.
    """

    service_name: str
    port: str | None = None


def parse_wait_target(value: str | None) -> WaitTarget | None:
    """Parse a ``waitForService`` value into a WaitTarget.

    The value is split on the first ``:``. Anything after it, further
    colons included, is the port. An empty port counts as no port.

    Args:
        value: ``service`` or ``service:port``.

    Returns:
        WaitTarget, or None when the value is absent, blank or has no
        service name.

    Example:
        >>> parse_wait_target("demo-db:5432")
        WaitTarget(service_name='demo-db', port='5432')
        >>> parse_wait_target("demo-db:")
        WaitTarget(service_name='demo-db', port=None)
    """
    if value is None or not value.strip():
        return None

    service_name, separator, port = value.strip().partition(":")
    if not service_name:
        logger.warning("helm.wait.missing_service_name", wait_for_service=value)
        return None

    if not separator or not port:
        return WaitTarget(service_name=service_name)

    return WaitTarget(service_name=service_name, port=port)


def init_container_name(service_name: str) -> str:
    """Derive the init-container name for a service.

    Args:
        service_name: Service the container waits for.

    Returns:
        ``wait-for-<service>`` normalised to a DNS-1123 label.

    Example:
        >>> init_container_name("Demo_DB")
        'wait-for-demo-db'
    """
    normalized = _INVALID_NAME_CHARS.sub("-", service_name.lower()).strip("-")
    name = f"{INIT_CONTAINER_PREFIX}{normalized}"[:_MAX_NAME_LENGTH]
    return name.rstrip("-")


def disambiguate_name(
    name: str,
    image: str,
    command: str,
    taken: Collection[str],
) -> str:
    """Derive a unique init-container name for a colliding spec.

    The suffix is the start of a SHA-256 digest over image and command, so
    the result only depends on the inputs. The name stays a DNS-1123 label
    of at most 63 characters.

    Args:
        name: Name that is already taken.
        image: Image of the colliding init-container.
        command: Command of the colliding init-container.
        taken: Names already in use.

    Returns:
        A name not in ``taken``.

    Example:
        >>> name = disambiguate_name("wait-for-kafka", "busybox:1.34.1", "nc -z kafka 9093", set())
        >>> name.startswith("wait-for-kafka-"), len(name)
        (True, 23)
    """
    attempt = 0
    while True:
        content = f"{image}\n{command}\n{attempt}".encode()
        suffix = hashlib.sha256(content).hexdigest()[:_SUFFIX_LENGTH]
        base = name[: _MAX_NAME_LENGTH - _SUFFIX_LENGTH - 1].rstrip("-")
        candidate = f"{base}-{suffix}"
        if candidate not in taken:
            return candidate
        attempt += 1


def render_wait_command(
    target: WaitTarget,
    *,
    port_template: str,
    only_template: str,
    dependency: str = "<unnamed>",
) -> str:
    """Render the shell command waiting for a target.

    Args:
        target: Parsed wait target.
        port_template: Template used when the target has a port.
        only_template: Template used when the target has no port.
        dependency: Dependency label used in error messages.

    Returns:
        Command with every placeholder substituted.

    Raises:
        CommandTemplateError: If the selected template is empty or a
            placeholder remains after substitution.
    """
    if target.port is not None:
        template, kind = port_template, "port"
    else:
        template, kind = only_template, "service-only"

    if not template or not template.strip():
        raise CommandTemplateError(dependency, f"{kind} command template is empty")

    command = template.replace(SERVICE_NAME_PLACEHOLDER, target.service_name)
    if target.port is not None:
        command = command.replace(SERVICE_PORT_PLACEHOLDER, target.port)

    for placeholder in (SERVICE_NAME_PLACEHOLDER, SERVICE_PORT_PLACEHOLDER):
        if placeholder in command:
            raise CommandTemplateError(
                dependency,
                f"{kind} command template leaves '{placeholder}' unresolved",
            )

    return command


class ServiceWaitResolver:
    """Resolve ``waitForService`` declarations into init-container specs.

    The resolver holds no state; one instance can be shared across
    dependencies and threads.

    Example:
        >>> resolver = ServiceWaitResolver()
        >>> spec = resolver.resolve(dependency)
        >>> if spec is not None:
        ...     pod_spec["initContainers"].append(spec.to_container())
    """

    def resolve(
        self,
        dependency: HelmDependency,
        *,
        key: str | None = None,
    ) -> InitContainerSpec | None:
        """Resolve one dependency.

        Args:
            dependency: Dependency configuration.
            key: Dependency key, used in logs and error messages.

        Returns:
            InitContainerSpec, or None when the dependency does not wait
            for a service.

        Raises:
            CommandTemplateError: If the selected command template is unusable.
        """
        target = parse_wait_target(dependency.wait_for_service)
        if target is None:
            return None

        label = key or dependency.name or target.service_name
        command = render_wait_command(
            target,
            port_template=dependency.wait_for_service_port_command_template,
            only_template=dependency.wait_for_service_only_command_template,
            dependency=label,
        )
        spec = InitContainerSpec(
            name=init_container_name(target.service_name),
            image=dependency.wait_for_service_image,
            command=command,
        )

        logger.debug(
            "helm.wait.resolved",
            dependency=label,
            service=target.service_name,
            port=target.port,
            container=spec.name,
        )
        return spec

    def resolve_all(
        self,
        dependencies: Mapping[str, HelmDependency],
    ) -> list[InitContainerSpec]:
        """Resolve every dependency in declaration order.

        Dependencies without ``waitForService`` are skipped. Init-containers
        with the same image and command are only emitted once. When two
        different init-containers normalise to the same name, the later
        one gets a suffix derived from its image and command, so every
        distinct wait gate is kept.

        Args:
            dependencies: Dependencies by key.

        Returns:
            Init-container specs in declaration order.
        """
        specs: list[InitContainerSpec] = []
        seen: set[tuple[str, str]] = set()
        names: set[str] = set()

        for key, dependency in dependencies.items():
            spec = self.resolve(dependency, key=key)
            if spec is None:
                continue

            identity = (spec.image, spec.command)
            if identity in seen:
                logger.info(
                    "helm.wait.duplicate_skipped",
                    dependency=key,
                    container=spec.name,
                )
                continue

            if spec.name in names:
                name = disambiguate_name(spec.name, spec.image, spec.command, names)
                logger.warning(
                    "helm.wait.name_collision",
                    dependency=key,
                    container=spec.name,
                    renamed=name,
                )
                spec = InitContainerSpec(name=name, image=spec.image, command=spec.command)

            seen.add(identity)
            names.add(spec.name)
            specs.append(spec)

        return specs


__all__: list[str] = [
    "INIT_CONTAINER_PREFIX",
    "ServiceWaitResolver",
    "WaitTarget",
    "disambiguate_name",
    "init_container_name",
    "parse_wait_target",
    "render_wait_command",
]
