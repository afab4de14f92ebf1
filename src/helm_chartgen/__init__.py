"""helm-chartgen: Helm dependency rendering for generated charts.

Turns a declarative Helm dependency configuration into chart artifacts:
``Chart.yaml`` dependency entries, ``values.yaml`` contributions and
init-containers that hold pod start-up until dependent services answer.

Example:
    >>> from helm_chartgen.helm import HelmDependency, ServiceWaitResolver
    >>> dep = HelmDependency(
    ...     version="12.1.0",
    ...     repository="https://charts.bitnami.com/bitnami",
    ...     waitForService="demo-db:5432",
    ... )
    >>> ServiceWaitResolver().resolve(dep).image
    'busybox:1.34.1'
"""

from __future__ import annotations

__version__ = "0.1.0"

__all__: list[str] = ["__version__"]
