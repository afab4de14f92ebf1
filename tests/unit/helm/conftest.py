"""Pytest fixtures for Helm unit tests."""

from __future__ import annotations

import pytest

from helm_chartgen.helm.schemas import HelmChartConfig, HelmDependency

BITNAMI = "https://charts.bitnami.com/bitnami"


@pytest.fixture
def postgresql_dependency() -> HelmDependency:
    """PostgreSQL dependency waiting on its service port."""
    return HelmDependency(
        version="12.1.0",
        repository=BITNAMI,
        condition="postgresql.enabled",
        enabled=True,
        wait_for_service="postgresql:5432",
    )


@pytest.fixture
def redis_dependency() -> HelmDependency:
    """Redis dependency with alias, tags and a DNS-only wait."""
    return HelmDependency(
        name="redis",
        version="17.3.7",
        repository=BITNAMI,
        alias="cache",
        tags=["cache", "optional"],
        enabled=False,
        wait_for_service="cache-master",
    )


@pytest.fixture
def plain_dependency() -> HelmDependency:
    """Dependency with only the required fields."""
    return HelmDependency(version="1.0.0", repository="oci://registry.example.com/charts")


@pytest.fixture
def sample_chart_config(
    postgresql_dependency: HelmDependency,
    redis_dependency: HelmDependency,
    plain_dependency: HelmDependency,
) -> HelmChartConfig:
    """Chart configuration with three dependencies in a fixed order."""
    return HelmChartConfig(
        name="demo",
        version="1.2.0",
        dependencies={
            "postgresql": postgresql_dependency,
            "redis": redis_dependency,
            "metrics": plain_dependency,
        },
    )
