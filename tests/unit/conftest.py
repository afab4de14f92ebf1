"""Unit test fixtures for helm-chartgen.

Unit tests run without a cluster or Helm binary and only touch the
filesystem through ``tmp_path``.
"""

from __future__ import annotations

from pathlib import Path
from typing import Any

import pytest
import yaml


@pytest.fixture
def sample_config_data() -> dict[str, Any]:
    """Chart configuration as it appears in a YAML file."""
    return {
        "helm": {
            "name": "demo",
            "valuesRootAlias": "demo",
            "dependencies": {
                "postgresql": {
                    "version": "12.1.0",
                    "repository": "https://charts.bitnami.com/bitnami",
                    "condition": "postgresql.enabled",
                    "enabled": True,
                    "waitForService": "postgresql:5432",
                },
                "keycloak": {
                    "version": "21.0.0",
                    "repository": "https://charts.bitnami.com/bitnami",
                    "condition": "@.keycloak.enabled",
                    "waitForService": "keycloak",
                    "waitForServiceImage": "alpine:3.19",
                },
            },
        }
    }


@pytest.fixture
def sample_config_file(tmp_path: Path, sample_config_data: dict[str, Any]) -> Path:
    """Write the sample configuration to a temporary YAML file."""
    path = tmp_path / "helm.yaml"
    with path.open("w") as f:
        yaml.safe_dump(sample_config_data, f, sort_keys=False)
    return path
