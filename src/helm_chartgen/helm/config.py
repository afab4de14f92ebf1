"""Loading of the chart configuration file.

The configuration is YAML, either at the top level or nested under a
``helm:`` key so it can live in a larger build configuration file::

    helm:
      name: demo
      valuesRootAlias: app
      dependencies:
        postgresql:
          version: 12.1.0
          repository: https://charts.bitnami.com/bitnami
          condition: postgresql.enabled
          waitForService: postgresql:5432

Example:
    >>> from helm_chartgen.helm.config import load_chart_config
    >>> config = load_chart_config("helm.yaml")
    >>> list(config.dependencies)
    ['postgresql']
"""

from __future__ import annotations

from pathlib import Path
from typing import Any

import structlog
import yaml
from pydantic import ValidationError

from helm_chartgen.errors import ChartConfigError
from helm_chartgen.helm.schemas import HelmChartConfig

logger = structlog.get_logger(__name__)

HELM_CONFIG_KEY = "helm"


def load_chart_config(path: Path | str) -> HelmChartConfig:
    """Load and validate a chart configuration file.

    Args:
        path: Path to the YAML configuration file.

    Returns:
        Validated HelmChartConfig.

    Raises:
        FileNotFoundError: If the file does not exist.
        ChartConfigError: If the file is not valid YAML or fails validation.
    """
    path = Path(path)
    if not path.exists():
        msg = f"Chart configuration not found: {path}"
        raise FileNotFoundError(msg)

    try:
        with path.open() as f:
            raw = yaml.safe_load(f)
    except yaml.YAMLError as e:
        raise ChartConfigError(f"Invalid YAML in {path}: {e}", path=path) from e

    config = chart_config_from_dict(raw, path=path)
    logger.info(
        "helm.config.loaded",
        path=str(path),
        chart=config.name,
        dependencies=list(config.dependencies),
    )
    return config


def chart_config_from_dict(
    raw: Any,
    *,
    path: Path | None = None,
) -> HelmChartConfig:
    """Validate already parsed configuration data.

    Args:
        raw: Parsed YAML document.
        path: Source file, for error reporting.

    Returns:
        Validated HelmChartConfig.

    Raises:
        ChartConfigError: If the data is not a mapping or fails validation.
    """
    if not isinstance(raw, dict):
        raise ChartConfigError(
            "Chart configuration must be a mapping",
            path=path,
        )

    data = raw.get(HELM_CONFIG_KEY, raw)
    if not isinstance(data, dict):
        raise ChartConfigError(
            f"'{HELM_CONFIG_KEY}' section must be a mapping",
            path=path,
        )

    try:
        return HelmChartConfig.model_validate(data)
    except ValidationError as e:
        errors = [
            f"{'.'.join(str(loc) for loc in err['loc'])}: {err['msg']}"
            for err in e.errors()
        ]
        logger.error("helm.config.invalid", path=str(path) if path else None, errors=errors)
        raise ChartConfigError(
            f"Chart configuration failed validation: {len(errors)} error(s)",
            path=path,
            errors=errors,
        ) from e


__all__: list[str] = [
    "HELM_CONFIG_KEY",
    "chart_config_from_dict",
    "load_chart_config",
]
