"""Exception hierarchy for helm-chartgen.

Exception Hierarchy:
    HelmChartError (base)
    ├── ChartConfigError                # Chart configuration file invalid
    └── DependencyConfigurationError    # A dependency entry is unusable
        └── CommandTemplateError        # Wait command template missing or unresolved

Example:
    >>> from helm_chartgen.errors import CommandTemplateError
    >>> raise CommandTemplateError("postgresql", "port command template is empty")
    Traceback (most recent call last):
        ...
    CommandTemplateError: Dependency 'postgresql': port command template is empty
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from pathlib import Path


class HelmChartError(Exception):
    """Base exception for all chart generation errors.

    Allows callers (the CLI in particular) to catch every configuration
    problem with a single except clause.
    """

    pass


class ChartConfigError(HelmChartError):
    """Raised when a chart configuration file cannot be loaded.

    Attributes:
        path: The configuration file that failed to load.
        errors: Individual validation messages, one per failing field.
    """

    def __init__(
        self,
        message: str,
        *,
        path: Path | None = None,
        errors: list[str] | None = None,
    ) -> None:
        """Initialize ChartConfigError.

        Args:
            message: Summary of the failure.
            path: The configuration file that failed to load.
            errors: Individual validation messages.
        """
        self.path = path
        self.errors = errors or []
        super().__init__(message)


class DependencyConfigurationError(HelmChartError):
    """Raised when a Helm dependency entry cannot be rendered.

    Attributes:
        dependency: Key (or name) of the offending dependency.
        reason: What is wrong with it.
    """

    def __init__(self, dependency: str, reason: str) -> None:
        self.dependency = dependency
        self.reason = reason
        super().__init__(f"Dependency '{dependency}': {reason}")


class CommandTemplateError(DependencyConfigurationError):
    """Raised when a wait-for-service command cannot be built.

    Either the selected template is empty, or a placeholder is still
    present after substitution.
    """

    pass


__all__: list[str] = [
    "ChartConfigError",
    "CommandTemplateError",
    "DependencyConfigurationError",
    "HelmChartError",
]
