"""CLI output helpers and exit codes.

Errors and progress go to stderr so that stdout only carries generated
content (``chartgen helm wait`` prints YAML there).

Example:
    from helm_chartgen.cli.utils import error_exit, ExitCode

    if not path.exists():
        error_exit("Configuration not found", exit_code=ExitCode.FILE_NOT_FOUND, path=str(path))
"""

from __future__ import annotations

import sys
from enum import IntEnum
from typing import TYPE_CHECKING

import click

if TYPE_CHECKING:
    from typing import NoReturn


class ExitCode(IntEnum):
    """Exit codes for chartgen commands."""

    SUCCESS = 0
    """Command completed successfully."""

    GENERAL_ERROR = 1
    """Unexpected failure."""

    USAGE_ERROR = 2
    """Invalid arguments (raised by click)."""

    FILE_NOT_FOUND = 3
    """Configuration file not found."""

    VALIDATION_ERROR = 5
    """Configuration failed validation."""


def _format(prefix: str, message: str, context: dict[str, str | int | bool | None]) -> str:
    details = ", ".join(f"{k}={v}" for k, v in context.items() if v is not None)
    if details:
        return f"{prefix}: {message} ({details})"
    return f"{prefix}: {message}"


def error(message: str, **context: str | int | bool | None) -> None:
    """Print an error message to stderr.

    Example:
        error("Configuration not found", path="helm.yaml")
        # Output: Error: Configuration not found (path=helm.yaml)
    """
    click.echo(_format("Error", message, context), err=True)


def error_exit(
    message: str,
    exit_code: ExitCode = ExitCode.GENERAL_ERROR,
    **context: str | int | bool | None,
) -> NoReturn:
    """Print an error message to stderr and exit.

    Raises:
        SystemExit: Always, with ``exit_code``.
    """
    error(message, **context)
    sys.exit(exit_code)


def warn(message: str, **context: str | int | bool | None) -> None:
    """Print a warning message to stderr."""
    click.echo(_format("Warning", message, context), err=True)


def success(message: str) -> None:
    """Print a success message to stdout."""
    click.echo(message)


def info(message: str) -> None:
    """Print a progress message to stderr."""
    click.echo(message, err=True)


__all__: list[str] = [
    "ExitCode",
    "error",
    "error_exit",
    "info",
    "success",
    "warn",
]
