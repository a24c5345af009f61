"""CLI utility functions and error handling.

This module provides shared utilities for the wif-migrator CLI:
- Exit code constants
- Error and warning output on stderr
- Informational output on stderr, keeping stdout for manifests

Example:
    from wif_migrator.cli.utils import error_exit, ExitCode

    if not documents:
        error_exit("No input", exit_code=ExitCode.VALIDATION_ERROR)
"""

from __future__ import annotations

import sys
from enum import IntEnum
from typing import TYPE_CHECKING

import click

if TYPE_CHECKING:
    from typing import NoReturn


class ExitCode(IntEnum):
    """Exit codes for CLI commands.

    Every failure is terminal for the invocation; the code tells scripts
    which stage failed.
    """

    SUCCESS = 0
    """Command completed successfully."""

    GENERAL_ERROR = 1
    """General error, including failures writing the output."""

    USAGE_ERROR = 2
    """Invalid usage (bad arguments, missing required options)."""

    VALIDATION_ERROR = 5
    """Input is not the expected binding list."""

    NETWORK_ERROR = 8
    """Kubernetes client setup or API call failed."""


def _format(prefix: str, message: str, context: dict[str, str | int | bool | None]) -> str:
    context_str = ", ".join(f"{k}={v}" for k, v in context.items() if v is not None)
    if context_str:
        return f"{prefix}: {message} ({context_str})"
    return f"{prefix}: {message}"


def error(message: str, **context: str | int | bool | None) -> None:
    """Print an error message to stderr.

    Args:
        message: Error message to display.
        **context: Optional context key-value pairs to include.

    Example:
        error("Listing failed", kind="RoleBinding")
        # Output: Error: Listing failed (kind=RoleBinding)
    """
    click.echo(_format("Error", message, context), err=True)


def error_exit(
    message: str,
    exit_code: ExitCode = ExitCode.GENERAL_ERROR,
    **context: str | int | bool | None,
) -> NoReturn:
    """Print an error message to stderr and exit with a code.

    Args:
        message: Error message to display.
        exit_code: Exit code to use (default: GENERAL_ERROR).
        **context: Optional context key-value pairs to include.

    Raises:
        SystemExit: Always exits with the specified code.
    """
    error(message, **context)
    sys.exit(exit_code)


def warn(message: str, **context: str | int | bool | None) -> None:
    """Print a warning message to stderr."""
    click.echo(_format("Warning", message, context), err=True)


# Alias for warn
warning = warn


def info(message: str) -> None:
    """Print an informational message to stderr.

    Used for progress and summaries that must not end up in a manifest
    redirected from stdout.
    """
    click.echo(message, err=True)


__all__: list[str] = ["ExitCode", "error", "error_exit", "info", "warn", "warning"]
