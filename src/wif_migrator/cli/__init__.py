"""Command-line interface for wif-migrator.

Exit Codes:
    0: Success
    1: General error (including output failures)
    2: Usage error (missing or invalid options)
    5: Input is not the expected binding list
    8: Kubernetes client setup or API call failed
"""

from __future__ import annotations

from wif_migrator.cli.main import build_cli, main
from wif_migrator.cli.utils import ExitCode, error, error_exit, info, warn

__all__: list[str] = [
    # Entry points
    "build_cli",
    "main",
    # Utilities
    "ExitCode",
    "error",
    "error_exit",
    "info",
    "warn",
]
