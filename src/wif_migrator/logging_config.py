"""structlog configuration for the wif-migrator CLI.

Standard output carries the generated manifests, so log events are always
rendered to standard error.

Example:
    >>> configure_logging(verbose=True)
    >>> structlog.get_logger(__name__).debug("configured")  # doctest: +SKIP
"""

from __future__ import annotations

import logging
import sys
from typing import Any

import structlog


def _stderr_logger_factory(*_args: Any) -> structlog.PrintLogger:
    # Resolve sys.stderr per logger so redirected streams are honored.
    return structlog.PrintLogger(file=sys.stderr)


def configure_logging(verbose: bool = False) -> None:
    """Configure structlog for console output on stderr.

    Args:
        verbose: Emit DEBUG events. Otherwise only WARNING and above.
    """
    level = logging.DEBUG if verbose else logging.WARNING
    structlog.configure(
        processors=[
            structlog.processors.add_log_level,
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.dev.ConsoleRenderer(colors=False),
        ],
        wrapper_class=structlog.make_filtering_bound_logger(level),
        logger_factory=_stderr_logger_factory,
        cache_logger_on_first_use=False,
    )


__all__ = ["configure_logging"]
