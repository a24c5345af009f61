"""Exception hierarchy for wif-migrator.

Exception Hierarchy:
    MigratorError (base)
    ├── ClusterConnectionError  # kubeconfig or client could not be set up
    ├── BindingListError        # listing bindings from the cluster failed
    ├── ManifestError           # input is not the expected binding list
    └── OutputError             # rendering or writing the result failed

Classification and rewriting never raise; every error here is terminal for
the invocation.

Example:
    >>> from wif_migrator.errors import ManifestError
    >>> raise ManifestError("expected exactly one document, found 2")
    Traceback (most recent call last):
        ...
    ManifestError: expected exactly one document, found 2
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from wif_migrator.schemas.bindings import BindingKind


class MigratorError(Exception):
    """Base exception for all wif-migrator errors."""

    pass


class ClusterConnectionError(MigratorError):
    """Raised when the Kubernetes client cannot be configured."""

    pass


class BindingListError(MigratorError):
    """Raised when a page of bindings cannot be fetched.

    Attributes:
        kind: Binding kind being listed.
        reason: Sanitized failure reason.
    """

    def __init__(self, kind: BindingKind, reason: str) -> None:
        """Initialize BindingListError.

        Args:
            kind: Binding kind being listed.
            reason: Sanitized failure reason.
        """
        self.kind = kind
        self.reason = reason
        super().__init__(f"Listing {kind.value}s failed: {reason}")


class ManifestError(MigratorError):
    """Raised when input does not hold exactly one binding list of the right kind."""

    pass


class OutputError(MigratorError):
    """Raised when the resulting binding list cannot be written."""

    pass


__all__ = [
    "BindingListError",
    "ClusterConnectionError",
    "ManifestError",
    "MigratorError",
    "OutputError",
]
