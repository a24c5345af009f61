"""Translate federated subjects into Workforce Identity Federation principals.

Users become ``principal://`` identifiers and groups become
``principalSet://`` identifiers in the configured workforce pool. Anything
that is not federated, such as a service account or a system identity, is
returned untouched.

Example:
    >>> principal_identifier("my-pool", "alice@example.com")
    'principal://iam.googleapis.com/locations/global/workforcePools/my-pool/subject/alice@example.com'
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from wif_migrator.rbac.classify import classify_as_group, classify_as_user
from wif_migrator.schemas.bindings import RBAC_API_GROUP, Subject

if TYPE_CHECKING:
    from wif_migrator.schemas.rules import MigrationRules

_WORKFORCE_POOLS = "iam.googleapis.com/locations/global/workforcePools"


def principal_identifier(pool: str, local_name: str) -> str:
    """Build the identifier of a single workforce pool subject."""
    return f"principal://{_WORKFORCE_POOLS}/{pool}/subject/{local_name}"


def principal_set_identifier(pool: str, local_name: str) -> str:
    """Build the identifier of a workforce pool group."""
    return f"principalSet://{_WORKFORCE_POOLS}/{pool}/group/{local_name}"


def migrate_subject(subject: Subject, rules: MigrationRules) -> Subject:
    """Rewrite a subject to reference the workforce pool.

    The local name is not escaped or validated.

    Args:
        subject: Subject from the original binding.
        rules: Classification rules and target pool.

    Returns:
        A new User or Group subject for federated identities, otherwise
        ``subject`` itself.
    """
    user = classify_as_user(subject, rules)
    if user is not None:
        return Subject(
            apiGroup=RBAC_API_GROUP,
            kind="User",
            name=principal_identifier(rules.workforce_pool_name, user),
        )

    group = classify_as_group(subject, rules)
    if group is not None:
        return Subject(
            apiGroup=RBAC_API_GROUP,
            kind="Group",
            name=principal_set_identifier(rules.workforce_pool_name, group),
        )

    return subject


__all__ = ["migrate_subject", "principal_identifier", "principal_set_identifier"]
