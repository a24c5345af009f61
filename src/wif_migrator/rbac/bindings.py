"""Select and rewrite bindings that refer to federated identities.

Rewritten bindings are new objects: cluster-assigned identity is cleared and
the name gets a ``-wfidf`` suffix, so applying them creates a migrated
counterpart next to the original instead of overwriting it.

Example:
    >>> from wif_migrator.rbac.bindings import find_federated_bindings, rewrite_bindings
    >>> federated = find_federated_bindings(bindings, rules)  # doctest: +SKIP
    >>> migrated = rewrite_bindings(federated, migration_rules)  # doctest: +SKIP
"""

from __future__ import annotations

from typing import TYPE_CHECKING

import structlog

from wif_migrator.rbac.classify import is_federated
from wif_migrator.rbac.transform import migrate_subject

if TYPE_CHECKING:
    from collections.abc import Iterable

    from wif_migrator.schemas.bindings import Binding
    from wif_migrator.schemas.rules import MigrationRules, SubjectRules

logger = structlog.get_logger(__name__)

MIGRATED_NAME_SUFFIX = "-wfidf"
"""Appended to the name of every rewritten binding."""

LAST_APPLIED_ANNOTATION = "kubectl.kubernetes.io/last-applied-configuration"


def has_federated_subject(binding: Binding, rules: SubjectRules) -> bool:
    """Check whether any subject of the binding is federated."""
    return any(is_federated(subject, rules) for subject in binding.subjects or [])


def find_federated_bindings(
    bindings: Iterable[Binding],
    rules: SubjectRules,
) -> list[Binding]:
    """Keep bindings with at least one federated subject.

    Args:
        bindings: Bindings in enumeration order.
        rules: Classification rules.

    Returns:
        Matching bindings in input order. Bindings without subjects are
        never kept.
    """
    federated: list[Binding] = []
    for binding in bindings:
        if has_federated_subject(binding, rules):
            federated.append(binding)
        else:
            logger.debug("binding_skipped", binding=binding.metadata.name)
    return federated


def sanitize_binding(binding: Binding) -> Binding:
    """Return an independent copy stripped of cluster-assigned metadata.

    Removes the last-applied-configuration annotation, creation timestamp,
    managed fields, resource version and UID, and renames the binding to
    ``<name>-wfidf``.

    Args:
        binding: Binding as found in the cluster.

    Returns:
        Deep copy of ``binding``; the input is not modified.
    """
    metadata = binding.metadata
    annotations = {
        key: value
        for key, value in (metadata.annotations or {}).items()
        if key != LAST_APPLIED_ANNOTATION
    }
    sanitized_metadata = metadata.model_copy(
        deep=True,
        update={
            "name": f"{metadata.name}{MIGRATED_NAME_SUFFIX}",
            "annotations": annotations or None,
            "creation_timestamp": None,
            "managed_fields": None,
            "resource_version": None,
            "uid": None,
        },
    )
    return binding.model_copy(deep=True, update={"metadata": sanitized_metadata})


def rewrite_binding(binding: Binding, rules: MigrationRules) -> Binding:
    """Sanitize a binding and migrate each of its subjects.

    Args:
        binding: Binding as found in the cluster.
        rules: Classification rules and target pool.

    Returns:
        Rewritten copy with subjects in the original order.
    """
    sanitized = sanitize_binding(binding)
    if not binding.subjects:
        return sanitized

    subjects = [migrate_subject(subject, rules) for subject in binding.subjects]
    logger.debug(
        "binding_rewritten",
        binding=binding.metadata.name,
        rewritten_as=sanitized.metadata.name,
        subjects=len(subjects),
    )
    return sanitized.model_copy(update={"subjects": subjects})


def rewrite_bindings(bindings: Iterable[Binding], rules: MigrationRules) -> list[Binding]:
    """Rewrite every binding, preserving order."""
    return [rewrite_binding(binding, rules) for binding in bindings]


__all__ = [
    "LAST_APPLIED_ANNOTATION",
    "MIGRATED_NAME_SUFFIX",
    "find_federated_bindings",
    "has_federated_subject",
    "rewrite_binding",
    "rewrite_bindings",
    "sanitize_binding",
]
