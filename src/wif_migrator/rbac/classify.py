"""Recognize RBAC subjects federated through Identity Service for GKE.

Identity Service for GKE passes the identity provider's user and group
names straight into RBAC, so a federated subject can only be told apart by
how its name is spelled. Classification is a pure function of the subject
and the rules.

Example:
    >>> from wif_migrator.schemas import Subject, SubjectRules
    >>> rules = SubjectRules(user_include_suffix="@example.com")
    >>> alice = Subject(
    ...     apiGroup="rbac.authorization.k8s.io", kind="User", name="alice@example.com"
    ... )
    >>> classify_as_user(alice, rules)
    'alice@example.com'
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from wif_migrator.schemas.bindings import RBAC_API_GROUP

if TYPE_CHECKING:
    from wif_migrator.schemas.bindings import Subject
    from wif_migrator.schemas.rules import SubjectRules

SYSTEM_PREFIX = "system:"
"""Names reserved for built-in Kubernetes identities; never federated."""


def _is_candidate(subject: Subject, kind: str) -> bool:
    return (
        subject.api_group == RBAC_API_GROUP
        and subject.kind == kind
        and not subject.name.startswith(SYSTEM_PREFIX)
    )


def classify_as_user(subject: Subject, rules: SubjectRules) -> str | None:
    """Return the local user name if the subject is a federated user.

    Args:
        subject: Binding subject to inspect.
        rules: Classification rules.

    Returns:
        The subject name with ``user_include_prefix`` removed (the suffix is
        kept), or None when the subject is not a federated user. An empty
        string is a valid local name.
    """
    if not _is_candidate(subject, "User"):
        return None
    name = subject.name
    if not name.startswith(rules.user_include_prefix):
        return None
    if not name.endswith(rules.user_include_suffix):
        return None
    return name.removeprefix(rules.user_include_prefix)


def classify_as_group(subject: Subject, rules: SubjectRules) -> str | None:
    """Return the local group name if the subject is a federated group.

    Every name ends with the empty string, so an empty
    ``groups_exclude_suffix`` excludes all groups.

    Args:
        subject: Binding subject to inspect.
        rules: Classification rules.

    Returns:
        The subject name with ``groups_include_prefix`` removed, or None
        when the subject is not a federated group.
    """
    if not _is_candidate(subject, "Group"):
        return None
    name = subject.name
    if not name.startswith(rules.groups_include_prefix):
        return None
    if name.endswith(rules.groups_exclude_suffix):
        return None
    return name.removeprefix(rules.groups_include_prefix)


def is_federated(subject: Subject, rules: SubjectRules) -> bool:
    """Check whether a subject is a federated user or group."""
    return (
        classify_as_user(subject, rules) is not None
        or classify_as_group(subject, rules) is not None
    )


__all__ = ["SYSTEM_PREFIX", "classify_as_group", "classify_as_user", "is_federated"]
