"""Subject classification and binding rewriting.

Example:
    >>> from wif_migrator.rbac import classify_as_user, migrate_subject
"""

from __future__ import annotations

from wif_migrator.rbac.bindings import (
    LAST_APPLIED_ANNOTATION,
    MIGRATED_NAME_SUFFIX,
    find_federated_bindings,
    has_federated_subject,
    rewrite_binding,
    rewrite_bindings,
    sanitize_binding,
)
from wif_migrator.rbac.classify import (
    SYSTEM_PREFIX,
    classify_as_group,
    classify_as_user,
    is_federated,
)
from wif_migrator.rbac.transform import (
    migrate_subject,
    principal_identifier,
    principal_set_identifier,
)

__all__ = [
    "LAST_APPLIED_ANNOTATION",
    "MIGRATED_NAME_SUFFIX",
    "SYSTEM_PREFIX",
    "classify_as_group",
    "classify_as_user",
    "find_federated_bindings",
    "has_federated_subject",
    "is_federated",
    "migrate_subject",
    "principal_identifier",
    "principal_set_identifier",
    "rewrite_binding",
    "rewrite_bindings",
    "sanitize_binding",
]
