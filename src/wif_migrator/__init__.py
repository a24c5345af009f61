"""wif-migrator: move GKE RBAC bindings to Workforce Identity Federation.

Finds ClusterRoleBindings and RoleBindings whose subjects were federated
through Identity Service for GKE, and rewrites copies of them that refer to
the same users and groups as Workforce Identity Federation principals.

Example:
    >>> from wif_migrator import MigrationRules, Subject, migrate_subject
    >>> rules = MigrationRules(
    ...     user_include_suffix="@example.com",
    ...     workforce_pool_name="my-pool",
    ... )
    >>> migrate_subject(
    ...     Subject(apiGroup="rbac.authorization.k8s.io", kind="User", name="alice@example.com"),
    ...     rules,
    ... ).name
    'principal://iam.googleapis.com/locations/global/workforcePools/my-pool/subject/alice@example.com'
"""

from __future__ import annotations

from wif_migrator.errors import (
    BindingListError,
    ClusterConnectionError,
    ManifestError,
    MigratorError,
    OutputError,
)
from wif_migrator.rbac import (
    classify_as_group,
    classify_as_user,
    find_federated_bindings,
    is_federated,
    migrate_subject,
    rewrite_binding,
    rewrite_bindings,
    sanitize_binding,
)
from wif_migrator.schemas import (
    Binding,
    BindingKind,
    BindingList,
    MigrationRules,
    Subject,
    SubjectRules,
)

__all__ = [
    # Schemas
    "Binding",
    "BindingKind",
    "BindingList",
    "MigrationRules",
    "Subject",
    "SubjectRules",
    # Classification and rewriting
    "classify_as_group",
    "classify_as_user",
    "find_federated_bindings",
    "is_federated",
    "migrate_subject",
    "rewrite_binding",
    "rewrite_bindings",
    "sanitize_binding",
    # Errors
    "BindingListError",
    "ClusterConnectionError",
    "ManifestError",
    "MigratorError",
    "OutputError",
]
