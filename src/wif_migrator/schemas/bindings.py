"""RBAC binding schemas for ClusterRoleBinding and RoleBinding objects.

This module defines the Pydantic models the migrator reads from the cluster
or from a previously written manifest, and writes back out. Field names use
the Python convention; the Kubernetes camelCase names are accepted and
emitted through aliases.

Unknown keys are kept (``extra="allow"``) so that labels, generation and
other fields the migrator does not look at survive a find/rewrite round trip.

Example:
    >>> binding = Binding.model_validate(
    ...     {
    ...         "metadata": {"name": "admins"},
    ...         "roleRef": {
    ...             "apiGroup": "rbac.authorization.k8s.io",
    ...             "kind": "ClusterRole",
    ...             "name": "cluster-admin",
    ...         },
    ...         "subjects": [
    ...             {
    ...                 "apiGroup": "rbac.authorization.k8s.io",
    ...                 "kind": "User",
    ...                 "name": "alice@example.com",
    ...             }
    ...         ],
    ...     }
    ... )
    >>> binding.subjects[0].kind
    'User'
"""

from __future__ import annotations

from datetime import datetime
from enum import Enum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field

RBAC_API_GROUP = "rbac.authorization.k8s.io"
"""API group of RBAC objects and of User/Group subjects."""

RBAC_API_VERSION = f"{RBAC_API_GROUP}/v1"
"""apiVersion written on every emitted list and binding."""


_K8S_MODEL_CONFIG = ConfigDict(frozen=True, extra="allow", populate_by_name=True)


class BindingKind(str, Enum):
    """RBAC binding kinds the migrator knows how to find and rewrite.

    Each member drives one find/rewrite command pair.
    """

    CLUSTER_ROLE_BINDING = "ClusterRoleBinding"
    ROLE_BINDING = "RoleBinding"

    @property
    def list_kind(self) -> str:
        """Kind of the list object holding bindings of this kind."""
        return f"{self.value}List"

    @property
    def plural(self) -> str:
        """Lower-case plural resource name (e.g. ``rolebindings``)."""
        return f"{self.value.lower()}s"

    @property
    def namespaced(self) -> bool:
        """Whether bindings of this kind live in a namespace."""
        return self is BindingKind.ROLE_BINDING


class Subject(BaseModel):
    """Identity reference inside a binding.

    Attributes:
        kind: Subject type (``User``, ``Group`` or ``ServiceAccount``).
        name: Identity name. Its structure encodes the identity.
        api_group: API group; ``rbac.authorization.k8s.io`` for users and
            groups, unset for service accounts.
        namespace: Namespace of a ServiceAccount subject.
    """

    model_config = _K8S_MODEL_CONFIG

    kind: str
    name: str
    api_group: str | None = Field(default=None, alias="apiGroup")
    namespace: str | None = None


class RoleRef(BaseModel):
    """Reference to the Role or ClusterRole a binding grants."""

    model_config = _K8S_MODEL_CONFIG

    api_group: str = Field(default=RBAC_API_GROUP, alias="apiGroup")
    kind: str
    name: str


class ObjectMeta(BaseModel):
    """Object metadata.

    Only the fields the sanitizer clears are modelled explicitly; the rest
    are carried through as extra keys.
    """

    model_config = _K8S_MODEL_CONFIG

    name: str
    namespace: str | None = None
    uid: str | None = None
    resource_version: str | None = Field(default=None, alias="resourceVersion")
    creation_timestamp: datetime | str | None = Field(default=None, alias="creationTimestamp")
    labels: dict[str, str] | None = None
    annotations: dict[str, str] | None = None
    managed_fields: list[dict[str, Any]] | None = Field(default=None, alias="managedFields")


class Binding(BaseModel):
    """A ClusterRoleBinding or RoleBinding.

    Both kinds share this shape; only the presence of
    ``metadata.namespace`` differs.
    """

    model_config = _K8S_MODEL_CONFIG

    api_version: str | None = Field(default=None, alias="apiVersion")
    kind: str | None = None
    metadata: ObjectMeta
    role_ref: RoleRef = Field(alias="roleRef")
    subjects: list[Subject] | None = None


class BindingList(BaseModel):
    """A ClusterRoleBindingList or RoleBindingList.

    Example:
        >>> empty = BindingList.for_kind(BindingKind.ROLE_BINDING, [])
        >>> empty.kind
        'RoleBindingList'
    """

    model_config = _K8S_MODEL_CONFIG

    api_version: str = Field(default=RBAC_API_VERSION, alias="apiVersion")
    kind: str
    metadata: dict[str, Any] = Field(default_factory=dict)
    items: list[Binding] = Field(default_factory=list)

    @classmethod
    def for_kind(cls, kind: BindingKind, items: list[Binding]) -> BindingList:
        """Build a typed list whose items carry apiVersion and kind.

        Args:
            kind: Kind of every binding in ``items``.
            items: Bindings to wrap.

        Returns:
            A list object ``kubectl apply -f`` accepts.
        """
        typed_items = [
            item.model_copy(update={"api_version": RBAC_API_VERSION, "kind": kind.value})
            for item in items
        ]
        return cls(apiVersion=RBAC_API_VERSION, kind=kind.list_kind, items=typed_items)

    def to_k8s_manifest(self) -> dict[str, Any]:
        """Convert to a K8s manifest dict, omitting unset fields.

        Returns:
            Dictionary with camelCase keys, ready for YAML serialization.
        """
        return self.model_dump(mode="json", by_alias=True, exclude_none=True)


__all__ = [
    "RBAC_API_GROUP",
    "RBAC_API_VERSION",
    "Binding",
    "BindingKind",
    "BindingList",
    "ObjectMeta",
    "RoleRef",
    "Subject",
]
