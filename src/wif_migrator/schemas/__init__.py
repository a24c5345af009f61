"""Pydantic schemas for RBAC bindings and subject classification rules."""

from __future__ import annotations

from wif_migrator.schemas.bindings import (
    RBAC_API_GROUP,
    RBAC_API_VERSION,
    Binding,
    BindingKind,
    BindingList,
    ObjectMeta,
    RoleRef,
    Subject,
)
from wif_migrator.schemas.rules import MigrationRules, SubjectRules

__all__ = [
    "RBAC_API_GROUP",
    "RBAC_API_VERSION",
    "Binding",
    "BindingKind",
    "BindingList",
    "MigrationRules",
    "ObjectMeta",
    "RoleRef",
    "Subject",
    "SubjectRules",
]
