"""Subject classification rule sets.

The rules describe how Identity Service for GKE spelled federated identities
in RBAC subjects, and which Workforce Identity Pool they move to.

Example:
    >>> rules = MigrationRules(
    ...     user_include_suffix="@example.com",
    ...     groups_exclude_suffix="@groups.example.com",
    ...     workforce_pool_name="my-pool",
    ... )
    >>> rules.user_include_prefix
    ''
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field


class SubjectRules(BaseModel):
    """Prefix/suffix rules for recognizing federated users and groups.

    Attributes:
        user_include_prefix: Prefix a federated user name must start with.
            Stripped from the translated name.
        user_include_suffix: Suffix a federated user name must end with,
            typically the organization's e-mail domain.
        groups_include_prefix: Prefix a federated group name must start with.
            Stripped from the translated name.
        groups_exclude_suffix: Group names ending with this suffix are not
            federated (e.g. groups from Google Groups for RBAC). An empty
            value excludes every group.
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    user_include_prefix: str = Field(
        default="",
        description="Prefix for recognizing federated user identities",
    )
    user_include_suffix: str = Field(
        default="",
        description="Suffix for recognizing federated user identities",
    )
    groups_include_prefix: str = Field(
        default="",
        description="Prefix for recognizing federated group names",
    )
    groups_exclude_suffix: str = Field(
        default="",
        description="Suffix for excluding group names from federation",
    )

    @property
    def excludes_all_groups(self) -> bool:
        """True when the empty exclude suffix rules out every group."""
        return self.groups_exclude_suffix == ""


class MigrationRules(SubjectRules):
    """Classification rules plus the target Workforce Identity Pool.

    Attributes:
        workforce_pool_name: Pool that translated principals and principal
            sets reference.
    """

    workforce_pool_name: str = Field(
        ...,
        min_length=1,
        description="Workforce Identity Pool federating principals and groups into GCP",
    )


__all__ = ["MigrationRules", "SubjectRules"]
