"""Shared pytest fixtures for wif-migrator tests.

Unit tests run without a cluster: the kubernetes API is replaced with
MagicMock fakes that return pages of plain binding dictionaries.

NOTE: Do NOT add __init__.py to test directories - pytest uses importlib mode
which can cause namespace collisions with __init__.py files.
"""

from __future__ import annotations

from types import SimpleNamespace
from typing import TYPE_CHECKING, Any
from unittest.mock import MagicMock

import pytest
import structlog
from click.testing import CliRunner

if TYPE_CHECKING:
    from collections.abc import Callable, Generator

RBAC_GROUP = "rbac.authorization.k8s.io"


def _make_subject(kind: str, name: str, **extra: Any) -> dict[str, Any]:
    """Build a subject dictionary as the API server returns it."""
    subject: dict[str, Any] = {"kind": kind, "name": name}
    if kind in ("User", "Group"):
        subject["apiGroup"] = RBAC_GROUP
    subject.update(extra)
    return subject


def _make_binding(
    name: str,
    subjects: list[dict[str, Any]] | None,
    namespace: str | None = None,
    **metadata: Any,
) -> dict[str, Any]:
    """Build a binding dictionary with cluster-assigned metadata."""
    meta: dict[str, Any] = {
        "name": name,
        "uid": f"uid-{name}",
        "resourceVersion": "12345",
        "creationTimestamp": "2024-05-01T10:00:00Z",
        "managedFields": [{"manager": "kubectl", "operation": "Update"}],
    }
    if namespace is not None:
        meta["namespace"] = namespace
    meta.update(metadata)
    binding: dict[str, Any] = {
        "metadata": meta,
        "roleRef": {"apiGroup": RBAC_GROUP, "kind": "ClusterRole", "name": "view"},
    }
    if subjects is not None:
        binding["subjects"] = subjects
    return binding


def _make_page(items: list[dict[str, Any]], continue_token: str | None = None) -> SimpleNamespace:
    """Build a fake list response page."""
    return SimpleNamespace(items=items, metadata=SimpleNamespace(_continue=continue_token))


@pytest.fixture(autouse=True)
def reset_structlog() -> Generator[None, None, None]:
    """Reset structlog configuration after each test."""
    yield
    structlog.reset_defaults()


@pytest.fixture
def cli_runner() -> CliRunner:
    """Provide a Click CLI test runner.

    Returns:
        CliRunner instance for testing Click commands.
    """
    return CliRunner()


@pytest.fixture
def federated_user() -> dict[str, Any]:
    """A user federated through Identity Service for GKE."""
    return _make_subject("User", "alice@example.com")


@pytest.fixture
def service_account() -> dict[str, Any]:
    """A ServiceAccount subject that must never be rewritten."""
    return _make_subject("ServiceAccount", "deployer", namespace="ci")


@pytest.fixture
def fake_rbac_api() -> MagicMock:
    """Provide a fake RbacAuthorizationV1Api with no bindings."""
    api = MagicMock()
    api.list_cluster_role_binding.return_value = _make_page([])
    api.list_role_binding_for_all_namespaces.return_value = _make_page([])
    return api


@pytest.fixture
def make_subject() -> Callable[..., dict[str, Any]]:
    """Provide a factory for subject dictionaries."""
    return _make_subject


@pytest.fixture
def make_binding() -> Callable[..., dict[str, Any]]:
    """Provide a factory for binding dictionaries."""
    return _make_binding


@pytest.fixture
def make_page() -> Callable[..., SimpleNamespace]:
    """Provide a factory for fake list response pages."""
    return _make_page
