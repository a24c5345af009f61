"""Unit tests for Kubernetes access.

The RBAC API is a MagicMock; no cluster is needed.
"""

from __future__ import annotations

from collections.abc import Callable, Iterator
from pathlib import Path
from types import SimpleNamespace
from typing import Any
from unittest.mock import MagicMock, call, patch

import pytest
from kubernetes.client.rest import ApiException
from kubernetes.config import ConfigException
from urllib3.exceptions import MaxRetryError

from wif_migrator.cluster import (
    DEFAULT_PAGE_SIZE,
    connect,
    list_bindings,
    sanitize_k8s_api_error,
)
from wif_migrator.errors import BindingListError, ClusterConnectionError
from wif_migrator.schemas import BindingKind


@pytest.fixture
def mock_k8s_config() -> Iterator[MagicMock]:
    """Patch kubeconfig loading, keeping the real ConfigException type."""
    with patch("wif_migrator.cluster.k8s_config") as mock_config:
        mock_config.ConfigException = ConfigException
        yield mock_config


class TestConnect:
    """Tests for connect."""

    def test_explicit_kubeconfig_and_context(self, mock_k8s_config: MagicMock, tmp_path: Path) -> None:
        """Test an explicit kubeconfig skips in-cluster configuration."""
        kubeconfig = tmp_path / "config"

        connect(kubeconfig=kubeconfig, context="staging")

        mock_k8s_config.load_kube_config.assert_called_once_with(
            config_file=str(kubeconfig),
            context="staging",
        )
        mock_k8s_config.load_incluster_config.assert_not_called()

    def test_context_only_uses_default_kubeconfig(self, mock_k8s_config: MagicMock) -> None:
        """Test a context alone selects it from the default kubeconfig."""
        connect(context="staging")

        mock_k8s_config.load_kube_config.assert_called_once_with(config_file=None, context="staging")

    def test_in_cluster_first(self, mock_k8s_config: MagicMock) -> None:
        """Test in-cluster configuration is preferred when nothing is given."""
        connect()

        mock_k8s_config.load_incluster_config.assert_called_once_with()
        mock_k8s_config.load_kube_config.assert_not_called()

    def test_falls_back_to_default_kubeconfig(self, mock_k8s_config: MagicMock) -> None:
        """Test the default kubeconfig is used outside a cluster."""
        mock_k8s_config.load_incluster_config.side_effect = ConfigException("not in cluster")

        connect()

        mock_k8s_config.load_kube_config.assert_called_once_with()

    @pytest.mark.parametrize(
        "exc",
        [
            ConfigException("Invalid kube-config file. No configuration found."),
            FileNotFoundError("/nope/config"),
        ],
    )
    def test_configuration_errors_wrapped(self, mock_k8s_config: MagicMock, exc: Exception) -> None:
        """Test loader failures become ClusterConnectionError."""
        mock_k8s_config.load_incluster_config.side_effect = ConfigException("not in cluster")
        mock_k8s_config.load_kube_config.side_effect = exc

        with pytest.raises(ClusterConnectionError, match="Cannot initialize Kubernetes client"):
            connect()


class TestListBindings:
    """Tests for list_bindings."""

    def test_follows_continue_token(
        self,
        fake_rbac_api: MagicMock,
        make_binding: Callable[..., dict[str, Any]],
        make_page: Callable[..., SimpleNamespace],
        federated_user: dict[str, Any],
    ) -> None:
        """Test every page is fetched in order until the token runs out."""
        fake_rbac_api.list_cluster_role_binding.side_effect = [
            make_page([make_binding("a", [federated_user])], continue_token="page-2"),
            make_page([make_binding("b", None), make_binding("c", [federated_user])]),
        ]

        bindings = list(list_bindings(fake_rbac_api, BindingKind.CLUSTER_ROLE_BINDING, page_size=1))

        assert [b.metadata.name for b in bindings] == ["a", "b", "c"]
        assert fake_rbac_api.list_cluster_role_binding.call_args_list == [
            call(limit=1),
            call(limit=1, _continue="page-2"),
        ]

    def test_default_page_size(self, fake_rbac_api: MagicMock) -> None:
        """Test the default page size is sent as the limit."""
        list(list_bindings(fake_rbac_api, BindingKind.CLUSTER_ROLE_BINDING))

        fake_rbac_api.list_cluster_role_binding.assert_called_once_with(limit=DEFAULT_PAGE_SIZE)

    def test_role_bindings_listed_across_namespaces(
        self,
        fake_rbac_api: MagicMock,
        make_binding: Callable[..., dict[str, Any]],
        make_page: Callable[..., SimpleNamespace],
        federated_user: dict[str, Any],
    ) -> None:
        """Test RoleBindings come from the all-namespaces endpoint."""
        fake_rbac_api.list_role_binding_for_all_namespaces.return_value = make_page(
            [make_binding("viewers", [federated_user], namespace="team-a")]
        )

        bindings = list(list_bindings(fake_rbac_api, BindingKind.ROLE_BINDING))

        assert bindings[0].metadata.namespace == "team-a"
        fake_rbac_api.list_cluster_role_binding.assert_not_called()

    def test_empty_page_items(self, fake_rbac_api: MagicMock) -> None:
        """Test a page with no items ends the listing."""
        fake_rbac_api.list_cluster_role_binding.return_value = SimpleNamespace(
            items=None,
            metadata=None,
        )

        assert list(list_bindings(fake_rbac_api, BindingKind.CLUSTER_ROLE_BINDING)) == []

    def test_api_error_on_later_page_aborts(
        self,
        fake_rbac_api: MagicMock,
        make_binding: Callable[..., dict[str, Any]],
        make_page: Callable[..., SimpleNamespace],
        federated_user: dict[str, Any],
    ) -> None:
        """Test a failing page raises instead of returning a partial listing."""
        fake_rbac_api.list_cluster_role_binding.side_effect = [
            make_page([make_binding("a", [federated_user])], continue_token="page-2"),
            ApiException(status=410, reason="Gone"),
        ]

        with pytest.raises(BindingListError, match=r"Gone \(HTTP 410\)") as exc_info:
            list(list_bindings(fake_rbac_api, BindingKind.CLUSTER_ROLE_BINDING))

        assert exc_info.value.kind is BindingKind.CLUSTER_ROLE_BINDING

    def test_transport_error_wrapped(self, fake_rbac_api: MagicMock) -> None:
        """Test connection failures become BindingListError."""
        fake_rbac_api.list_role_binding_for_all_namespaces.side_effect = MaxRetryError(
            pool=None,
            url="/apis/rbac.authorization.k8s.io/v1/rolebindings",
        )

        with pytest.raises(BindingListError, match="Listing RoleBindings failed"):
            list(list_bindings(fake_rbac_api, BindingKind.ROLE_BINDING))

    def test_malformed_item_wrapped(
        self,
        fake_rbac_api: MagicMock,
        make_page: Callable[..., SimpleNamespace],
    ) -> None:
        """Test an item that is not a binding becomes BindingListError."""
        fake_rbac_api.list_cluster_role_binding.return_value = make_page([{"metadata": {}}])

        with pytest.raises(BindingListError, match="unexpected object on page 1"):
            list(list_bindings(fake_rbac_api, BindingKind.CLUSTER_ROLE_BINDING))


class TestSanitizeK8sApiError:
    """Tests for sanitize_k8s_api_error."""

    def test_status_and_reason(self) -> None:
        """Test status and reason are shown without the body."""
        exc = ApiException(status=403, reason="Forbidden")
        exc.body = '{"message": "secret details"}'

        message = sanitize_k8s_api_error(exc)

        assert message == "Forbidden (HTTP 403)"
        assert "secret" not in message

    def test_reason_only(self) -> None:
        """Test a reason without a status is shown alone."""
        assert sanitize_k8s_api_error(SimpleNamespace(reason="timeout")) == "timeout"  # type: ignore[arg-type]

    def test_falls_back_to_type_name(self) -> None:
        """Test exceptions without status or reason show their type."""
        assert sanitize_k8s_api_error(MaxRetryError(pool=None, url="/")) == "MaxRetryError"
