"""Kubernetes access for the find commands.

Connects with the kubernetes client and pages through ClusterRoleBindings
or RoleBindings (across all namespaces) using the API server's continue
token. Pages are fetched one after another; a failure on any page aborts the
listing.

Example:
    >>> from wif_migrator.cluster import connect, list_bindings
    >>> rbac_api = connect(kubeconfig=Path("~/.kube/config").expanduser())  # doctest: +SKIP
    >>> bindings = list(list_bindings(rbac_api, BindingKind.ROLE_BINDING))  # doctest: +SKIP
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

import structlog
from kubernetes import client
from kubernetes import config as k8s_config
from kubernetes.client.rest import ApiException
from pydantic import ValidationError
from urllib3.exceptions import HTTPError

from wif_migrator.errors import BindingListError, ClusterConnectionError
from wif_migrator.schemas.bindings import Binding, BindingKind

if TYPE_CHECKING:
    from collections.abc import Iterator
    from pathlib import Path

logger = structlog.get_logger(__name__)

DEFAULT_PAGE_SIZE = 500
"""Bindings requested per list call."""


def connect(
    kubeconfig: Path | None = None,
    context: str | None = None,
) -> client.RbacAuthorizationV1Api:
    """Load Kubernetes configuration and return an RBAC API client.

    With an explicit kubeconfig or context the kubeconfig file is used.
    Otherwise in-cluster configuration is tried first, falling back to the
    default kubeconfig (``$KUBECONFIG`` or ``~/.kube/config``).

    Args:
        kubeconfig: Path to a kubeconfig file.
        context: Kubeconfig context to use instead of the current one.

    Returns:
        RbacAuthorizationV1Api client.

    Raises:
        ClusterConnectionError: If no usable configuration is found.
    """
    try:
        _load_kubeconfig(kubeconfig, context)
        rbac_api = client.RbacAuthorizationV1Api()
    except (k8s_config.ConfigException, OSError, ValueError) as e:
        raise ClusterConnectionError(f"Cannot initialize Kubernetes client: {e}") from e

    logger.debug("kubernetes_client_ready", kubeconfig=str(kubeconfig) if kubeconfig else None)
    return rbac_api


def _load_kubeconfig(kubeconfig: Path | None, context: str | None) -> None:
    if kubeconfig or context:
        k8s_config.load_kube_config(
            config_file=str(kubeconfig) if kubeconfig else None,
            context=context,
        )
        return

    try:
        k8s_config.load_incluster_config()
    except k8s_config.ConfigException:
        k8s_config.load_kube_config()


def sanitize_k8s_api_error(exc: Exception) -> str:
    """Sanitize a Kubernetes API exception for display.

    Keeps only status code and reason, never the response body or headers.

    Args:
        exc: Exception from the kubernetes client.

    Returns:
        Message safe to print.
    """
    status = getattr(exc, "status", None)
    reason = getattr(exc, "reason", None)

    if status is not None and reason is not None:
        return f"{reason} (HTTP {status})"
    if reason is not None:
        return str(reason)
    return type(exc).__name__


def _list_function(rbac_api: Any, kind: BindingKind) -> Any:
    if kind.namespaced:
        return rbac_api.list_role_binding_for_all_namespaces
    return rbac_api.list_cluster_role_binding


def list_bindings(
    rbac_api: Any,
    kind: BindingKind,
    page_size: int = DEFAULT_PAGE_SIZE,
) -> Iterator[Binding]:
    """Yield every binding of a kind, one page at a time.

    Args:
        rbac_api: RbacAuthorizationV1Api client.
        kind: Binding kind to list.
        page_size: Number of bindings requested per page.

    Yields:
        Bindings in the order the API server returns them.

    Raises:
        BindingListError: If any page cannot be fetched or decoded.
    """
    list_page = _list_function(rbac_api, kind)
    serializer = client.ApiClient()
    continue_token: str | None = None
    page = 0

    while True:
        kwargs: dict[str, Any] = {"limit": page_size}
        if continue_token:
            kwargs["_continue"] = continue_token
        try:
            response = list_page(**kwargs)
        except (ApiException, HTTPError) as e:
            raise BindingListError(kind, sanitize_k8s_api_error(e)) from e

        page += 1
        items = response.items or []
        logger.debug("binding_page_listed", kind=kind.value, page=page, count=len(items))

        for item in items:
            try:
                binding = Binding.model_validate(serializer.sanitize_for_serialization(item))
            except ValidationError as e:
                raise BindingListError(kind, f"unexpected object on page {page}: {e}") from e
            yield binding

        metadata = response.metadata
        continue_token = getattr(metadata, "_continue", None) if metadata else None
        if not continue_token:
            break


__all__ = [
    "DEFAULT_PAGE_SIZE",
    "connect",
    "list_bindings",
    "sanitize_k8s_api_error",
]
