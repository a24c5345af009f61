"""Read and write binding list manifests.

Rewrite commands read the output of a find command back in. The input is
checked against an explicit shape (exactly one document, the right list
kind, a valid schema) rather than left to whatever the YAML parser accepts.
JSON input works as well, since JSON is valid YAML.

Example:
    >>> import io
    >>> from wif_migrator.schemas import BindingKind
    >>> stream = io.StringIO("apiVersion: rbac.authorization.k8s.io/v1\\n"
    ...                      "kind: RoleBindingList\\nitems: []\\n")
    >>> load_binding_list(stream, BindingKind.ROLE_BINDING).items
    []
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

import structlog
import yaml
from pydantic import ValidationError

from wif_migrator.errors import ManifestError, OutputError
from wif_migrator.schemas.bindings import RBAC_API_VERSION, BindingList

if TYPE_CHECKING:
    from typing import TextIO

    from wif_migrator.schemas.bindings import BindingKind

logger = structlog.get_logger(__name__)


def _load_documents(stream: TextIO) -> list[Any]:
    try:
        # SECURITY: safe_load_all never constructs arbitrary Python objects
        return [doc for doc in yaml.safe_load_all(stream) if doc is not None]
    except yaml.YAMLError as e:
        raise ManifestError(f"Input is not valid YAML or JSON: {e}") from e


def load_binding_list(stream: TextIO, kind: BindingKind) -> BindingList:
    """Load a single binding list of the given kind.

    Args:
        stream: Text stream holding YAML or JSON.
        kind: Expected binding kind.

    Returns:
        The validated binding list.

    Raises:
        ManifestError: If the input is not exactly one ``<kind>List``
            document with a valid schema.
    """
    documents = _load_documents(stream)
    if len(documents) != 1:
        msg = f"Expected exactly one {kind.list_kind} document, found {len(documents)}"
        raise ManifestError(msg)

    document = documents[0]
    if not isinstance(document, dict):
        msg = f"Expected a {kind.list_kind} mapping, got {type(document).__name__}"
        raise ManifestError(msg)

    found_kind = document.get("kind")
    if found_kind != kind.list_kind:
        raise ManifestError(f"Input is a {found_kind!r}, not a {kind.list_kind}")

    api_version = document.get("apiVersion")
    if api_version != RBAC_API_VERSION:
        msg = f"Unsupported apiVersion {api_version!r}, expected {RBAC_API_VERSION}"
        raise ManifestError(msg)

    try:
        binding_list = BindingList.model_validate(document)
    except ValidationError as e:
        raise ManifestError(f"Invalid {kind.list_kind}: {e}") from e

    logger.debug("binding_list_loaded", kind=kind.list_kind, items=len(binding_list.items))
    return binding_list


def render_binding_list(binding_list: BindingList) -> str:
    """Render a binding list as block-style YAML.

    Args:
        binding_list: List to render.

    Returns:
        YAML text with keys in Kubernetes order.

    Raises:
        OutputError: If the list cannot be serialized.
    """
    try:
        return yaml.safe_dump(
            binding_list.to_k8s_manifest(),
            default_flow_style=False,
            sort_keys=False,
        )
    except yaml.YAMLError as e:
        raise OutputError(f"Cannot serialize {binding_list.kind}: {e}") from e


__all__ = ["load_binding_list", "render_binding_list"]
