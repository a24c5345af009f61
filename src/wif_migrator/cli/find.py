"""Find commands: list bindings that refer to federated users or groups.

This module builds the ``find-clusterrolebindings`` and
``find-rolebindings`` commands, which:
- Page through every binding of the kind in the cluster
- Keep bindings with at least one federated subject
- Print the survivors as a single typed list on stdout

Example:
    $ wif-migrator find-clusterrolebindings --user-include-suffix=@example.com
    $ wif-migrator find-rolebindings --kubeconfig ~/.kube/config \\
        --user-include-suffix=@example.com --groups-exclude-suffix=@groups.example.com
"""

from __future__ import annotations

from pathlib import Path

import click
import structlog

from wif_migrator.cli.common import build_subject_rules, output_file_option, rule_options, write_output
from wif_migrator.cli.utils import ExitCode, error_exit, info
from wif_migrator.cluster import DEFAULT_PAGE_SIZE, connect, list_bindings
from wif_migrator.errors import BindingListError, ClusterConnectionError
from wif_migrator.rbac.bindings import find_federated_bindings
from wif_migrator.schemas.bindings import BindingKind, BindingList

logger = structlog.get_logger(__name__)


def make_find_command(kind: BindingKind) -> click.Command:
    """Build the find command for one binding kind.

    Args:
        kind: Binding kind the command lists.

    Returns:
        Click command named ``find-<plural>``.
    """
    scope = "in all namespaces " if kind.namespaced else ""

    @click.command(
        name=f"find-{kind.plural}",
        help=f"Find {kind.value} objects {scope}that refer to federated users or groups.",
        epilog=f"""
Users are recognized by --user-include-prefix and --user-include-suffix.
Groups are recognized by --groups-include-prefix and are excluded when they
end with --groups-exclude-suffix. Names starting with system: are never
federated.

Examples:
    $ wif-migrator find-{kind.plural} --user-include-suffix=@example.com
    $ wif-migrator find-{kind.plural} --user-include-suffix=@example.com -o found.yaml
""",
        context_settings={"help_option_names": ["-h", "--help"]},
    )
    @click.option(
        "--kubeconfig",
        type=click.Path(exists=True, dir_okay=False, resolve_path=True, path_type=Path),
        default=None,
        help="Path to kubeconfig file (default: in-cluster, then ~/.kube/config).",
        metavar="PATH",
    )
    @click.option(
        "--context",
        type=str,
        default=None,
        help="Kubeconfig context to use (default: current context).",
        metavar="NAME",
    )
    @click.option(
        "--page-size",
        type=click.IntRange(min=1),
        default=DEFAULT_PAGE_SIZE,
        show_default=True,
        help="Bindings requested per API call.",
    )
    @output_file_option
    @rule_options
    def find_command(
        kubeconfig: Path | None,
        context: str | None,
        page_size: int,
        output_file: Path | None,
        user_include_prefix: str,
        user_include_suffix: str,
        groups_include_prefix: str,
        groups_exclude_suffix: str,
        require_groups_exclude_suffix: bool,
    ) -> None:
        """Find bindings of one kind that refer to federated identities."""
        rules = build_subject_rules(
            user_include_prefix=user_include_prefix,
            user_include_suffix=user_include_suffix,
            groups_include_prefix=groups_include_prefix,
            groups_exclude_suffix=groups_exclude_suffix,
            require_groups_exclude_suffix=require_groups_exclude_suffix,
        )

        if kubeconfig:
            info(f"Using kubeconfig: {kubeconfig}")

        try:
            rbac_api = connect(kubeconfig, context)
            federated = find_federated_bindings(
                list_bindings(rbac_api, kind, page_size=page_size),
                rules,
            )
        except ClusterConnectionError as e:
            error_exit(str(e), exit_code=ExitCode.NETWORK_ERROR)
        except BindingListError as e:
            error_exit(str(e), exit_code=ExitCode.NETWORK_ERROR)

        logger.info("federated_bindings_found", kind=kind.value, count=len(federated))
        info(f"Found {len(federated)} {kind.value}(s) referring to federated users or groups")
        write_output(BindingList.for_kind(kind, federated), output_file)

    return find_command


__all__: list[str] = ["make_find_command"]
