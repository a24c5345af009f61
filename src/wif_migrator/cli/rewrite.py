"""Rewrite commands: migrate found bindings to Workforce Identity Federation.

This module builds the ``rewrite-clusterrolebindings`` and
``rewrite-rolebindings`` commands, which:
- Read a binding list written by the matching find command
- Copy each binding under a ``-wfidf`` name, without cluster-assigned metadata
- Point federated users and groups at the workforce pool

The result is meant to be reviewed and then applied with ``kubectl apply``.

Example:
    $ wif-migrator find-rolebindings --user-include-suffix=@example.com \\
        | wif-migrator rewrite-rolebindings --user-include-suffix=@example.com \\
            --workforce-pool-name=my-pool
"""

from __future__ import annotations

from pathlib import Path
from typing import TextIO

import click

from wif_migrator.cli.common import (
    ENVVAR_PREFIX,
    build_migration_rules,
    build_subject_rules,
    output_file_option,
    require_non_empty,
    rule_options,
    write_output,
)
from wif_migrator.cli.utils import ExitCode, error_exit, info
from wif_migrator.errors import ManifestError
from wif_migrator.manifests import load_binding_list
from wif_migrator.rbac.bindings import rewrite_bindings
from wif_migrator.schemas.bindings import BindingKind, BindingList


def make_rewrite_command(kind: BindingKind) -> click.Command:
    """Build the rewrite command for one binding kind.

    Args:
        kind: Binding kind the command rewrites.

    Returns:
        Click command named ``rewrite-<plural>``.
    """

    @click.command(
        name=f"rewrite-{kind.plural}",
        help=f"Read a {kind.list_kind} and output a migrated copy on stdout.",
        epilog=f"""
Reads a {kind.list_kind} produced by find-{kind.plural}. Federated users
become principal:// identifiers and federated groups become principalSet://
identifiers in the workforce pool. Other subjects are copied as-is.

Examples:
    $ wif-migrator rewrite-{kind.plural} --user-include-suffix=@example.com \\
        --workforce-pool-name=my-pool < found.yaml
    $ wif-migrator rewrite-{kind.plural} -f found.yaml -o migrated.yaml \\
        --user-include-suffix=@example.com --workforce-pool-name=my-pool
""",
        context_settings={"help_option_names": ["-h", "--help"]},
    )
    @click.option(
        "--workforce-pool-name",
        type=str,
        required=True,
        callback=require_non_empty,
        envvar=f"{ENVVAR_PREFIX}_WORKFORCE_POOL_NAME",
        help="Workforce Identity Pool federating principals and groups into GCP.",
        metavar="TEXT",
    )
    @click.option(
        "--filename",
        "-f",
        type=click.File("r", encoding="utf-8"),
        default="-",
        show_default=True,
        help=f"File holding the {kind.list_kind} ('-' for stdin).",
        metavar="PATH",
    )
    @output_file_option
    @rule_options
    def rewrite_command(
        workforce_pool_name: str,
        filename: TextIO,
        output_file: Path | None,
        user_include_prefix: str,
        user_include_suffix: str,
        groups_include_prefix: str,
        groups_exclude_suffix: str,
        require_groups_exclude_suffix: bool,
    ) -> None:
        """Rewrite bindings of one kind to reference the workforce pool."""
        rules = build_subject_rules(
            user_include_prefix=user_include_prefix,
            user_include_suffix=user_include_suffix,
            groups_include_prefix=groups_include_prefix,
            groups_exclude_suffix=groups_exclude_suffix,
            require_groups_exclude_suffix=require_groups_exclude_suffix,
        )
        migration_rules = build_migration_rules(rules, workforce_pool_name)

        try:
            binding_list = load_binding_list(filename, kind)
        except ManifestError as e:
            error_exit(str(e), exit_code=ExitCode.VALIDATION_ERROR)

        rewritten = rewrite_bindings(binding_list.items, migration_rules)
        info(f"Rewrote {len(rewritten)} {kind.value}(s) for workforce pool {workforce_pool_name}")
        write_output(BindingList.for_kind(kind, rewritten), output_file)

    return rewrite_command


__all__: list[str] = ["make_rewrite_command"]
