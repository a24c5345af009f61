"""Options and helpers shared by the find and rewrite commands.

Every command takes the same subject classification options. They can also
be set through ``WIF_MIGRATOR_*`` environment variables; a flag on the
command line wins over the environment.
"""

from __future__ import annotations

from collections.abc import Callable
from pathlib import Path
from typing import TYPE_CHECKING, Any, TypeVar

import click
from pydantic import ValidationError

from wif_migrator.cli.utils import ExitCode, error_exit, warning
from wif_migrator.errors import OutputError
from wif_migrator.manifests import render_binding_list
from wif_migrator.schemas.rules import MigrationRules, SubjectRules

if TYPE_CHECKING:
    from wif_migrator.schemas.bindings import BindingList

F = TypeVar("F", bound=Callable[..., Any])

ENVVAR_PREFIX = "WIF_MIGRATOR"


def require_non_empty(_ctx: click.Context, param: click.Parameter, value: str | None) -> str | None:
    """Reject an explicitly empty value for a required option."""
    if value == "":
        raise click.BadParameter(f"{param.opts[0]} must not be empty.")
    return value


_RULE_OPTIONS = (
    click.option(
        "--user-include-prefix",
        type=str,
        default="",
        envvar=f"{ENVVAR_PREFIX}_USER_INCLUDE_PREFIX",
        help="Prefix for recognizing federated user identities. Stripped from the translated user name.",
        metavar="TEXT",
    ),
    click.option(
        "--user-include-suffix",
        type=str,
        required=True,
        callback=require_non_empty,
        envvar=f"{ENVVAR_PREFIX}_USER_INCLUDE_SUFFIX",
        help="Suffix for recognizing federated user identities. Typically your organization's domain name.",
        metavar="TEXT",
    ),
    click.option(
        "--groups-include-prefix",
        type=str,
        default="",
        envvar=f"{ENVVAR_PREFIX}_GROUPS_INCLUDE_PREFIX",
        help="Prefix for recognizing federated group names. Stripped from the translated group name.",
        metavar="TEXT",
    ),
    click.option(
        "--groups-exclude-suffix",
        type=str,
        default="",
        envvar=f"{ENVVAR_PREFIX}_GROUPS_EXCLUDE_SUFFIX",
        help=(
            "Suffix for excluding group names, e.g. groups from Google Groups for RBAC. "
            "When empty, no group is treated as federated."
        ),
        metavar="TEXT",
    ),
    click.option(
        "--require-groups-exclude-suffix",
        is_flag=True,
        default=False,
        help="Fail instead of warning when --groups-exclude-suffix is empty.",
    ),
)


def rule_options(func: F) -> F:
    """Attach the subject classification options to a command."""
    for option in reversed(_RULE_OPTIONS):
        func = option(func)
    return func


def output_file_option(func: F) -> F:
    """Attach the ``--output-file`` option to a command."""
    return click.option(
        "--output-file",
        "-o",
        type=click.Path(dir_okay=False, writable=True, resolve_path=True, path_type=Path),
        default=None,
        help="Write the binding list to this file instead of stdout.",
        metavar="PATH",
    )(func)


def _check_groups_exclude_suffix(rules: SubjectRules, required: bool) -> None:
    if not rules.excludes_all_groups:
        return
    if required:
        raise click.UsageError(
            "--groups-exclude-suffix must be specified when "
            "--require-groups-exclude-suffix is set."
        )
    warning("--groups-exclude-suffix is empty; every group subject will be left unchanged")


def build_subject_rules(
    *,
    user_include_prefix: str,
    user_include_suffix: str,
    groups_include_prefix: str,
    groups_exclude_suffix: str,
    require_groups_exclude_suffix: bool,
) -> SubjectRules:
    """Validate rule options into a frozen rule set.

    Args:
        user_include_prefix: Value of ``--user-include-prefix``.
        user_include_suffix: Value of ``--user-include-suffix``.
        groups_include_prefix: Value of ``--groups-include-prefix``.
        groups_exclude_suffix: Value of ``--groups-exclude-suffix``.
        require_groups_exclude_suffix: Treat an empty exclude suffix as a
            usage error.

    Returns:
        The validated SubjectRules.

    Raises:
        click.UsageError: If the options do not form a valid rule set.
    """
    try:
        rules = SubjectRules(
            user_include_prefix=user_include_prefix,
            user_include_suffix=user_include_suffix,
            groups_include_prefix=groups_include_prefix,
            groups_exclude_suffix=groups_exclude_suffix,
        )
    except ValidationError as e:
        raise click.UsageError(f"Invalid classification options: {e}") from e

    _check_groups_exclude_suffix(rules, require_groups_exclude_suffix)
    return rules


def build_migration_rules(rules: SubjectRules, workforce_pool_name: str) -> MigrationRules:
    """Extend a rule set with the target workforce pool.

    Raises:
        click.UsageError: If the pool name is not valid.
    """
    try:
        return MigrationRules(workforce_pool_name=workforce_pool_name, **rules.model_dump())
    except ValidationError as e:
        raise click.UsageError(f"Invalid --workforce-pool-name: {e}") from e


def write_output(binding_list: BindingList, output_file: Path | None) -> None:
    """Render a binding list and write it to stdout or a file.

    Nothing is written unless rendering succeeded.

    Args:
        binding_list: List to write.
        output_file: Destination file, or None for stdout.

    Raises:
        SystemExit: With GENERAL_ERROR if rendering or writing fails.
    """
    try:
        content = render_binding_list(binding_list)
        if output_file is None:
            click.echo(content, nl=False)
        else:
            output_file.write_text(content, encoding="utf-8")
    except OutputError as e:
        error_exit(str(e), exit_code=ExitCode.GENERAL_ERROR)
    except OSError as e:
        error_exit(
            f"Cannot write {binding_list.kind}: {e}",
            exit_code=ExitCode.GENERAL_ERROR,
        )


__all__: list[str] = [
    "ENVVAR_PREFIX",
    "build_migration_rules",
    "build_subject_rules",
    "output_file_option",
    "require_non_empty",
    "rule_options",
    "write_output",
]
