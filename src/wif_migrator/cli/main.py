"""Main entry point for the wif-migrator CLI.

The command table is built explicitly by build_cli() from the supported
binding kinds; each kind contributes one find and one rewrite command.

Commands:
    wif-migrator find-clusterrolebindings: List federated ClusterRoleBindings
    wif-migrator find-rolebindings: List federated RoleBindings
    wif-migrator rewrite-clusterrolebindings: Migrate a ClusterRoleBindingList
    wif-migrator rewrite-rolebindings: Migrate a RoleBindingList

Example:
    $ wif-migrator --help
    $ wif-migrator find-clusterrolebindings --user-include-suffix=@example.com > crbs.yaml
    $ wif-migrator rewrite-clusterrolebindings --user-include-suffix=@example.com \\
        --workforce-pool-name=my-pool < crbs.yaml > crbs-wfidf.yaml
"""

from __future__ import annotations

import sys
from importlib.metadata import PackageNotFoundError
from importlib.metadata import version as get_version
from typing import TYPE_CHECKING

import click

from wif_migrator.cli.find import make_find_command
from wif_migrator.cli.rewrite import make_rewrite_command
from wif_migrator.logging_config import configure_logging
from wif_migrator.schemas.bindings import BindingKind

if TYPE_CHECKING:
    from collections.abc import Iterable


def _get_version() -> str:
    """Get the wif-migrator package version.

    Returns:
        Version string from package metadata, or 'unknown' if not installed.
    """
    try:
        return get_version("wif-migrator")
    except PackageNotFoundError:
        return "unknown"


def build_cli(kinds: Iterable[BindingKind] = tuple(BindingKind)) -> click.Group:
    """Build the root command group with a find/rewrite pair per kind.

    Args:
        kinds: Binding kinds to register commands for.

    Returns:
        Root click group.
    """

    @click.group(
        name="wif-migrator",
        help=(
            "Migrate RBAC bindings from Identity Service for GKE to "
            "Workforce Identity Federation."
        ),
        epilog="Use 'wif-migrator <command> --help' for command-specific help.",
        context_settings={"help_option_names": ["-h", "--help"]},
    )
    @click.version_option(
        version=_get_version(),
        prog_name="wif-migrator",
        message="%(prog)s %(version)s",
    )
    @click.option(
        "--verbose",
        "-v",
        is_flag=True,
        default=False,
        help="Enable debug logging on stderr.",
    )
    def cli(verbose: bool) -> None:
        """Root command group for the wif-migrator CLI."""
        configure_logging(verbose=verbose)

    for kind in kinds:
        cli.add_command(make_find_command(kind))
        cli.add_command(make_rewrite_command(kind))

    return cli


def main(argv: list[str] | None = None) -> None:
    """Main entry point for the wif-migrator CLI.

    Args:
        argv: Command-line arguments (uses sys.argv if None).
    """
    cli = build_cli()
    try:
        cli(args=argv, standalone_mode=False)
    except click.ClickException as e:
        e.show()
        sys.exit(e.exit_code)
    except click.Abort:
        click.echo("Aborted!", err=True)
        sys.exit(1)
    except Exception as e:
        click.echo(f"Error: {e}", err=True)
        sys.exit(1)


if __name__ == "__main__":
    main()
