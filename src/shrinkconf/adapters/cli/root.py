"""Root ``shrinkconf`` command group.

The group resolves the services factory passed in ``ctx.obj``, loads the
layered configuration for ``--profile`` with ``--set`` overrides applied,
starts logging, and stores a :class:`~.context.CLIContext` for the
subcommands.

Contents:
    * :func:`cli` - Root command group with global options.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

import rich_click as click

from shrinkconf import __init__conf__

from .constants import CLICK_CONTEXT_SETTINGS
from .context import apply_traceback_preferences, load_config, store_cli_context

if TYPE_CHECKING:
    from shrinkconf.composition import AppServices

logger = logging.getLogger(__name__)


def _services_from(ctx: click.Context) -> AppServices:
    factory = ctx.obj
    if not callable(factory):
        raise RuntimeError("Services factory not provided. This is a bug.")
    return factory()  # type: ignore[no-any-return]  # Click's obj is typed as Any


@click.group(
    help=__init__conf__.title,
    context_settings=CLICK_CONTEXT_SETTINGS,
    invoke_without_command=True,
)
@click.version_option(
    version=__init__conf__.version,
    prog_name=__init__conf__.shell_command,
    message=f"{__init__conf__.shell_command} version {__init__conf__.version}",
)
@click.option(
    "--traceback/--no-traceback",
    is_flag=True,
    default=False,
    help="Print the full Python traceback when a command fails",
)
@click.option(
    "--profile",
    type=str,
    default=None,
    help="Configuration profile to layer on top of the defaults (e.g., 'release')",
)
@click.option(
    "--set",
    "set_overrides",
    multiple=True,
    default=(),
    metavar="SECTION.KEY=VALUE",
    help="Override one configuration value, e.g. shrinkconf.exclusion_marker=~ (repeatable).",
)
@click.pass_context
def cli(ctx: click.Context, traceback: bool, profile: str | None, set_overrides: tuple[str, ...]) -> None:
    """Prepare configuration, logging and services for the chosen command.

    Example:
        >>> from click.testing import CliRunner
        >>> from shrinkconf.composition import build_testing
        >>> CliRunner().invoke(cli, [], obj=build_testing).exit_code
        0
    """
    services = _services_from(ctx)
    config = load_config(services, profile, set_overrides)
    services.init_logging(config)
    apply_traceback_preferences(traceback)
    store_cli_context(
        ctx,
        traceback=traceback,
        config=config,
        services=services,
        profile=profile,
        set_overrides=set_overrides,
    )
    logger.debug("CLI context ready", extra={"profile": profile, "overrides": len(set_overrides)})

    if ctx.invoked_subcommand is None:
        click.echo(ctx.get_help())


def _register_commands() -> None:
    # Deferred: the command modules import from this package.
    from .commands import cli_assemble, cli_config, cli_info

    for command in (cli_info, cli_config, cli_assemble):
        cli.add_command(command)


_register_commands()


__all__ = ["cli"]
