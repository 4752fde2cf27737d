"""Per-invocation CLI state and traceback flag handling.

Contents:
    * :class:`CLIContext` - Configuration and services shared by all commands.
    * :func:`load_config` - Layered configuration with ``--set`` overrides applied.
    * :func:`store_cli_context` / :func:`get_cli_context` - ``ctx.obj`` access.
    * Traceback helpers around ``lib_cli_exit_tools.config``.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

import lib_cli_exit_tools
import rich_click as click
from lib_layered_config import Config

from shrinkconf.adapters.config.overrides import apply_overrides
from shrinkconf.adapters.config.settings import AssemblySettings, load_assembly_settings

if TYPE_CHECKING:
    from shrinkconf.composition import AppServices

TracebackState = tuple[bool, bool]
"""(traceback enabled, force color) as kept in ``lib_cli_exit_tools.config``."""


def load_config(services: AppServices, profile: str | None, set_overrides: tuple[str, ...]) -> Config:
    """Load the configuration for ``profile`` and apply ``--set`` overrides.

    Raises:
        click.UsageError: If an override is malformed.
    """
    config = services.get_config(profile=profile)
    try:
        return apply_overrides(config, set_overrides)
    except ValueError as exc:
        raise click.UsageError(str(exc)) from exc


@dataclass(slots=True)
class CLIContext:
    """State the root command hands to every subcommand.

    ``set_overrides`` is kept so configuration reloaded for another profile
    receives the same root ``--set`` options.
    """

    traceback: bool
    config: Config
    services: AppServices
    profile: str | None = None
    set_overrides: tuple[str, ...] = ()

    def config_for(self, profile: str | None) -> tuple[Config, str | None]:
        """Return the configuration and profile a subcommand should use.

        Without ``profile`` the root configuration is reused; otherwise the
        layers are reloaded for that profile.
        """
        if not profile:
            return self.config, self.profile
        return load_config(self.services, profile, self.set_overrides), profile

    def assembly_settings(self) -> AssemblySettings:
        """Return the validated ``[shrinkconf]`` section.

        Raises:
            ConfigurationError: If the section holds invalid values.
        """
        return load_assembly_settings(self.config)


def store_cli_context(
    ctx: click.Context,
    *,
    traceback: bool,
    config: Config,
    services: AppServices,
    profile: str | None = None,
    set_overrides: tuple[str, ...] = (),
) -> None:
    """Replace ``ctx.obj`` (the services factory) with a :class:`CLIContext`.

    Example:
        >>> from unittest.mock import MagicMock
        >>> ctx = MagicMock()
        >>> store_cli_context(ctx, traceback=True, config=MagicMock(), services=MagicMock(), profile="ci")
        >>> ctx.obj.profile
        'ci'
    """
    ctx.obj = CLIContext(traceback, config, services, profile, set_overrides)


def get_cli_context(ctx: click.Context) -> CLIContext:
    """Return the :class:`CLIContext` stored by the root command.

    Raises:
        RuntimeError: If the root command has not stored one.
    """
    cli_ctx = ctx.obj
    if isinstance(cli_ctx, CLIContext):
        return cli_ctx
    raise RuntimeError("CLI context not initialized. Call store_cli_context first.")


def apply_traceback_preferences(enabled: bool) -> None:
    """Turn full, colored tracebacks on or off for lib_cli_exit_tools.

    Example:
        >>> apply_traceback_preferences(False)
        >>> bool(lib_cli_exit_tools.config.traceback_force_color)
        False
    """
    flag = bool(enabled)
    lib_cli_exit_tools.config.traceback = flag
    lib_cli_exit_tools.config.traceback_force_color = flag


def snapshot_traceback_state() -> TracebackState:
    cfg = lib_cli_exit_tools.config
    return bool(getattr(cfg, "traceback", False)), bool(getattr(cfg, "traceback_force_color", False))


def restore_traceback_state(state: TracebackState) -> None:
    """Reapply flags captured by :func:`snapshot_traceback_state`."""
    lib_cli_exit_tools.config.traceback, lib_cli_exit_tools.config.traceback_force_color = state


__all__ = [
    "CLIContext",
    "TracebackState",
    "apply_traceback_preferences",
    "get_cli_context",
    "load_config",
    "restore_traceback_state",
    "snapshot_traceback_state",
    "store_cli_context",
]
