"""CLI entry point shared by the console script and ``python -m shrinkconf``.

Contents:
    * :func:`main` - Run the root group and return an exit code.
"""

from __future__ import annotations

import sys
import threading
from collections.abc import Callable, Sequence
from typing import TYPE_CHECKING

import click
import lib_cli_exit_tools
import lib_log_rich.runtime

from shrinkconf import __init__conf__

from .constants import TRACEBACK_SUMMARY_LIMIT, TRACEBACK_VERBOSE_LIMIT
from .context import (
    apply_traceback_preferences,
    restore_traceback_state,
    snapshot_traceback_state,
)

if TYPE_CHECKING:
    from shrinkconf.composition import AppServices


def _report_unexpected(exc: BaseException) -> int:
    """Print ``exc`` through lib_cli_exit_tools and return its exit code.

    The ``--traceback`` flag decides between a short message and the full
    traceback.
    """
    verbose = bool(getattr(lib_cli_exit_tools.config, "traceback", False))
    apply_traceback_preferences(verbose)
    limit = TRACEBACK_VERBOSE_LIMIT if verbose else TRACEBACK_SUMMARY_LIMIT
    lib_cli_exit_tools.print_exception_message(trace_back=verbose, length_limit=limit)
    return lib_cli_exit_tools.get_system_exit_code(exc)


def _run_cli(argv: Sequence[str] | None, *, services_factory: Callable[[], AppServices]) -> int:
    # Click is driven directly because the services factory travels in ``obj``,
    # which lib_cli_exit_tools.run_cli cannot pass.
    from .root import cli

    args = sys.argv[1:] if argv is None else list(argv)
    try:
        cli.main(args=args, prog_name=__init__conf__.shell_command, obj=services_factory, standalone_mode=False)
    except click.exceptions.Exit as exc:
        return exc.exit_code
    except click.ClickException as exc:
        exc.show()
        return exc.exit_code
    except BaseException as exc:  # noqa: BLE001  # SystemExit and KeyboardInterrupt map to exit codes too
        return _report_unexpected(exc)
    return 0


def _shutdown_logging() -> None:
    # Shutting down from a worker thread would stop logging for the whole process.
    if threading.current_thread() is threading.main_thread() and lib_log_rich.runtime.is_initialised():
        lib_log_rich.runtime.shutdown()


def main(
    argv: Sequence[str] | None = None,
    *,
    restore_traceback: bool = True,
    services_factory: Callable[[], AppServices] | None = None,
) -> int:
    """Run the CLI and return its exit code.

    Args:
        argv: Arguments without the program name; ``sys.argv[1:]`` when None.
        restore_traceback: Restore the traceback flags seen before the run.
        services_factory: Returns the AppServices to use. Required; the
            console script passes ``build_production``.

    Raises:
        ValueError: If ``services_factory`` is missing.

    Example:
        >>> from shrinkconf.composition import build_production
        >>> main(["assemble", "build.toml"], services_factory=build_production)  # doctest: +SKIP
        0
    """
    if services_factory is None:
        raise ValueError("services_factory is required. Pass build_production from composition layer.")

    previous_state = snapshot_traceback_state()
    try:
        return _run_cli(argv, services_factory=services_factory)
    finally:
        if restore_traceback:
            restore_traceback_state(previous_state)
        _shutdown_logging()


__all__ = ["main"]
