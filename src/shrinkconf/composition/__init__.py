"""Composition root: the adapters each application port is bound to.

``build_production`` wires the file-reading adapters used by the console
script; ``build_testing`` swaps in the in-memory ones from
:mod:`shrinkconf.adapters.memory`.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

from ..adapters.config.display import display_config
from ..adapters.config.loader import get_config, get_default_config_path
from ..adapters.description.loader import load_task
from ..adapters.logging.setup import init_logging
from ..adapters.render import render_configuration

if TYPE_CHECKING:
    from ..adapters.memory.task import TaskStub
    from ..application.ports import (
        DisplayConfig,
        GetConfig,
        GetDefaultConfigPath,
        InitLogging,
        LoadTask,
        RenderConfiguration,
    )

    # pyright checks each adapter against its port here.
    _load_task_port: LoadTask = load_task
    _render_configuration_port: RenderConfiguration = render_configuration
    _get_config_port: GetConfig = get_config
    _get_default_config_path_port: GetDefaultConfigPath = get_default_config_path
    _display_config_port: DisplayConfig = display_config
    _init_logging_port: InitLogging = init_logging


@dataclass(frozen=True, slots=True)
class AppServices:
    """Port implementations handed to the CLI through ``ctx.obj``.

    Tests replace single fields with :func:`dataclasses.replace`.
    """

    load_task: LoadTask
    render_configuration: RenderConfiguration
    get_config: GetConfig
    get_default_config_path: GetDefaultConfigPath
    display_config: DisplayConfig
    init_logging: InitLogging


def build_production() -> AppServices:
    return AppServices(
        load_task=load_task,
        render_configuration=render_configuration,
        get_config=get_config,
        get_default_config_path=get_default_config_path,
        display_config=display_config,
        init_logging=init_logging,
    )


def build_testing(*, stub: TaskStub | None = None) -> AppServices:
    """Wire the in-memory adapters.

    Args:
        stub: TaskStub serving pre-built assemblers. A fresh one is created
            when None; pass your own to register assemblers and inspect the
            requested paths.

    Returns:
        Services that read no files. Rendering stays the production renderer,
        which performs no I/O.
    """
    from ..adapters.memory import (
        TaskStub,
        display_config_in_memory,
        get_config_in_memory,
        get_default_config_path_in_memory,
        init_logging_in_memory,
    )

    task_stub = stub if stub is not None else TaskStub()
    return AppServices(
        load_task=task_stub.load_task,
        render_configuration=render_configuration,
        get_config=get_config_in_memory,
        get_default_config_path=get_default_config_path_in_memory,
        display_config=display_config_in_memory,
        init_logging=init_logging_in_memory,
    )


__all__ = [
    "AppServices",
    "build_production",
    "build_testing",
    "display_config",
    "get_config",
    "get_default_config_path",
    "init_logging",
    "load_task",
    "render_configuration",
]
