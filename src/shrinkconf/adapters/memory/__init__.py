"""In-memory adapter implementations for testing.

Lightweight implementations of the application ports that operate entirely
in memory -- no description files, no configuration files, no logging
runtime.

Contents:
    * :mod:`.config` - In-memory configuration adapters
    * :mod:`.task` - In-memory task loading (TaskStub class)
    * :mod:`.logging` - In-memory logging adapter
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from .config import (
    display_config_in_memory,
    get_config_in_memory,
    get_default_config_path_in_memory,
)
from .logging import init_logging_in_memory
from .task import TaskStub

# Static conformance assertions
if TYPE_CHECKING:
    from shrinkconf.application.ports import (
        DisplayConfig,
        GetConfig,
        GetDefaultConfigPath,
        InitLogging,
        LoadTask,
    )

    _assert_get_config: GetConfig = get_config_in_memory
    _assert_get_default_config_path: GetDefaultConfigPath = get_default_config_path_in_memory
    _assert_display_config: DisplayConfig = display_config_in_memory
    _assert_init_logging: InitLogging = init_logging_in_memory
    _assert_load_task: LoadTask = TaskStub().load_task

__all__ = [
    "TaskStub",
    "display_config_in_memory",
    "get_config_in_memory",
    "get_default_config_path_in_memory",
    "init_logging_in_memory",
]
