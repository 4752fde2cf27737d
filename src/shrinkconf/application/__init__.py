"""Application layer - port definitions.

Port protocols define the interfaces adapter implementations provide to the
CLI and the composition root.

Contents:
    * :mod:`.ports` - Callable Protocol definitions for adapter functions
"""

from __future__ import annotations

from .ports import (
    DisplayConfig,
    GetConfig,
    GetDefaultConfigPath,
    InitLogging,
    LoadTask,
    RenderConfiguration,
)

__all__ = [
    "DisplayConfig",
    "GetConfig",
    "GetDefaultConfigPath",
    "InitLogging",
    "LoadTask",
    "RenderConfiguration",
]
