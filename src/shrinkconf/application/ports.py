"""Application ports: callable Protocol definitions for adapter functions.

Each Protocol declares a ``__call__`` matching one adapter function, so the
module-level adapter functions satisfy them structurally (PEP 544).

System Role:
    Sits between domain and adapters. Infrastructure types (``Config``,
    ``LoadedTask``) are imported under ``TYPE_CHECKING`` only, keeping the
    runtime import graph layered.
"""

from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING, Protocol

from ..domain.assembler import Configuration
from ..domain.enums import OutputFormat

if TYPE_CHECKING:
    from lib_layered_config import Config

    from ..adapters.description.loader import LoadedTask


class GetConfig(Protocol):
    """Load layered configuration with application defaults."""

    def __call__(self, *, profile: str | None = ..., start_dir: str | None = ...) -> Config: ...


class GetDefaultConfigPath(Protocol):
    """Return the path to the bundled default configuration file."""

    def __call__(self) -> Path: ...


class DisplayConfig(Protocol):
    """Display the provided configuration in the requested format."""

    def __call__(
        self, config: Config, *, output_format: OutputFormat = ..., section: str | None = ..., profile: str | None = ...
    ) -> None: ...


class LoadTask(Protocol):
    """Read a build description and build its assembler."""

    def __call__(self, path: Path) -> LoadedTask: ...


class RenderConfiguration(Protocol):
    """Render a flattened configuration as text."""

    def __call__(
        self,
        configuration: Configuration,
        *,
        output_format: OutputFormat = ...,
        exclusion_marker: str = ...,
    ) -> str: ...


class InitLogging(Protocol):
    """Initialize lib_log_rich runtime with the provided configuration."""

    def __call__(self, config: Config) -> None: ...


__all__ = [
    "DisplayConfig",
    "GetConfig",
    "GetDefaultConfigPath",
    "InitLogging",
    "LoadTask",
    "RenderConfiguration",
]
