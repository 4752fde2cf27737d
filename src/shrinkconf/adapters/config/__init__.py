"""Configuration adapter - loading, display, settings, and overrides.

Provides adapters for configuration management using lib_layered_config.

Contents:
    * :mod:`.loader` - Configuration loading with caching
    * :mod:`.display` - Configuration display in human/JSON formats
    * :mod:`.overrides` - CLI ``--set`` override parsing and application
    * :mod:`.settings` - ``[shrinkconf]`` section model
"""

from __future__ import annotations

from .display import display_config
from .loader import get_config, get_default_config_path
from .overrides import apply_overrides
from .settings import AssemblySettings, load_assembly_settings

__all__ = [
    "AssemblySettings",
    "apply_overrides",
    "display_config",
    "get_config",
    "get_default_config_path",
    "load_assembly_settings",
]
