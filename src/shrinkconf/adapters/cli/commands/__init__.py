"""CLI command implementations.

Contents:
    * Info command from :mod:`.info`
    * Config command from :mod:`.config`
    * Assemble command from :mod:`.assemble`
"""

from __future__ import annotations

from .assemble import cli_assemble
from .config import cli_config
from .info import cli_info

__all__ = [
    "cli_assemble",
    "cli_config",
    "cli_info",
]
