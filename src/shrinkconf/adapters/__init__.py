"""Adapters layer - infrastructure and framework integrations.

Contents:
    * :mod:`.config` - Layered configuration loading, overrides and display
    * :mod:`.description` - TOML build descriptions replayed into assemblers
    * :mod:`.render` - Option text and JSON output
    * :mod:`.logging` - Logging setup with lib_log_rich
    * :mod:`.memory` - In-memory adapters for tests
    * :mod:`.cli` - rich-click CLI
"""

from __future__ import annotations

__all__: list[str] = []
