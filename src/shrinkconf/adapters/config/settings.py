"""Assembly settings read from the ``[shrinkconf]`` configuration section."""

from __future__ import annotations

from pathlib import Path
from typing import Any, cast

from lib_layered_config import Config
from pydantic import BaseModel, ConfigDict, ValidationError, field_validator

from shrinkconf.domain.errors import ConfigurationError
from shrinkconf.domain.filters import EXCLUSION_MARKER


class AssemblySettings(BaseModel):
    """Validated settings that steer flattening.

    Example:
        >>> AssemblySettings().exclusion_marker
        '!'
        >>> AssemblySettings(base_dir="").base_dir is None
        True
    """

    model_config = ConfigDict(frozen=True, extra="ignore")

    exclusion_marker: str = EXCLUSION_MARKER
    base_dir: Path | None = None

    @field_validator("base_dir", mode="before")
    @classmethod
    def _coerce_empty_to_none(cls, v: Any) -> Any:
        """Treat an empty string from TOML or the environment as unset."""
        if isinstance(v, str) and not v.strip():
            return None
        return v

    def effective_base_dir(self, fallback: Path | None) -> Path | None:
        """Prefer the configured base directory, else ``fallback``."""
        return self.base_dir if self.base_dir is not None else fallback


def load_assembly_settings(config: Config) -> AssemblySettings:
    """Parse the ``[shrinkconf]`` section into :class:`AssemblySettings`.

    Raises:
        ConfigurationError: If the section holds invalid values.

    Example:
        >>> from lib_layered_config import Config
        >>> load_assembly_settings(Config({"shrinkconf": {"exclusion_marker": "-"}}, {})).exclusion_marker
        '-'
    """
    raw: object = config.get("shrinkconf", default={})
    try:
        return AssemblySettings.model_validate(cast("dict[str, object]", raw) if raw else {})
    except ValidationError as exc:
        raise ConfigurationError(f"Invalid [shrinkconf] configuration: {exc}") from exc


__all__ = [
    "AssemblySettings",
    "load_assembly_settings",
]
