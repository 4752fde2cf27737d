"""Parse ``--set SECTION.KEY=VALUE`` options and merge them into a Config."""

from __future__ import annotations

from dataclasses import dataclass
from typing import cast

import orjson
from lib_layered_config import Config

CoercedValue = str | int | float | bool | None | list[object] | dict[str, object]
"""Values :func:`coerce_value` can produce."""


@dataclass(frozen=True, slots=True)
class ConfigOverride:
    """One ``--set`` option split into section, key path, and value."""

    section: str
    key_path: tuple[str, ...]
    value: CoercedValue


def parse_override(raw: str) -> ConfigOverride:
    """Parse ``SECTION.KEY[.SUBKEY...]=VALUE``.

    Everything before the first ``=`` is the dotted path; its first
    component is the section. The value goes through :func:`coerce_value`.

    Raises:
        ValueError: Without ``=``, without a dot in the path, or with an
            empty path component.

    Examples:
        >>> override = parse_override("shrinkconf.exclusion_marker=~")
        >>> override.section, override.key_path, override.value
        ('shrinkconf', ('exclusion_marker',), '~')

        >>> parse_override("lib_log_rich.payload_limits.max_chars=8192").key_path
        ('payload_limits', 'max_chars')
    """
    if "=" not in raw:
        raise ValueError(f"Invalid override {raw!r}: must contain '='")

    dotted, value_text = raw.split("=", maxsplit=1)
    if "." not in dotted:
        raise ValueError(f"Invalid override {raw!r}: key must contain at least one dot (SECTION.KEY)")

    section, *keys = dotted.split(".")
    if not section:
        raise ValueError(f"Invalid override {raw!r}: section name is empty")
    if not all(keys):
        raise ValueError(f"Invalid override {raw!r}: key path contains empty component")

    return ConfigOverride(section=section, key_path=tuple(keys), value=coerce_value(value_text))


def coerce_value(raw: str) -> CoercedValue:
    """Interpret ``raw`` as JSON, keeping the plain string when that fails.

    Examples:
        >>> coerce_value("false"), coerce_value("12"), coerce_value("build/classes")
        (False, 12, 'build/classes')
        >>> coerce_value('["!META-INF/**"]')
        ['!META-INF/**']
        >>> coerce_value("")
        ''
    """
    if raw == "":
        return ""
    try:
        return orjson.loads(raw)
    except (orjson.JSONDecodeError, ValueError):
        return raw


def _nest_override(target: dict[str, dict[str, object]], override: ConfigOverride) -> None:
    """Place ``override.value`` into ``target`` under its section and key path.

    Examples:
        >>> tree: dict[str, dict[str, object]] = {}
        >>> _nest_override(tree, ConfigOverride(section="a", key_path=("b", "c"), value=1))
        >>> tree
        {'a': {'b': {'c': 1}}}
    """
    node: dict[str, object] = target.setdefault(override.section, {})
    for key in override.key_path[:-1]:
        child = node.setdefault(key, {})
        if not isinstance(child, dict):
            raise TypeError(f"Expected dict at key {key!r}, got {type(child).__name__}")
        node = cast("dict[str, object]", child)
    node[override.key_path[-1]] = override.value


def apply_overrides(config: Config, raw_overrides: tuple[str, ...]) -> Config:
    """Return ``config`` with every ``--set`` option deep-merged on top.

    Raises:
        ValueError: If an override string is malformed.

    Examples:
        >>> from lib_layered_config import Config
        >>> cfg = Config({"shrinkconf": {"exclusion_marker": "!"}}, {})
        >>> apply_overrides(cfg, ("shrinkconf.exclusion_marker=~",))["shrinkconf"]["exclusion_marker"]
        '~'
        >>> apply_overrides(cfg, ()) is cfg
        True
    """
    if not raw_overrides:
        return config

    merged: dict[str, dict[str, object]] = {}
    for raw in raw_overrides:
        _nest_override(merged, parse_override(raw))
    return config.with_overrides(merged)


__all__ = [
    "CoercedValue",
    "ConfigOverride",
    "apply_overrides",
    "coerce_value",
    "parse_override",
]
