"""Render a flattened configuration as JSON via orjson."""

from __future__ import annotations

from typing import Any

import orjson

from shrinkconf.domain.assembler import Configuration
from shrinkconf.domain.classpath import ClassPathItem
from shrinkconf.domain.filters import EXCLUSION_MARKER


def _item_to_dict(item: ClassPathItem, exclusion_marker: str) -> dict[str, Any]:
    payload: dict[str, Any] = {
        "path": item.path,
        "output": item.output,
        "included": list(item.included),
        "excluded": list(item.excluded),
        "filter": list(item.filter_chain(exclusion_marker)),
    }
    if item.feature_name is not None:
        payload["feature_name"] = item.feature_name
    if item.archive_filters:
        payload["archive_filters"] = {
            archive.value: list(item.archive_chain(archive, exclusion_marker)) for archive, _ in item.archive_filters
        }
    return payload


def configuration_to_dict(configuration: Configuration, *, exclusion_marker: str = EXCLUSION_MARKER) -> dict[str, Any]:
    """Convert ``configuration`` to plain JSON-compatible data.

    Items only carry ``feature_name`` and ``archive_filters`` when they
    have them.

    Example:
        >>> configuration_to_dict(Configuration())
        {'program_jars': [], 'library_jars': [], 'rules': {}}
    """
    return {
        "program_jars": [_item_to_dict(item, exclusion_marker) for item in configuration.program_jars],
        "library_jars": [_item_to_dict(item, exclusion_marker) for item in configuration.library_jars],
        "rules": {category.value: list(chain) for category, chain in configuration.rules.items()},
    }


def render_json(configuration: Configuration, *, exclusion_marker: str = EXCLUSION_MARKER) -> str:
    """Serialize ``configuration`` as indented JSON with a trailing newline."""
    payload = configuration_to_dict(configuration, exclusion_marker=exclusion_marker)
    return orjson.dumps(payload, option=orjson.OPT_INDENT_2 | orjson.OPT_APPEND_NEWLINE).decode("utf-8")


__all__ = [
    "configuration_to_dict",
    "render_json",
]
