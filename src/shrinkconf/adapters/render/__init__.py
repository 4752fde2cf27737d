"""Render adapter - turn a flattened Configuration into text or JSON.

Contents:
    * :mod:`.text` - Processing-tool option text
    * :mod:`.json_format` - JSON via orjson
    * :func:`render_configuration` - Dispatch on :class:`OutputFormat`
"""

from __future__ import annotations

from shrinkconf.domain.assembler import Configuration
from shrinkconf.domain.enums import OutputFormat
from shrinkconf.domain.filters import EXCLUSION_MARKER

from .json_format import configuration_to_dict, render_json
from .text import classpath_line, render_text, rule_lines


def render_configuration(
    configuration: Configuration,
    *,
    output_format: OutputFormat = OutputFormat.HUMAN,
    exclusion_marker: str = EXCLUSION_MARKER,
) -> str:
    """Render ``configuration`` in the requested format.

    Example:
        >>> render_configuration(Configuration(), output_format=OutputFormat.JSON).startswith("{")
        True
    """
    if output_format is OutputFormat.JSON:
        return render_json(configuration, exclusion_marker=exclusion_marker)
    return render_text(configuration, exclusion_marker=exclusion_marker)


__all__ = [
    "classpath_line",
    "configuration_to_dict",
    "render_configuration",
    "render_json",
    "render_text",
    "rule_lines",
]
