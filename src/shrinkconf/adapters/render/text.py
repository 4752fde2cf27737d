"""Render a flattened configuration as processing-tool option text."""

from __future__ import annotations

import os

from shrinkconf.domain.assembler import Configuration
from shrinkconf.domain.classpath import ClassPathItem
from shrinkconf.domain.enums import ARCHIVE_FILTER_ORDER, RuleCategory
from shrinkconf.domain.filters import EXCLUSION_MARKER
from shrinkconf.domain.options import FILTER_GROUP_SEPARATOR

_SPECIAL = frozenset(f"(),{FILTER_GROUP_SEPARATOR}'\"{os.pathsep}")


def _quote(path: str) -> str:
    if not any(char.isspace() or char in _SPECIAL for char in path):
        return path
    quote = '"' if "'" in path else "'"
    return f"{quote}{path}{quote}"


def _filter_groups(item: ClassPathItem, exclusion_marker: str) -> list[str]:
    groups = [",".join(item.archive_chain(archive, exclusion_marker)) for archive in ARCHIVE_FILTER_ORDER]
    groups.append(",".join(item.filter_chain(exclusion_marker)))
    while groups and not groups[0]:
        groups.pop(0)
    return groups


def classpath_line(item: ClassPathItem, *, library: bool = False, exclusion_marker: str = EXCLUSION_MARKER) -> str:
    """Render one classpath item as an option line.

    Leading empty archive filter groups are left out; the name filter is
    always the last group.

    Example:
        >>> classpath_line(ClassPathItem("/w/in.jar", (("**.class", True), ("META-INF/**", False))))
        '-injars /w/in.jar(**.class,!META-INF/**)'
        >>> classpath_line(ClassPathItem("/w/my lib.jar"), library=True)
        "-libraryjars '/w/my lib.jar'"
    """
    option = "-libraryjars" if library else ("-outjars" if item.output else "-injars")
    line = f"{option} {_quote(item.path)}"
    groups = _filter_groups(item, exclusion_marker)
    if groups:
        line += f"({FILTER_GROUP_SEPARATOR.join(groups)})"
    return line


def rule_lines(category: RuleCategory, chain: tuple[str, ...]) -> list[str]:
    """Render one rule category.

    Class specification categories produce one line per class name; every
    other category is a single line with a comma-separated filter, or the
    bare option when the chain is empty.

    Example:
        >>> rule_lines(RuleCategory.DONT_WARN, ("a.**", "!a.b.**"))
        ['-dontwarn a.**,!a.b.**']
        >>> rule_lines(RuleCategory.KEEP_NAMES, ("com.example.Main",))
        ['-keepnames class com.example.Main']
        >>> rule_lines(RuleCategory.KEEP_ATTRIBUTES, ())
        ['-keepattributes']
    """
    if category.takes_class_specification:
        return [f"{category.option} class {name}" for name in chain]
    if not chain:
        return [category.option]
    return [f"{category.option} {','.join(chain)}"]


def render_text(configuration: Configuration, *, exclusion_marker: str = EXCLUSION_MARKER) -> str:
    """Render program jars, library jars, then rules in declaration order."""
    lines = [classpath_line(item, exclusion_marker=exclusion_marker) for item in configuration.program_jars]
    lines.extend(
        classpath_line(item, library=True, exclusion_marker=exclusion_marker) for item in configuration.library_jars
    )
    for category, chain in configuration.rules.items():
        lines.extend(rule_lines(category, chain))
    return "\n".join(lines) + "\n" if lines else ""


__all__ = [
    "classpath_line",
    "render_text",
    "rule_lines",
]
