"""Parser for option text embedded in a task declaration.

Understands the subset of the processing tool's option syntax that maps
onto classpath entries and filter rules:

    -injars      in.jar(!META-INF/**,**.class):extra.jar
    -injars      app.war(!**-sources.jar;com/**,!com/internal/**)
    -libraryjars 'my libs/rt.jar'
    -dontwarn    com.example.**,!com.example.api.**
    -keepattributes
    -keep class com.example.Main
    -assumenosideeffects class android.util.Log

Inside the parentheses of a classpath element, ``;`` separates archive
filters from the name filter, which always comes last. Reading right to
left the groups are: name, jar, war, ear, jmod, zip, apk, aab, aar.

One option per line; ``#`` starts a comment. Anything else is reported as a
:class:`~shrinkconf.domain.errors.ConfigurationError` carrying the line
number.
"""

from __future__ import annotations

import os
from typing import Final

from .classpath import ClassPathEntry
from .declarations import ClassPathDeclaration, FilterDeclaration
from .enums import ARCHIVE_FILTER_ORDER, ArchiveType, ClassPathRole, RuleCategory
from .errors import ConfigurationError
from .filters import FilterSpec, comma_separated_list, parse_signed

#: Classpath options mapped to (role, output flag).
CLASSPATH_OPTIONS: Final[dict[str, tuple[ClassPathRole, bool]]] = {
    "-injars": (ClassPathRole.PROGRAM, False),
    "-outjars": (ClassPathRole.PROGRAM, True),
    "-libraryjars": (ClassPathRole.LIBRARY, False),
}

#: Separator between archive filter groups inside ``(...)``.
FILTER_GROUP_SEPARATOR: Final[str] = ";"

_QUOTES: Final[str] = "'\""

_OPTIONS: Final[dict[str, RuleCategory]] = {category.option: category for category in RuleCategory}


def parse_options(text: str) -> list[ClassPathDeclaration | FilterDeclaration]:
    """Parse option text into declarations, in the order they appear.

    Args:
        text: Option text; may be empty or whitespace only.

    Returns:
        One declaration per classpath option line and one per filter entry.

    Raises:
        ConfigurationError: On unknown options or malformed arguments.

    Example:
        >>> decls = parse_options("-dontwarn a.**,!a.b.**")
        >>> [(d.element.name, d.is_inclusion) for d in decls]
        [('a.**', True), ('a.b.**', False)]
    """
    declarations: list[ClassPathDeclaration | FilterDeclaration] = []
    for number, raw_line in enumerate(text.splitlines(), start=1):
        line = raw_line.split("#", 1)[0].strip()
        if not line:
            continue
        parts = line.split(maxsplit=1)
        option = parts[0].lower()
        argument = parts[1].strip() if len(parts) > 1 else ""
        if not option.startswith("-"):
            raise ConfigurationError(f"line {number}: expected an option starting with '-', found {option!r}")

        if option in CLASSPATH_OPTIONS:
            role, output = CLASSPATH_OPTIONS[option]
            entry = _parse_classpath(argument, number, option)
            declarations.append(ClassPathDeclaration(role=role, element=entry, output=output))
        elif option in _OPTIONS and _OPTIONS[option].takes_class_specification:
            declarations.append(_parse_class_specification(_OPTIONS[option], argument, number))
        elif option in _OPTIONS:
            declarations.extend(_parse_filter(_OPTIONS[option], argument))
        else:
            raise ConfigurationError(f"line {number}: unknown option {option!r}")
    return declarations


def _parse_filter(category: RuleCategory, argument: str) -> list[FilterDeclaration]:
    entries = comma_separated_list(argument)
    if not entries:
        return [FilterDeclaration(category=category, element=FilterSpec())]
    return [FilterDeclaration(category, *parse_signed(entry)) for entry in entries]


def _parse_class_specification(category: RuleCategory, argument: str, number: int) -> FilterDeclaration:
    tokens = argument.split()
    if len(tokens) != 2 or tokens[0] != "class":
        raise ConfigurationError(f"line {number}: expected '{category.option} class <name>', found {argument!r}")
    return FilterDeclaration(category, *parse_signed(tokens[1]))


def _parse_classpath(argument: str, number: int, option: str) -> ClassPathEntry:
    if not argument:
        raise ConfigurationError(f"line {number}: {option} requires at least one path")
    entry = ClassPathEntry()
    for element in _split_path_list(argument, number):
        path, filters = _split_filters(element, number)
        entry.add_location(path)
        if filters is not None:
            _add_filter_groups(entry, filters, number)
    return entry


def _add_filter_groups(entry: ClassPathEntry, filters: str, number: int) -> None:
    groups = filters.split(FILTER_GROUP_SEPARATOR)
    if len(groups) > len(ARCHIVE_FILTER_ORDER) + 1:
        raise ConfigurationError(f"line {number}: too many {FILTER_GROUP_SEPARATOR!r}-separated filters in ({filters})")
    skipped = len(ARCHIVE_FILTER_ORDER) + 1 - len(groups)
    archives: tuple[ArchiveType | None, ...] = (*ARCHIVE_FILTER_ORDER[skipped:], None)
    for archive, group in zip(archives, groups, strict=True):
        for item in comma_separated_list(group):
            spec, inclusion = parse_signed(item)
            entry.add_filter(spec, inclusion, archive)


def _split_path_list(argument: str, number: int) -> list[str]:
    """Split on ``os.pathsep`` outside parentheses and quotes."""
    elements: list[str] = []
    current: list[str] = []
    depth = 0
    quote: str | None = None
    for char in argument:
        if quote is not None:
            if char == quote:
                quote = None
        elif char in _QUOTES and depth == 0 and not "".join(current).strip():
            quote = char
        elif char == "(":
            depth += 1
        elif char == ")":
            depth -= 1
            if depth < 0:
                raise ConfigurationError(f"line {number}: unbalanced ')' in {argument!r}")
        elif char == os.pathsep and depth == 0:
            elements.append("".join(current))
            current = []
            continue
        current.append(char)
    if quote is not None:
        raise ConfigurationError(f"line {number}: unterminated quote in {argument!r}")
    if depth != 0:
        raise ConfigurationError(f"line {number}: unbalanced '(' in {argument!r}")
    elements.append("".join(current))
    return [element.strip() for element in elements if element.strip()]


def _split_filters(element: str, number: int) -> tuple[str, str | None]:
    """Separate a path element into its path and the text inside ``(...)``."""
    if element[0] in _QUOTES:
        end = element.index(element[0], 1)
        path, rest = element[1:end], element[end + 1 :].strip()
    else:
        path, paren, tail = element.partition("(")
        path, rest = path.strip(), paren + tail
    if not path.strip():
        raise ConfigurationError(f"line {number}: filter without a path in {element!r}")
    if not rest:
        return path, None
    if not (rest.startswith("(") and rest.endswith(")")):
        raise ConfigurationError(f"line {number}: filter must close the path element {element!r}")
    return path, rest[1:-1]


__all__ = [
    "CLASSPATH_OPTIONS",
    "FILTER_GROUP_SEPARATOR",
    "parse_options",
]
