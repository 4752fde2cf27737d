"""Type-safe domain enums: output formats, classpath roles, archive kinds and rule categories."""

from __future__ import annotations

import os
from enum import Enum


class OutputFormat(str, Enum):
    """Output format options for rendered configuration and config display.

    Inherits from str to allow direct string comparison and Click integration.

    Attributes:
        HUMAN: Option text as the processing tool reads it.
        JSON: Machine-readable JSON output format.

    Example:
        >>> OutputFormat.HUMAN.value
        'human'
        >>> OutputFormat.JSON == "json"
        True
    """

    HUMAN = "human"
    JSON = "json"


class ClassPathRole(str, Enum):
    """Classpath roles kept apart during flattening.

    Attributes:
        PROGRAM: Code to be processed (input and output archives).
        LIBRARY: Code that is only referenced.

    Example:
        >>> ClassPathRole.LIBRARY.value
        'library'
    """

    PROGRAM = "program"
    LIBRARY = "library"


class ArchiveType(str, Enum):
    """Archive kinds recognised by file extension.

    Every kind except DEX can carry its own filter on a classpath location,
    deciding which nested archives of that kind are read.

    Example:
        >>> ArchiveType.from_path("libs/Core.AAR")
        <ArchiveType.AAR: 'aar'>
        >>> ArchiveType.from_path("build/app.ap_")
        <ArchiveType.APK: 'apk'>
        >>> ArchiveType.from_path("classes") is None
        True
    """

    AAR = "aar"
    AAB = "aab"
    APK = "apk"
    ZIP = "zip"
    JMOD = "jmod"
    EAR = "ear"
    WAR = "war"
    JAR = "jar"
    DEX = "dex"

    @property
    def filterable(self) -> bool:
        return self is not ArchiveType.DEX

    @classmethod
    def from_path(cls, path: str) -> ArchiveType | None:
        """Detect the archive kind of ``path``, ignoring case; None for directories and other files."""
        suffix = os.path.splitext(path)[1][1:].lower()
        if suffix == "ap_":
            return cls.APK
        try:
            return cls(suffix)
        except ValueError:
            return None


#: Archive filters in the order they precede the name filter inside ``(...)``.
ARCHIVE_FILTER_ORDER: tuple[ArchiveType, ...] = tuple(kind for kind in ArchiveType if kind.filterable)


class RuleCategory(str, Enum):
    """Rule groups assembled from filter elements.

    The value is the option keyword the processing tool uses for the group.
    Class specification groups (the keep variants, ``whyareyoukeeping`` and
    the ``assume*`` groups) name one class per rule; every other group is a
    single comma-separated filter.

    Example:
        >>> RuleCategory.DONT_WARN.value
        'dontwarn'
        >>> RuleCategory.from_option("-keepattributes")
        <RuleCategory.KEEP_ATTRIBUTES: 'keepattributes'>
        >>> RuleCategory.KEEP_NAMES.takes_class_specification
        True
    """

    KEEP = "keep"
    KEEP_CLASS_MEMBERS = "keepclassmembers"
    KEEP_CLASSES_WITH_MEMBERS = "keepclasseswithmembers"
    KEEP_NAMES = "keepnames"
    KEEP_CLASS_MEMBER_NAMES = "keepclassmembernames"
    KEEP_CLASSES_WITH_MEMBER_NAMES = "keepclasseswithmembernames"
    WHY_ARE_YOU_KEEPING = "whyareyoukeeping"
    ASSUME_NO_SIDE_EFFECTS = "assumenosideeffects"
    ASSUME_NO_EXTERNAL_SIDE_EFFECTS = "assumenoexternalsideeffects"
    ASSUME_NO_ESCAPING_PARAMETERS = "assumenoescapingparameters"
    ASSUME_NO_EXTERNAL_RETURN_VALUES = "assumenoexternalreturnvalues"
    ASSUME_VALUES = "assumevalues"
    KEEP_DIRECTORIES = "keepdirectories"
    KEEP_ATTRIBUTES = "keepattributes"
    KEEP_PACKAGE_NAMES = "keeppackagenames"
    ADAPT_CLASS_STRINGS = "adaptclassstrings"
    ADAPT_RESOURCE_FILE_NAMES = "adaptresourcefilenames"
    ADAPT_RESOURCE_FILE_CONTENTS = "adaptresourcefilecontents"
    DONT_NOTE = "dontnote"
    DONT_WARN = "dontwarn"
    OPTIMIZATIONS = "optimizations"

    @property
    def option(self) -> str:
        """Option keyword including the leading dash."""
        return f"-{self.value}"

    @property
    def takes_class_specification(self) -> bool:
        """Whether each entry renders as its own ``-option class NAME`` line."""
        return self in _CLASS_SPECIFICATION_CATEGORIES

    @classmethod
    def from_option(cls, option: str) -> RuleCategory:
        """Look up a category by keyword, with or without the leading dash.

        Raises:
            ValueError: If no category uses the keyword.
        """
        return cls(option.lstrip("-").lower())


_CLASS_SPECIFICATION_CATEGORIES = frozenset(
    {
        RuleCategory.KEEP,
        RuleCategory.KEEP_CLASS_MEMBERS,
        RuleCategory.KEEP_CLASSES_WITH_MEMBERS,
        RuleCategory.KEEP_NAMES,
        RuleCategory.KEEP_CLASS_MEMBER_NAMES,
        RuleCategory.KEEP_CLASSES_WITH_MEMBER_NAMES,
        RuleCategory.WHY_ARE_YOU_KEEPING,
        RuleCategory.ASSUME_NO_SIDE_EFFECTS,
        RuleCategory.ASSUME_NO_EXTERNAL_SIDE_EFFECTS,
        RuleCategory.ASSUME_NO_ESCAPING_PARAMETERS,
        RuleCategory.ASSUME_NO_EXTERNAL_RETURN_VALUES,
        RuleCategory.ASSUME_VALUES,
    }
)


__all__ = [
    "ARCHIVE_FILTER_ORDER",
    "ArchiveType",
    "ClassPathRole",
    "OutputFormat",
    "RuleCategory",
]
