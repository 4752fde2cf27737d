"""Domain layer - pure composition logic with no I/O or framework dependencies.

Contains the declarative elements (filters, classpath entries, references)
and the assembler that flattens them into a processing-tool configuration.

Contents:
    * :mod:`.filters` - Filter elements and filter-chain helpers
    * :mod:`.classpath` - Classpath entries and flattened classpath items
    * :mod:`.references` - Reference elements and their lookup table
    * :mod:`.declarations` - Declaration records
    * :mod:`.options` - Option text parser
    * :mod:`.assembler` - Configuration assembler and flattened configuration
    * :mod:`.enums` - Domain enumerations (OutputFormat, ClassPathRole, ArchiveType, RuleCategory)
    * :mod:`.errors` - Domain exception types
"""

from __future__ import annotations

from .assembler import Configuration, ConfigurationAssembler, ConfigurationDeclaration, Declaration
from .classpath import ClassPathEntry, ClassPathItem, resolve_location
from .declarations import ClassPathDeclaration, FilterDeclaration
from .enums import ARCHIVE_FILTER_ORDER, ArchiveType, ClassPathRole, OutputFormat, RuleCategory
from .errors import ConfigurationError, UnresolvedReferenceError
from .filters import EXCLUSION_MARKER, FilterSpec, apply_exclusion_marker, comma_separated_list, parse_signed
from .options import parse_options
from .references import Reference, ReferenceTable, is_reference

__all__ = [
    # Elements
    "ClassPathEntry",
    "ClassPathItem",
    "FilterSpec",
    "Reference",
    "ReferenceTable",
    "is_reference",
    "resolve_location",
    # Filter helpers
    "EXCLUSION_MARKER",
    "apply_exclusion_marker",
    "comma_separated_list",
    "parse_signed",
    # Assembly
    "ClassPathDeclaration",
    "Configuration",
    "ConfigurationAssembler",
    "ConfigurationDeclaration",
    "Declaration",
    "FilterDeclaration",
    "parse_options",
    # Enums
    "ARCHIVE_FILTER_ORDER",
    "ArchiveType",
    "ClassPathRole",
    "OutputFormat",
    "RuleCategory",
    # Errors
    "ConfigurationError",
    "UnresolvedReferenceError",
]
