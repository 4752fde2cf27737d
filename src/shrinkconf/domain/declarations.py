"""Declaration records kept, in order, by a configuration assembler."""

from __future__ import annotations

from dataclasses import dataclass

from .classpath import ClassPathEntry
from .enums import ClassPathRole, RuleCategory
from .filters import FilterSpec
from .references import Reference


@dataclass(frozen=True, slots=True)
class ClassPathDeclaration:
    """A classpath element declared under a role."""

    role: ClassPathRole
    element: ClassPathEntry | Reference
    output: bool = False


@dataclass(frozen=True, slots=True)
class FilterDeclaration:
    """A filter element declared under a rule category."""

    category: RuleCategory
    element: FilterSpec | Reference
    is_inclusion: bool = True


__all__ = [
    "ClassPathDeclaration",
    "FilterDeclaration",
]
