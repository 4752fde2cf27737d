"""Reference elements and the per-task table that resolves them.

A declared element is either given directly or as a :class:`Reference` to
an element registered earlier under an id. Reads always go through
:meth:`ReferenceTable.resolve`, so callers never see the indirection.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TypeVar

from .errors import UnresolvedReferenceError

T = TypeVar("T")


@dataclass(frozen=True, slots=True)
class Reference:
    """Declared element that aliases another element's state.

    Example:
        >>> Reference("libs").refid
        'libs'
    """

    refid: str


def is_reference(value: object) -> bool:
    """Return True when ``value`` is the reference arm of a declaration.

    Example:
        >>> is_reference(Reference("x")), is_reference("x")
        (True, False)
    """
    return isinstance(value, Reference)


@dataclass(slots=True)
class ReferenceTable:
    """Lookup table from reference id to declared element.

    Owned by exactly one assembler. Registering an id twice replaces the
    earlier element.

    Example:
        >>> table = ReferenceTable()
        >>> table.register("greeting", "hello")
        >>> table.resolve(Reference("greeting"), str)
        'hello'
        >>> table.resolve("direct", str)
        'direct'
    """

    _elements: dict[str, object] = field(default_factory=dict)

    def register(self, refid: str, element: object) -> None:
        """Make ``element`` reachable as ``Reference(refid)``."""
        self._elements[refid] = element

    def __contains__(self, refid: object) -> bool:
        return refid in self._elements

    def __len__(self) -> int:
        return len(self._elements)

    def resolve(self, value: T | Reference, expected_type: type[T]) -> T:
        """Dereference ``value`` until a direct element of ``expected_type`` remains.

        Args:
            value: Direct element or reference.
            expected_type: Type the resolved element must have.

        Returns:
            The direct element.

        Raises:
            UnresolvedReferenceError: If an id is unknown, references form a
                cycle, or the resolved element has the wrong type.
        """
        seen: list[str] = []
        current: object = value
        while isinstance(current, Reference):
            if current.refid in seen:
                chain = " -> ".join([*seen, current.refid])
                raise UnresolvedReferenceError(f"Circular reference: {chain}")
            if current.refid not in self._elements:
                raise UnresolvedReferenceError(f"Reference {current.refid!r} not found")
            seen.append(current.refid)
            current = self._elements[current.refid]

        if not isinstance(current, expected_type):
            origin = f"Reference {seen[-1]!r}" if seen else "Element"
            raise UnresolvedReferenceError(
                f"{origin} is a {type(current).__name__}, expected {expected_type.__name__}"
            )
        return current


__all__ = [
    "Reference",
    "ReferenceTable",
    "is_reference",
]
