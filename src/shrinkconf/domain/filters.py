"""Named filter elements and the list helpers that compose filter chains.

A filter chain is an ordered list of name patterns. Each declared filter
element contributes at most one pattern to the chain it is appended to;
the inclusion/exclusion sign is applied by whoever owns the chain.

Contents:
    * :class:`FilterSpec` - One named filter element.
    * :func:`comma_separated_list` - Split ``a,b,c`` filter text.
    * :func:`parse_signed` - Read one possibly marked entry.
    * :func:`apply_exclusion_marker` - Mark entries as exclusions.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Final

#: Prefix the processing tool reads as "exclude names matching this pattern".
EXCLUSION_MARKER: Final[str] = "!"


@dataclass(slots=True)
class FilterSpec:
    """One declared filter element.

    The name is optional so partially specified elements can be declared
    and flattened without complaint; an unset name contributes nothing.

    Attributes:
        name: Class or resource name pattern, or None while unset.

    Example:
        >>> spec = FilterSpec("com.example.**")
        >>> chain = ["42"]
        >>> spec.append_to(chain, True)
        >>> chain
        ['42', 'com.example.**']
        >>> FilterSpec().append_to(chain, True)
        >>> len(chain)
        2
    """

    name: str | None = None

    @property
    def is_set(self) -> bool:
        """Whether appending this element changes a chain."""
        return bool(self.name)

    def append_to(self, accumulator: list[str], is_inclusion: bool = True) -> None:
        """Append this filter's name to the end of ``accumulator``.

        Entries already in ``accumulator`` are left untouched, so the most
        recently declared filter always ends up last. The flag tells the
        caller which chain is being built; the name is appended verbatim
        either way and any exclusion marker is the caller's to apply.

        Args:
            accumulator: Mutable chain owned by the caller.
            is_inclusion: Whether the caller is building an inclusion chain.
        """
        if not self.name:
            return
        accumulator.append(self.name)


def comma_separated_list(text: str | None) -> list[str]:
    """Split filter text on commas, dropping blanks.

    Example:
        >>> comma_separated_list("!META-INF/**, **.class,")
        ['!META-INF/**', '**.class']
        >>> comma_separated_list(None)
        []
    """
    if not text:
        return []
    return [part.strip() for part in text.split(",") if part.strip()]


def parse_signed(entry: str, marker: str = EXCLUSION_MARKER) -> tuple[FilterSpec, bool]:
    """Split a possibly marked filter entry into its element and inclusion flag.

    Example:
        >>> parse_signed("!META-INF/**")
        (FilterSpec(name='META-INF/**'), False)
    """
    if marker and entry.startswith(marker):
        return FilterSpec(entry[len(marker) :]), False
    return FilterSpec(entry), True


def apply_exclusion_marker(entries: list[str], marker: str = EXCLUSION_MARKER) -> list[str]:
    """Return a copy of ``entries`` with every entry marked as an exclusion.

    Entries that already carry the marker are kept as they are.

    Example:
        >>> apply_exclusion_marker(["a/**", "!b/**"])
        ['!a/**', '!b/**']
    """
    if not marker:
        return list(entries)
    return [entry if entry.startswith(marker) else f"{marker}{entry}" for entry in entries]


__all__ = [
    "EXCLUSION_MARKER",
    "FilterSpec",
    "apply_exclusion_marker",
    "comma_separated_list",
    "parse_signed",
]
