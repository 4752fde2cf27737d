"""Domain-specific exceptions for typed error handling at boundaries."""

from __future__ import annotations


class ConfigurationError(Exception):
    """Malformed option text or build description.

    Raised where the declarative input itself cannot be understood, the
    way a host build engine rejects bad syntax. Unset names and paths are
    never reported through this type; they are omitted during flattening.
    Typically caught at CLI boundaries to provide user-friendly messages.

    Example:
        >>> from shrinkconf.domain.errors import ConfigurationError
        >>> err = ConfigurationError("line 3: unknown option '-keepall'")
        >>> str(err)
        "line 3: unknown option '-keepall'"
    """


class UnresolvedReferenceError(ConfigurationError):
    """A reference element could not be dereferenced.

    Raised for an unknown reference id, a reference cycle, or a referenced
    element of the wrong kind. Inherits from ConfigurationError so a single
    ``except ConfigurationError`` at the boundary covers both.

    Example:
        >>> from shrinkconf.domain.errors import UnresolvedReferenceError
        >>> err = UnresolvedReferenceError("Reference 'libs' not found")
        >>> isinstance(err, ConfigurationError)
        True
    """


__all__ = [
    "ConfigurationError",
    "UnresolvedReferenceError",
]
