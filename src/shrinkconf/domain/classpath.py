"""Classpath entries: ordered locations with optional per-location filters.

A :class:`ClassPathEntry` offers the add/list/string-conversion capabilities
of a generic path container by holding its locations rather than extending
a container type. Relative locations stay unresolved until they are read,
so a base directory chosen after declaration still applies. A location
whose path is unset stays in the entry but is left out whenever the entry
is read.

Contents:
    * :class:`ClassPathItem` - One resolved location with its filter chains.
    * :class:`ClassPathEntry` - Declared classpath element.
"""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from pathlib import Path

from .enums import ARCHIVE_FILTER_ORDER, ArchiveType
from .filters import EXCLUSION_MARKER, FilterSpec, apply_exclusion_marker

FilterEntry = tuple[str, bool]
"""(name, is_inclusion) as declared on a location."""


def _mark(entries: tuple[FilterEntry, ...], marker: str) -> tuple[str, ...]:
    return tuple(name if inclusion else apply_exclusion_marker([name], marker)[0] for name, inclusion in entries)


@dataclass(frozen=True, slots=True)
class ClassPathItem:
    """Flattened classpath location as the processing tool consumes it.

    Attributes:
        path: Resolved absolute path string.
        filters: Name filter entries in declaration order.
        output: True for output archives of the program role.
        feature_name: Feature the location belongs to, if any.
        archive_filters: Per-archive-kind filter entries, in
            :data:`~shrinkconf.domain.enums.ARCHIVE_FILTER_ORDER`; kinds
            without entries are absent.

    Example:
        >>> item = ClassPathItem("/tmp/in.jar", (("com/**", True), ("com/internal/**", False)))
        >>> item.filter_chain()
        ('com/**', '!com/internal/**')
        >>> item.excluded
        ('com/internal/**',)
    """

    path: str
    filters: tuple[FilterEntry, ...] = ()
    output: bool = False
    feature_name: str | None = None
    archive_filters: tuple[tuple[ArchiveType, tuple[FilterEntry, ...]], ...] = ()

    @property
    def included(self) -> tuple[str, ...]:
        return tuple(name for name, inclusion in self.filters if inclusion)

    @property
    def excluded(self) -> tuple[str, ...]:
        return tuple(name for name, inclusion in self.filters if not inclusion)

    @property
    def archive_type(self) -> ArchiveType | None:
        return ArchiveType.from_path(self.path)

    @property
    def is_filtered(self) -> bool:
        return bool(self.filters or self.archive_filters)

    def filter_chain(self, marker: str = EXCLUSION_MARKER) -> tuple[str, ...]:
        """Name filter in declaration order with exclusions marked; read first-match."""
        return _mark(self.filters, marker)

    def archive_chain(self, archive: ArchiveType, marker: str = EXCLUSION_MARKER) -> tuple[str, ...]:
        """Filter for nested archives of kind ``archive``, empty when none was declared."""
        return _mark(dict(self.archive_filters).get(archive, ()), marker)


@dataclass(slots=True)
class _LocationFilter:
    spec: FilterSpec
    is_inclusion: bool
    archive: ArchiveType | None = None


@dataclass(slots=True)
class _Location:
    path: str | None
    filters: list[_LocationFilter] = field(default_factory=list)


def resolve_location(path: str, base_dir: Path | str | None = None) -> str:
    """Resolve ``path`` against ``base_dir`` without touching the file system.

    Absolute paths are only normalized. ``base_dir`` defaults to the current
    working directory.

    Example:
        >>> resolve_location("lib/../in.jar", "/work")
        '/work/in.jar'
        >>> resolve_location("/abs/out.jar", "/work")
        '/abs/out.jar'
    """
    base = Path(base_dir) if base_dir is not None else Path.cwd()
    return os.path.normpath(base.absolute() / path)


@dataclass(slots=True)
class ClassPathEntry:
    """Ordered, possibly filtered sequence of classpath locations.

    Every :meth:`add_location` call appends, so the same location can be
    declared more than once. Filters attach to the most recently added
    location; filters declared before any location wait for the next one
    and are dropped if none ever follows. Filters of a location whose path
    is unset are dropped together with it.

    Example:
        >>> entry = ClassPathEntry()
        >>> entry.add_location("/work/in.jar")
        >>> entry.add_filter(FilterSpec("META-INF/**"), is_inclusion=False)
        >>> entry.add_location(None)
        >>> entry.add_location("/work/in.jar")
        >>> entry.list_paths()
        ['/work/in.jar', '/work/in.jar']
        >>> entry.items()[0].excluded
        ('META-INF/**',)
    """

    feature_name: str | None = None
    _locations: list[_Location] = field(default_factory=list)
    _pending: list[_LocationFilter] = field(default_factory=list)

    def add_location(self, path: str | os.PathLike[str] | None) -> None:
        """Append one location; existence is not checked and None or blank means unset."""
        location = _Location(os.fspath(path) if path is not None else None, list(self._pending))
        self._pending.clear()
        self._locations.append(location)

    def add_path(self, path_list: str) -> None:
        """Append every element of an ``os.pathsep``-separated path list.

        Example:
            >>> entry = ClassPathEntry()
            >>> entry.add_path(os.pathsep.join(["/a.jar", "", "/b.jar"]))
            >>> len(entry)
            2
        """
        for part in path_list.split(os.pathsep):
            if part.strip():
                self.add_location(part.strip())

    def add_filter(self, spec: FilterSpec, is_inclusion: bool = True, archive: ArchiveType | None = None) -> None:
        """Attach ``spec`` to the most recently added location.

        With ``archive`` the filter selects nested archives of that kind
        instead of entry names. With no location yet, the filter is kept
        for the next location.

        Raises:
            ValueError: If ``archive`` cannot be filtered.
        """
        if archive is not None and not archive.filterable:
            raise ValueError(f"{archive.value} archives take no filter")
        pending = _LocationFilter(spec, is_inclusion, archive)
        if not self._locations:
            self._pending.append(pending)
            return
        self._locations[-1].filters.append(pending)

    def list_paths(self, base_dir: Path | str | None = None) -> list[str]:
        """Return every set location resolved against ``base_dir``.

        Declaration order and duplicates are preserved. Returns an empty
        list when nothing was declared.
        """
        return [resolve_location(path, base_dir) for path, _ in self._set_locations()]

    def items(self, base_dir: Path | str | None = None, *, output: bool = False) -> list[ClassPathItem]:
        """Return every set location paired with its composed filters."""
        result: list[ClassPathItem] = []
        for path, location in self._set_locations():
            chains: dict[ArchiveType | None, list[FilterEntry]] = {}
            for declared in location.filters:
                names: list[str] = []
                declared.spec.append_to(names, declared.is_inclusion)
                chains.setdefault(declared.archive, []).extend((name, declared.is_inclusion) for name in names)
            result.append(
                ClassPathItem(
                    path=resolve_location(path, base_dir),
                    filters=tuple(chains.get(None, ())),
                    output=output,
                    feature_name=self.feature_name,
                    archive_filters=tuple(
                        (archive, tuple(chains[archive])) for archive in ARCHIVE_FILTER_ORDER if chains.get(archive)
                    ),
                )
            )
        return result

    def to_string(self, base_dir: Path | str | None = None) -> str:
        """Join the resolved locations with ``os.pathsep``."""
        return os.pathsep.join(self.list_paths(base_dir))

    def copy(self) -> ClassPathEntry:
        """Return an independent copy sharing the filter elements."""
        clone = ClassPathEntry(self.feature_name)
        clone._locations = [_Location(loc.path, list(loc.filters)) for loc in self._locations]
        clone._pending = list(self._pending)
        return clone

    def _set_locations(self) -> list[tuple[str, _Location]]:
        return [(loc.path, loc) for loc in self._locations if loc.path is not None and loc.path.strip()]

    @property
    def is_empty(self) -> bool:
        return not self._set_locations()

    def __len__(self) -> int:
        return len(self._set_locations())

    def __str__(self) -> str:
        return self.to_string()


__all__ = [
    "ClassPathEntry",
    "ClassPathItem",
    "FilterEntry",
    "resolve_location",
]
