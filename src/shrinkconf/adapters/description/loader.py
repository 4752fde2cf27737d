"""Read TOML build descriptions and replay them into a ConfigurationAssembler.

The description stands in for the host build engine: it creates one element
per table and replays them in the fixed order documented in :mod:`.models`.
Included descriptions become nested configurations, and ``id``/``refid``
keys map onto the assembler's reference table.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Any

import rtoml
from pydantic import ValidationError

from shrinkconf.domain.assembler import ConfigurationAssembler
from shrinkconf.domain.classpath import ClassPathEntry
from shrinkconf.domain.enums import ClassPathRole
from shrinkconf.domain.errors import ConfigurationError
from shrinkconf.domain.filters import FilterSpec, comma_separated_list, parse_signed
from shrinkconf.domain.references import Reference

from .models import ClassPathModel, FilterModel, LocationModel, TaskDescription

logger = logging.getLogger(__name__)

_ROLES: dict[str, tuple[ClassPathRole, bool]] = {
    "injars": (ClassPathRole.PROGRAM, False),
    "outjars": (ClassPathRole.PROGRAM, True),
    "libraryjars": (ClassPathRole.LIBRARY, False),
}


@dataclass(frozen=True, slots=True)
class LoadedTask:
    """An assembled task and the directory its relative locations use."""

    assembler: ConfigurationAssembler
    base_dir: Path
    source: Path | None = None


def parse_task_description(data: dict[str, Any], *, source: Path | None = None) -> TaskDescription:
    """Validate raw TOML data as a :class:`TaskDescription`.

    Raises:
        ConfigurationError: If the data does not match the description schema.

    Example:
        >>> parse_task_description({"filter": [{"option": "dontwarn"}]}).filter[0].name is None
        True
    """
    try:
        return TaskDescription.model_validate({**data, "source": source})
    except ValidationError as exc:
        where = f" in {source}" if source is not None else ""
        raise ConfigurationError(f"Invalid build description{where}: {exc}") from exc


def load_task_description(path: Path) -> TaskDescription:
    """Read and validate one description file.

    Raises:
        FileNotFoundError: If ``path`` does not exist.
        ConfigurationError: If the file is not valid TOML or not a valid
            description.
    """
    source = path.absolute()
    try:
        data = rtoml.load(source)
    except rtoml.TomlParsingError as exc:
        raise ConfigurationError(f"Invalid TOML in {source}: {exc}") from exc
    return parse_task_description(data, source=source)


def build_assembler(description: TaskDescription, *, _loading: tuple[Path, ...] = ()) -> ConfigurationAssembler:
    """Replay ``description`` into a new assembler.

    Order: included descriptions, classpath tables, filter tables, then the
    option text. TOML keeps no order across differently named tables.

    Raises:
        ConfigurationError: If an include is missing, includes itself, or an
            embedded option text is malformed.
    """
    assembler = ConfigurationAssembler()
    loading = (*_loading, description.source) if description.source is not None else _loading

    for include in description.include:
        assembler.add_configuration(_load_include(description.directory / include, loading))

    for classpath in description.classpath:
        _declare_classpath(assembler, classpath)

    for filter_model in description.filter:
        _declare_filter(assembler, filter_model)

    if description.text:
        assembler.add_text(description.text)

    logger.debug(
        "Assembled build description",
        extra={"source": str(description.source), "declarations": len(assembler.declarations)},
    )
    return assembler


def load_task(path: Path) -> LoadedTask:
    """Load ``path`` and build its assembler.

    Raises:
        FileNotFoundError: If ``path`` does not exist.
        ConfigurationError: If the description or anything it includes is invalid.
    """
    description = load_task_description(path)
    logger.info("Loaded build description", extra={"path": str(description.source)})
    return LoadedTask(
        assembler=build_assembler(description),
        base_dir=description.resolved_base_dir,
        source=description.source,
    )


def _load_include(path: Path, loading: tuple[Path, ...]) -> ConfigurationAssembler:
    resolved = path.absolute()
    if resolved in loading:
        raise ConfigurationError(f"Build description {resolved} includes itself")
    try:
        nested = load_task_description(resolved)
    except FileNotFoundError as exc:
        raise ConfigurationError(f"Included build description not found: {resolved}") from exc
    return build_assembler(nested, _loading=loading)


def _declare_classpath(assembler: ConfigurationAssembler, model: ClassPathModel) -> None:
    role, output = _ROLES[model.role]
    element: ClassPathEntry | Reference
    if model.refid is not None:
        element = Reference(model.refid)
    else:
        entry = ClassPathEntry(feature_name=model.feature_name)
        if model.path:
            entry.add_path(model.path)
        for location in model.location:
            _declare_location(entry, location)
        element = entry

    if model.id is not None:
        assembler.references.register(model.id, element)
    assembler.add_classpath(role, element, output=output)


def _declare_location(entry: ClassPathEntry, model: LocationModel) -> None:
    entry.add_location(model.path)
    for item in comma_separated_list(model.filter):
        entry.add_filter(*parse_signed(item))
    for name in model.exclude:
        entry.add_filter(FilterSpec(name), is_inclusion=False)
    for name in model.include:
        entry.add_filter(FilterSpec(name))
    for archive, text in model.archive_filter.items():
        for item in comma_separated_list(text):
            entry.add_filter(*parse_signed(item), archive=archive)


def _declare_filter(assembler: ConfigurationAssembler, model: FilterModel) -> None:
    element: FilterSpec | Reference = Reference(model.refid) if model.refid is not None else FilterSpec(model.name)
    if model.id is not None:
        assembler.references.register(model.id, element)
    assembler.add_filter(model.option, element, is_inclusion=not model.exclude)


__all__ = [
    "LoadedTask",
    "build_assembler",
    "load_task",
    "load_task_description",
    "parse_task_description",
]
