"""Pydantic models for TOML build descriptions.

A build description lists the nested elements of one task:

.. code-block:: toml

    base_dir = "build"
    include = ["common.toml"]
    text = "-dontwarn com.example.**"

    [[classpath]]
    role = "injars"
    id = "app"
    path = "classes"
    feature_name = "base"

      [[classpath.location]]
      path = "app.jar"
      filter = "com/**,!com/internal/**"
      exclude = ["META-INF/**"]
      include = ["**.class"]
      archive_filter = { war = "!**-sources.jar" }

    [[classpath]]
    role = "libraryjars"
    refid = "runtime"

    [[filter]]
    option = "dontwarn"
    name = "org.slf4j.**"
    exclude = false

Replay order is fixed rather than taken from the file, because TOML keeps
no order between differently named tables: included descriptions first,
then every ``[[classpath]]`` table, then every ``[[filter]]`` table, then
``text``. Within each array, tables keep their file order. A location's
filters are declared as ``filter`` (in its own order), then ``exclude``,
then ``include``; the name filter is read first-match, so put mixed
inclusions and exclusions in ``filter`` when their order matters.
"""

from __future__ import annotations

from pathlib import Path
from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from shrinkconf.domain.enums import ArchiveType, RuleCategory

ClassPathOption = Literal["injars", "outjars", "libraryjars"]


def _strip_dash(v: Any) -> Any:
    return v.lstrip("-").lower() if isinstance(v, str) else v


class LocationModel(BaseModel):
    """One ``[[classpath.location]]`` table.

    A missing or blank ``path`` is allowed; such a location and its filters
    are left out when the task is flattened.

    Example:
        >>> LocationModel(path="app.war", archive_filter={"jar": "!**-sources.jar"}).archive_filter
        {<ArchiveType.JAR: 'jar'>: '!**-sources.jar'}
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    path: str | None = None
    filter: str | None = None
    include: list[str] = Field(default_factory=list)
    exclude: list[str] = Field(default_factory=list)
    archive_filter: dict[ArchiveType, str] = Field(default_factory=dict)

    @field_validator("archive_filter")
    @classmethod
    def _only_filterable_archives(cls, v: dict[ArchiveType, str]) -> dict[ArchiveType, str]:
        unfilterable = sorted(kind.value for kind in v if not kind.filterable)
        if unfilterable:
            raise ValueError(f"archive kinds without filters: {', '.join(unfilterable)}")
        return v


class ClassPathModel(BaseModel):
    """One ``[[classpath]]`` table: a direct entry or a reference.

    Example:
        >>> ClassPathModel(role="-libraryjars", refid="runtime").role
        'libraryjars'
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    role: ClassPathOption
    id: str | None = None
    refid: str | None = None
    path: str | None = None
    feature_name: str | None = None
    location: list[LocationModel] = Field(default_factory=list)

    @field_validator("role", mode="before")
    @classmethod
    def _normalize_role(cls, v: Any) -> Any:
        """Accept the option spelling with its leading dash."""
        return _strip_dash(v)

    @model_validator(mode="after")
    def _reference_has_no_state(self) -> ClassPathModel:
        if self.refid is not None and (self.path is not None or self.location or self.feature_name is not None):
            raise ValueError("a classpath reference cannot declare its own locations")
        return self


class FilterModel(BaseModel):
    """One ``[[filter]]`` table.

    Example:
        >>> FilterModel(option="-keepattributes", name="*Annotation*").option
        <RuleCategory.KEEP_ATTRIBUTES: 'keepattributes'>
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    option: RuleCategory
    name: str | None = None
    exclude: bool = False
    id: str | None = None
    refid: str | None = None

    @field_validator("option", mode="before")
    @classmethod
    def _normalize_option(cls, v: Any) -> Any:
        return _strip_dash(v)

    @model_validator(mode="after")
    def _reference_has_no_name(self) -> FilterModel:
        if self.refid is not None and self.name is not None:
            raise ValueError("a filter reference cannot declare its own name")
        return self


class TaskDescription(BaseModel):
    """A whole build description file.

    ``source`` is filled in by the loader with the file the description was
    read from; relative ``base_dir`` and ``include`` paths are taken
    relative to that file's directory.
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    base_dir: Path | None = None
    include: list[Path] = Field(default_factory=list)
    text: str | None = None
    classpath: list[ClassPathModel] = Field(default_factory=list)
    filter: list[FilterModel] = Field(default_factory=list)
    source: Path | None = None

    @property
    def directory(self) -> Path:
        """Directory relative paths in this description are taken from."""
        return self.source.parent if self.source is not None else Path.cwd()

    @property
    def resolved_base_dir(self) -> Path:
        """``base_dir`` anchored at :attr:`directory`, or the directory itself."""
        if self.base_dir is None:
            return self.directory
        return self.directory / self.base_dir


__all__ = [
    "ClassPathModel",
    "ClassPathOption",
    "FilterModel",
    "LocationModel",
    "TaskDescription",
]
