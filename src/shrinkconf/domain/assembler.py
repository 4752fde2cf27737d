"""Configuration assembler: ordered declarations flattened for the processing tool.

A task collects classpath entries and filter elements in declaration order.
:meth:`ConfigurationAssembler.flatten` turns that state into a
:class:`Configuration`: per-role lists of resolved classpath items and
per-category filter chains. Flattening is read-only and can be repeated.

Contents:
    * :class:`Configuration` - Flattened result.
    * :class:`ConfigurationDeclaration` - Nested assembler declaration.
    * :class:`ConfigurationAssembler` - Task-owned aggregate.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from pathlib import Path
from types import MappingProxyType

from .classpath import ClassPathEntry, ClassPathItem
from .declarations import ClassPathDeclaration, FilterDeclaration
from .enums import ClassPathRole, RuleCategory
from .errors import UnresolvedReferenceError
from .filters import EXCLUSION_MARKER, FilterSpec, apply_exclusion_marker
from .options import parse_options
from .references import Reference, ReferenceTable


@dataclass(frozen=True, slots=True)
class Configuration:
    """Flattened configuration consumed by the processing tool.

    Attributes:
        program_jars: Input and output archives, in declaration order.
        library_jars: Referenced archives, in declaration order.
        rules: Filter chain per declared rule category. A declared category
            with an empty chain matches every name.

    Example:
        >>> config = Configuration(rules={RuleCategory.DONT_WARN: ("a.**",)})
        >>> config.rule(RuleCategory.DONT_WARN)
        ('a.**',)
        >>> config.rule(RuleCategory.DONT_NOTE) is None
        True
    """

    program_jars: tuple[ClassPathItem, ...] = ()
    library_jars: tuple[ClassPathItem, ...] = ()
    rules: Mapping[RuleCategory, tuple[str, ...]] = field(default_factory=lambda: MappingProxyType({}))

    def classpath(self, role: ClassPathRole) -> tuple[ClassPathItem, ...]:
        """Return the items of one classpath role."""
        return self.program_jars if role is ClassPathRole.PROGRAM else self.library_jars

    def rule(self, category: RuleCategory) -> tuple[str, ...] | None:
        """Return the chain of ``category``, or None when it was never declared."""
        return self.rules.get(category)


@dataclass(frozen=True, slots=True)
class ConfigurationDeclaration:
    """Another assembler's declarations, expanded in place when flattening."""

    element: ConfigurationAssembler | Reference


Declaration = ClassPathDeclaration | FilterDeclaration | ConfigurationDeclaration


@dataclass(slots=True)
class _FlattenState:
    base_dir: Path | str | None
    exclusion_marker: str
    program: list[ClassPathItem] = field(default_factory=list)
    library: list[ClassPathItem] = field(default_factory=list)
    rules: dict[RuleCategory, list[str]] = field(default_factory=dict)

    def target(self, role: ClassPathRole) -> list[ClassPathItem]:
        return self.program if role is ClassPathRole.PROGRAM else self.library

    def freeze(self) -> Configuration:
        return Configuration(
            program_jars=tuple(self.program),
            library_jars=tuple(self.library),
            rules=MappingProxyType({category: tuple(chain) for category, chain in self.rules.items()}),
        )


class ConfigurationAssembler:
    """Task-owned aggregate of classpath and filter declarations.

    Declarations are recorded in the order they are made and only read when
    :meth:`flatten` runs. Elements may be given directly or as a
    :class:`~shrinkconf.domain.references.Reference` into :attr:`references`.

    Example:
        >>> assembler = ConfigurationAssembler()
        >>> entry = ClassPathEntry()
        >>> entry.add_location("/work/in.jar")
        >>> assembler.add_injar(entry)
        >>> assembler.add_filter(RuleCategory.DONT_WARN, FilterSpec("com.example.**"))
        >>> assembler.add_filter(RuleCategory.DONT_WARN, FilterSpec("com.example.api.**"), is_inclusion=False)
        >>> config = assembler.flatten()
        >>> [item.path for item in config.program_jars]
        ['/work/in.jar']
        >>> config.rule(RuleCategory.DONT_WARN)
        ('com.example.**', '!com.example.api.**')
    """

    def __init__(self) -> None:
        self._declarations: list[Declaration] = []
        self.references = ReferenceTable()

    @property
    def declarations(self) -> tuple[Declaration, ...]:
        return tuple(self._declarations)

    @property
    def is_empty(self) -> bool:
        return not self._declarations

    def add_injar(self, entry: ClassPathEntry | Reference) -> None:
        """Declare input archives of the program classpath."""
        self._declarations.append(ClassPathDeclaration(ClassPathRole.PROGRAM, entry))

    def add_outjar(self, entry: ClassPathEntry | Reference) -> None:
        """Declare output archives of the program classpath."""
        self._declarations.append(ClassPathDeclaration(ClassPathRole.PROGRAM, entry, output=True))

    def add_libraryjar(self, entry: ClassPathEntry | Reference) -> None:
        """Declare archives of the library classpath."""
        self._declarations.append(ClassPathDeclaration(ClassPathRole.LIBRARY, entry))

    def add_classpath(self, role: ClassPathRole, entry: ClassPathEntry | Reference, *, output: bool = False) -> None:
        self._declarations.append(ClassPathDeclaration(role, entry, output=output))

    def add_filter(self, category: RuleCategory, spec: FilterSpec | Reference, is_inclusion: bool = True) -> None:
        """Declare one filter element under ``category``.

        The category shows up in the flattened result even when ``spec``
        has no name.
        """
        self._declarations.append(FilterDeclaration(category, spec, is_inclusion))

    def add_configuration(self, source: ConfigurationAssembler | Reference) -> None:
        """Declare another assembler whose declarations expand at this point."""
        self._declarations.append(ConfigurationDeclaration(source))

    def add_text(self, text: str) -> None:
        """Parse option text and record its declarations in order.

        Raises:
            ConfigurationError: If the text is not valid option syntax.
        """
        self._declarations.extend(parse_options(text))

    def flatten(
        self,
        base_dir: Path | str | None = None,
        exclusion_marker: str = EXCLUSION_MARKER,
    ) -> Configuration:
        """Flatten all declarations into a :class:`Configuration`.

        Relative locations resolve against ``base_dir`` (the current working
        directory when None). Entries from exclusion filters receive
        ``exclusion_marker``. Unset names and filters without a location are
        left out.

        Raises:
            UnresolvedReferenceError: If a reference cannot be dereferenced
                or nested configurations include each other.
        """
        state = _FlattenState(base_dir=base_dir, exclusion_marker=exclusion_marker)
        self._flatten_into(state, (self,))
        return state.freeze()

    def append_to(self, target: ConfigurationAssembler) -> None:
        """Copy the current declarations onto the end of ``target``.

        References are dereferenced against this assembler's table first, so
        ``target`` receives direct elements. Later changes to this
        assembler's classpath entries do not reach ``target``.

        Raises:
            UnresolvedReferenceError: If a reference cannot be dereferenced.
        """
        self._append_into(target, (self,))

    def _flatten_into(self, state: _FlattenState, active: tuple[ConfigurationAssembler, ...]) -> None:
        for declaration in self._declarations:
            if isinstance(declaration, ClassPathDeclaration):
                entry = self.references.resolve(declaration.element, ClassPathEntry)
                items = entry.items(state.base_dir, output=declaration.output)
                state.target(declaration.role).extend(items)
            elif isinstance(declaration, FilterDeclaration):
                spec = self.references.resolve(declaration.element, FilterSpec)
                chain = state.rules.setdefault(declaration.category, [])
                added: list[str] = []
                spec.append_to(added, declaration.is_inclusion)
                if not declaration.is_inclusion:
                    added = apply_exclusion_marker(added, state.exclusion_marker)
                chain.extend(added)
            else:
                nested = self._nested(declaration, active)
                nested._flatten_into(state, (*active, nested))

    def _append_into(self, target: ConfigurationAssembler, active: tuple[ConfigurationAssembler, ...]) -> None:
        for declaration in self._declarations:
            if isinstance(declaration, ClassPathDeclaration):
                entry = self.references.resolve(declaration.element, ClassPathEntry)
                target.add_classpath(declaration.role, entry.copy(), output=declaration.output)
            elif isinstance(declaration, FilterDeclaration):
                spec = self.references.resolve(declaration.element, FilterSpec)
                target.add_filter(declaration.category, spec, declaration.is_inclusion)
            else:
                nested = self._nested(declaration, active)
                nested._append_into(target, (*active, nested))

    def _nested(
        self,
        declaration: ConfigurationDeclaration,
        active: tuple[ConfigurationAssembler, ...],
    ) -> ConfigurationAssembler:
        nested = self.references.resolve(declaration.element, ConfigurationAssembler)
        if any(nested is seen for seen in active):
            raise UnresolvedReferenceError("Configuration includes itself")
        return nested


__all__ = [
    "Configuration",
    "ConfigurationAssembler",
    "ConfigurationDeclaration",
    "Declaration",
]
