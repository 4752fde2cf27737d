"""In-memory task loading for testing.

Provides a task loader that satisfies the ``LoadTask`` protocol without
reading description files.

Contents:
    * :class:`TaskStub` - Serves pre-built assemblers and records requests.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path

from shrinkconf.domain.assembler import ConfigurationAssembler

from ..description.loader import LoadedTask


@dataclass
class TaskStub:
    """Hands out assemblers registered per description path.

    Unknown paths yield an empty assembler whose base directory is the
    path's parent. Each test should create its own stub.

    Attributes:
        tasks: Assemblers keyed by description path.
        requested: Paths passed to :meth:`load_task`, in call order.
        raise_exception: When set, :meth:`load_task` raises it.

    Example:
        >>> stub = TaskStub()
        >>> stub.load_task(Path("work", "build.toml")).base_dir.name
        'work'
        >>> len(stub.requested)
        1
    """

    tasks: dict[Path, ConfigurationAssembler] = field(default_factory=dict)
    requested: list[Path] = field(default_factory=list)
    raise_exception: Exception | None = None

    def add(self, path: Path, assembler: ConfigurationAssembler) -> None:
        self.tasks[path] = assembler

    def load_task(self, path: Path) -> LoadedTask:
        """Record the request and return the registered assembler."""
        self.requested.append(path)
        if self.raise_exception is not None:
            raise self.raise_exception
        assembler = self.tasks.get(path, ConfigurationAssembler())
        return LoadedTask(assembler=assembler, base_dir=path.parent, source=path)


__all__ = ["TaskStub"]
