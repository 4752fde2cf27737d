"""Build description adapter - TOML task descriptions via rtoml and pydantic.

Contents:
    * :mod:`.models` - Pydantic schema of a description file
    * :mod:`.loader` - Reading descriptions and building assemblers
"""

from __future__ import annotations

from .loader import LoadedTask, build_assembler, load_task, load_task_description, parse_task_description
from .models import ClassPathModel, FilterModel, LocationModel, TaskDescription

__all__ = [
    "ClassPathModel",
    "FilterModel",
    "LoadedTask",
    "LocationModel",
    "TaskDescription",
    "build_assembler",
    "load_task",
    "load_task_description",
    "parse_task_description",
]
