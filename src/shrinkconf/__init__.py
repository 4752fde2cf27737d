"""Public package surface exposing the composition model, metadata, and configuration.

This module provides the stable public API for the package, routing imports
through the proper architectural layers:
- Domain exports: Filter, classpath, and assembler model
- Composition exports: Wired adapter services (configuration)
- Metadata: Package information
"""

from __future__ import annotations

# Metadata
from .__init__conf__ import print_info

# Composition exports (wired adapters)
from .composition import get_config

# Domain exports
from .domain.assembler import Configuration, ConfigurationAssembler
from .domain.classpath import ClassPathEntry, ClassPathItem
from .domain.enums import ArchiveType, ClassPathRole, RuleCategory
from .domain.errors import ConfigurationError, UnresolvedReferenceError
from .domain.filters import FilterSpec
from .domain.references import Reference

__all__ = [
    "ArchiveType",
    "ClassPathEntry",
    "ClassPathItem",
    "ClassPathRole",
    "Configuration",
    "ConfigurationAssembler",
    "ConfigurationError",
    "FilterSpec",
    "Reference",
    "RuleCategory",
    "UnresolvedReferenceError",
    "get_config",
    "print_info",
]
