"""Static package metadata surfaced to CLI commands and documentation.

Values mirror ``pyproject.toml`` so the CLI can report them without
reading installed distribution metadata at runtime.

Contents:
    * Metadata constants (name, title, version, homepage, author, shell_command).
    * ``LAYEREDCONF_*`` identifiers used for configuration file discovery.
    * :func:`print_info` - render the metadata block.
"""

from __future__ import annotations

#: Distribution name declared in pyproject.toml.
name = "shrinkconf"
#: Human-readable summary shown in CLI help output.
title = "Compose classpath entries and filter rules into shrinker configurations"
#: Current release version.
version = "0.1.0"
#: Repository homepage.
homepage = "https://github.com/shrinkconf/shrinkconf"
#: Author attribution.
author = "shrinkconf contributors"
#: Contact email.
author_email = "maintainers@shrinkconf.dev"
#: Console-script name published by the package.
shell_command = "shrinkconf"

#: Vendor identifier for lib_layered_config paths (macOS/Windows).
LAYEREDCONF_VENDOR: str = "shrinkconf"
#: Application name for lib_layered_config paths (macOS/Windows).
LAYEREDCONF_APP: str = "shrinkconf"
#: Configuration slug for lib_layered_config Linux paths and environment variables.
LAYEREDCONF_SLUG: str = "shrinkconf"


def print_info() -> None:
    """Print the summarised metadata block used by the CLI ``info`` command.

    Example:
        >>> print_info()  # doctest: +ELLIPSIS
        Info for shrinkconf:
        ...
    """
    fields = [
        ("name", name),
        ("title", title),
        ("version", version),
        ("homepage", homepage),
        ("author", author),
        ("author_email", author_email),
        ("shell_command", shell_command),
    ]
    pad = max(len(label) for label, _ in fields)
    lines = [f"Info for {name}:", ""]
    lines.extend(f"    {label.ljust(pad)} = {value}" for label, value in fields)
    print("\n".join(lines))


__all__ = [
    "LAYEREDCONF_APP",
    "LAYEREDCONF_SLUG",
    "LAYEREDCONF_VENDOR",
    "author",
    "author_email",
    "homepage",
    "name",
    "print_info",
    "shell_command",
    "title",
    "version",
]
