"""Shared CLI constants.

Contents:
    * :data:`CLICK_CONTEXT_SETTINGS` - Help flags shared by every command.
    * :data:`FORMAT_CHOICES` - ``--format`` values of ``config`` and ``assemble``.
    * :data:`OUTPUT_ENCODING` - Encoding of files written by ``assemble --output``.
    * :data:`TRACEBACK_SUMMARY_LIMIT` / :data:`TRACEBACK_VERBOSE_LIMIT` - Traceback budgets.
"""

from __future__ import annotations

from typing import Final

from shrinkconf.domain.enums import OutputFormat

CLICK_CONTEXT_SETTINGS: Final[dict[str, list[str]]] = {"help_option_names": ["-h", "--help"]}

#: Option text is the default, JSON is for tooling.
FORMAT_CHOICES: Final[tuple[str, ...]] = tuple(fmt.value for fmt in OutputFormat)

OUTPUT_ENCODING: Final[str] = "utf-8"

#: Characters of traceback printed without ``--traceback``.
TRACEBACK_SUMMARY_LIMIT: Final[int] = 500

#: Characters of traceback printed with ``--traceback``.
TRACEBACK_VERBOSE_LIMIT: Final[int] = 10_000

__all__ = [
    "CLICK_CONTEXT_SETTINGS",
    "FORMAT_CHOICES",
    "OUTPUT_ENCODING",
    "TRACEBACK_SUMMARY_LIMIT",
    "TRACEBACK_VERBOSE_LIMIT",
]
