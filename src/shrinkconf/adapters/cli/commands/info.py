"""Package metadata and capability listing."""

from __future__ import annotations

import logging

import lib_log_rich.runtime
import rich_click as click

from shrinkconf import __init__conf__
from shrinkconf.domain.enums import ARCHIVE_FILTER_ORDER, RuleCategory
from shrinkconf.domain.filters import EXCLUSION_MARKER
from shrinkconf.domain.options import CLASSPATH_OPTIONS, FILTER_GROUP_SEPARATOR

from ..constants import CLICK_CONTEXT_SETTINGS

logger = logging.getLogger(__name__)


def capability_lines() -> list[str]:
    """Describe the options ``assemble`` understands and produces.

    Example:
        >>> capability_lines()[1]
        '    classpath options    = -injars, -outjars, -libraryjars'
    """
    class_specs = [category.option for category in RuleCategory if category.takes_class_specification]
    filters = [category.option for category in RuleCategory if not category.takes_class_specification]
    fields = [
        ("classpath options", ", ".join(CLASSPATH_OPTIONS)),
        ("class specifications", ", ".join(class_specs)),
        ("filter rules", ", ".join(filters)),
        ("archive filters", FILTER_GROUP_SEPARATOR.join([*(kind.value for kind in ARCHIVE_FILTER_ORDER), "name"])),
        ("default exclusion", EXCLUSION_MARKER),
    ]
    pad = max(len(label) for label, _ in fields)
    return ["Supported options:", *(f"    {label.ljust(pad)} = {value}" for label, value in fields)]


@click.command("info", context_settings=CLICK_CONTEXT_SETTINGS)
def cli_info() -> None:
    """Print package metadata and the rule groups ``assemble`` understands.

    Example:
        >>> from click.testing import CliRunner
        >>> runner = CliRunner()
        >>> result = runner.invoke(cli_info)
        >>> result.exit_code == 0
        True
    """
    with lib_log_rich.runtime.bind(job_id="cli-info", extra={"command": "info"}):
        logger.info("Displaying package information")
        __init__conf__.print_info()
        click.echo("")
        click.echo("\n".join(capability_lines()))


__all__ = ["capability_lines", "cli_info"]
