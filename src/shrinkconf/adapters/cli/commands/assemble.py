"""Assemble a build description into processing-tool options.

Contents:
    * :func:`cli_assemble` - Load, flatten and render one build description.
"""

from __future__ import annotations

import logging
from pathlib import Path

import lib_log_rich.runtime
import rich_click as click

from shrinkconf.domain.enums import OutputFormat
from shrinkconf.domain.errors import ConfigurationError

from ..constants import CLICK_CONTEXT_SETTINGS, FORMAT_CHOICES, OUTPUT_ENCODING
from ..context import get_cli_context
from ..exit_codes import ExitCode

logger = logging.getLogger(__name__)


@click.command("assemble", context_settings=CLICK_CONTEXT_SETTINGS)
@click.argument("description", type=click.Path(dir_okay=False, path_type=Path))
@click.option(
    "--base-dir",
    type=click.Path(file_okay=False, path_type=Path),
    default=None,
    help="Directory relative locations resolve against (default: [shrinkconf].base_dir, then the description's)",
)
@click.option(
    "--format",
    "output_format",
    type=click.Choice(FORMAT_CHOICES, case_sensitive=False),
    default=OutputFormat.HUMAN.value,
    help="Output format (option text or JSON)",
)
@click.option(
    "--output",
    type=click.Path(dir_okay=False, path_type=Path),
    default=None,
    help="Write the result to FILE instead of stdout",
)
@click.pass_context
def cli_assemble(
    ctx: click.Context,
    description: Path,
    base_dir: Path | None,
    output_format: str,
    output: Path | None,
) -> None:
    r"""Flatten a TOML build description and print the resulting options.

    \b
    Base directory precedence:
    - --base-dir
    - [shrinkconf].base_dir from the layered configuration
    - base_dir inside the description, else the description's directory

    Entries from exclusion filters are prefixed with
    [shrinkconf].exclusion_marker ("!" by default).
    """
    cli_ctx = get_cli_context(ctx)
    fmt = OutputFormat(output_format.lower())

    extra = {"command": "assemble", "description": str(description), "format": fmt.value}
    with lib_log_rich.runtime.bind(job_id="cli-assemble", extra=extra):
        try:
            settings = cli_ctx.assembly_settings()
            loaded = cli_ctx.services.load_task(description)
            effective_base_dir = base_dir if base_dir is not None else settings.effective_base_dir(loaded.base_dir)
            configuration = loaded.assembler.flatten(effective_base_dir, settings.exclusion_marker)
        except FileNotFoundError as exc:
            logger.error("Build description not found", extra={"error": str(exc)})
            click.echo(f"\nError: Build description not found: {description}", err=True)
            raise SystemExit(ExitCode.FILE_NOT_FOUND) from exc
        except ConfigurationError as exc:
            logger.error("Invalid build configuration", extra={"error": str(exc)})
            click.echo(f"\nError: {exc}", err=True)
            raise SystemExit(ExitCode.CONFIG_ERROR) from exc

        logger.info(
            "Assembled configuration",
            extra={
                "base_dir": str(effective_base_dir),
                "program_jars": len(configuration.program_jars),
                "library_jars": len(configuration.library_jars),
                "rules": len(configuration.rules),
            },
        )
        rendered = cli_ctx.services.render_configuration(
            configuration, output_format=fmt, exclusion_marker=settings.exclusion_marker
        )
        _emit(rendered, output)


def _emit(rendered: str, output: Path | None) -> None:
    if output is None:
        click.echo(rendered, nl=not rendered.endswith("\n"))
        return
    output.write_text(rendered, encoding=OUTPUT_ENCODING)
    logger.info("Wrote configuration", extra={"output": str(output)})
    click.echo(f"Configuration written to {output}")


__all__ = ["cli_assemble"]
