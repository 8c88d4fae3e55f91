"""CLI entry point for settingsform.

This module defines the Click-based command-line interface.
"""

from __future__ import annotations

import logging
from pathlib import Path

import click
from dotenv import load_dotenv

# Load .env before anything reads SETTINGSFORM_* variables.
load_dotenv(dotenv_path=Path.cwd() / ".env", override=False)

from settingsform import __version__  # noqa: E402
from settingsform.cli.commands.check import check  # noqa: E402
from settingsform.cli.commands.render import render  # noqa: E402
from settingsform.cli.commands.show import show  # noqa: E402
from settingsform.cli.commands.transfer import (  # noqa: E402
    export_command,
    import_command,
)
from settingsform.cli.context import CLIContext, ExitCode  # noqa: E402
from settingsform.cli.output import format_error  # noqa: E402
from settingsform.config import load_config  # noqa: E402
from settingsform.exceptions import ConfigError  # noqa: E402
from settingsform.logging import configure_logging  # noqa: E402

VERBOSITY_LEVELS = {
    "error": logging.ERROR,
    "warning": logging.WARNING,
    "info": logging.INFO,
    "debug": logging.DEBUG,
}


@click.group(invoke_without_command=True)
@click.version_option(version=__version__, prog_name="settingsform")
@click.option(
    "-c",
    "--config",
    "config_file",
    type=click.Path(exists=False, path_type=str),
    default=None,
    help="Path to config file (overrides ./settingsform.yaml).",
)
@click.option(
    "-v",
    "--verbose",
    count=True,
    help="Increase verbosity (-v for INFO, -vv for DEBUG).",
)
@click.option(
    "-q",
    "--quiet",
    is_flag=True,
    default=False,
    help="Suppress non-essential output (ERROR level only).",
)
@click.pass_context
def cli(
    ctx: click.Context,
    config_file: str | None,
    verbose: int,
    quiet: bool,
) -> None:
    """settingsform - declarative settings forms."""
    ctx.ensure_object(dict)

    config_path = Path(config_file) if config_file else None
    try:
        config = load_config(config_path)
    except ConfigError as e:
        details = []
        if e.field:
            details.append(f"Field: {e.field}")
        if e.value is not None:
            details.append(f"Value: {e.value}")
        click.echo(format_error(e.message, details=details), err=True)
        ctx.exit(ExitCode.FAILURE)

    ctx.obj["cli_ctx"] = CLIContext(
        config=config,
        config_path=config_path,
        verbosity=verbose,
        quiet=quiet,
    )

    # Priority: quiet > verbose > config
    if quiet:
        level = logging.ERROR
    elif verbose > 0:
        level = logging.INFO if verbose == 1 else logging.DEBUG
    else:
        level = VERBOSITY_LEVELS.get(config.verbosity, logging.WARNING)
    configure_logging(level=level)

    if ctx.invoked_subcommand is None:
        click.echo(ctx.get_help())


cli.add_command(check)
cli.add_command(show)
cli.add_command(render)
cli.add_command(export_command)
cli.add_command(import_command)

if __name__ == "__main__":
    cli()
