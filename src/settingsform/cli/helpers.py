"""Helpers shared by the CLI commands."""

from __future__ import annotations

from pathlib import Path

import click

from settingsform.cli.console import err_console
from settingsform.cli.context import CLIContext, ExitCode
from settingsform.cli.output import format_error
from settingsform.config import SettingsFormConfig
from settingsform.exceptions import SchemaError
from settingsform.schema import SettingsSchema, load_schema
from settingsform.store import (
    JsonFileOptionBackend,
    MemoryOptionBackend,
    OptionBackend,
    SettingsStore,
)

__all__ = ["create_backend", "load_schema_or_exit", "open_store", "get_cli_context"]


def get_cli_context(ctx: click.Context) -> CLIContext:
    cli_ctx: CLIContext = ctx.obj["cli_ctx"]
    return cli_ctx


def create_backend(config: SettingsFormConfig) -> OptionBackend:
    """Option backend selected by ``storage.backend``."""
    if config.storage.backend == "memory":
        return MemoryOptionBackend()
    return JsonFileOptionBackend(config.storage.directory)


def load_schema_or_exit(path: Path) -> SettingsSchema:
    """Build the schema at ``path``; print the error and exit on failure."""
    try:
        return load_schema(path)
    except SchemaError as e:
        details = [f"at {e.location}"] if e.location else None
        err_console.print(format_error(e.message, details=details), markup=False)
        raise SystemExit(ExitCode.FAILURE) from e


def open_store(ctx: click.Context, schema_path: Path) -> SettingsStore:
    """Schema and store for a command, using the configured backend."""
    cli_ctx = get_cli_context(ctx)
    schema = load_schema_or_exit(schema_path)
    return SettingsStore(schema, create_backend(cli_ctx.config))
