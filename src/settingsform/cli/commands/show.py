"""``settingsform show`` command."""

from __future__ import annotations

from pathlib import Path

import click
from rich.table import Table

from settingsform.cli.console import console
from settingsform.cli.helpers import open_store
from settingsform.cli.output import OutputFormat, format_json


@click.command()
@click.argument(
    "schema_path", type=click.Path(exists=True, dir_okay=False, path_type=Path)
)
@click.option(
    "--unprefixed",
    is_flag=True,
    default=False,
    help="Key values by bare field id instead of derived key.",
)
@click.option(
    "-f",
    "--format",
    "fmt",
    type=click.Choice([f.value for f in OutputFormat]),
    default=OutputFormat.TABLE.value,
    help="Output format.",
)
@click.pass_context
def show(ctx: click.Context, schema_path: Path, unprefixed: bool, fmt: str) -> None:
    """Display the effective settings values (defaults under stored values).

    Examples:
        settingsform show settings.yaml
        settingsform show settings.yaml --unprefixed --format json
    """
    store = open_store(ctx, schema_path)
    values = store.read(unprefixed=unprefixed)

    if fmt == OutputFormat.JSON.value:
        click.echo(format_json(values))
        return

    stored = store.persisted()
    table = Table(padding=(0, 2))
    table.add_column("Key", style="bold")
    table.add_column("Value")
    if not unprefixed:
        table.add_column("Source")
    for key, value in values.items():
        if unprefixed:
            table.add_row(key, repr(value))
        else:
            table.add_row(key, repr(value), "stored" if key in stored else "default")
    console.print(table)
