"""``settingsform check`` command."""

from __future__ import annotations

from pathlib import Path

import click
from rich.table import Table

from settingsform.cli.console import console
from settingsform.cli.helpers import load_schema_or_exit
from settingsform.cli.output import format_success
from settingsform.logging import get_logger


@click.command()
@click.argument(
    "schema_path", type=click.Path(exists=True, dir_okay=False, path_type=Path)
)
def check(schema_path: Path) -> None:
    """Validate a schema file and list its derived keys.

    Examples:
        settingsform check settings.yaml
    """
    logger = get_logger(__name__)
    schema = load_schema_or_exit(schema_path)

    table = Table(show_lines=False, padding=(0, 2))
    table.add_column("Key", style="bold")
    table.add_column("Type")
    table.add_column("Section")
    for section, field in schema.iter_fields():
        table.add_row(schema.key_for(section, field), field.type, section.section_id)

    console.print(table)
    console.print(
        format_success(
            f"Schema '{schema.group_id}' is valid "
            f"({len(schema.sections)} sections, {len(schema.field_keys())} fields)"
        ),
        markup=False,
    )
    logger.debug("schema_checked", path=str(schema_path), group_id=schema.group_id)
