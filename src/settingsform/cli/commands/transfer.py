"""``settingsform export`` and ``settingsform import`` commands."""

from __future__ import annotations

from pathlib import Path

import click

from settingsform.cli.console import console, err_console
from settingsform.cli.context import ExitCode
from settingsform.cli.helpers import get_cli_context, open_store
from settingsform.cli.output import format_error, format_success, format_warning
from settingsform.exceptions import ForbiddenError, InvalidFormatError
from settingsform.transfer import SettingsTransfer


def _transfer(ctx: click.Context, schema_path: Path) -> SettingsTransfer:
    cli_ctx = get_cli_context(ctx)
    return SettingsTransfer(
        open_store(ctx, schema_path),
        filename_prefix=cli_ctx.config.transfer.filename_prefix,
    )


@click.command("export")
@click.argument(
    "schema_path", type=click.Path(exists=True, dir_okay=False, path_type=Path)
)
@click.option(
    "-o",
    "--output",
    "output_path",
    type=click.Path(path_type=Path),
    default=None,
    help="File or directory to write; stdout when omitted.",
)
@click.pass_context
def export_command(
    ctx: click.Context, schema_path: Path, output_path: Path | None
) -> None:
    """Export the stored settings as a JSON document.

    When OUTPUT is a directory the file is named after the group, e.g.
    ``wpsf-settings-my_plugin.json``.

    Examples:
        settingsform export settings.yaml
        settingsform export settings.yaml -o backups/
    """
    transfer = _transfer(ctx, schema_path)
    document = transfer.export_document(transfer.group_id)

    if output_path is None:
        click.echo(document.body.decode("utf-8"))
        return

    if output_path.is_dir():
        output_path = output_path / document.filename
    output_path.write_bytes(document.body)
    if not get_cli_context(ctx).quiet:
        console.print(format_success(f"Exported to {output_path}"), markup=False)


@click.command("import")
@click.argument(
    "schema_path", type=click.Path(exists=True, dir_okay=False, path_type=Path)
)
@click.argument(
    "document_path", type=click.Path(exists=True, dir_okay=False, path_type=Path)
)
@click.pass_context
def import_command(ctx: click.Context, schema_path: Path, document_path: Path) -> None:
    """Replace the stored settings with an exported JSON document.

    Keys the schema does not know are stored as well and reported in a warning.

    Examples:
        settingsform import settings.yaml wpsf-settings-my_plugin.json
    """
    transfer = _transfer(ctx, schema_path)
    try:
        result = transfer.import_settings(
            transfer.group_id, document_path.read_bytes()
        )
    except (ForbiddenError, InvalidFormatError) as e:
        err_console.print(format_error(e.message), markup=False)
        raise SystemExit(ExitCode.FAILURE) from e

    if not get_cli_context(ctx).quiet:
        console.print(
            format_success(f"Imported {result.keys} settings into '{result.group_id}'"),
            markup=False,
        )

    unknown = sorted(
        set(transfer.store.persisted()) - set(transfer.store.schema.field_keys())
    )
    if unknown:
        err_console.print(
            format_warning(
                f"{len(unknown)} imported keys are not in the schema: "
                + ", ".join(unknown)
            ),
            markup=False,
        )
