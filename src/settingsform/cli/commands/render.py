"""``settingsform render`` command."""

from __future__ import annotations

from pathlib import Path

import click

from settingsform.cli.console import console
from settingsform.cli.helpers import get_cli_context, open_store
from settingsform.cli.output import format_success
from settingsform.fields import create_default_registry
from settingsform.render import FormRenderer


@click.command()
@click.argument(
    "schema_path", type=click.Path(exists=True, dir_okay=False, path_type=Path)
)
@click.option(
    "-o",
    "--output",
    "output_path",
    type=click.Path(dir_okay=False, path_type=Path),
    default=None,
    help="Write the HTML to a file instead of stdout.",
)
@click.pass_context
def render(ctx: click.Context, schema_path: Path, output_path: Path | None) -> None:
    """Render the settings form as HTML.

    Examples:
        settingsform render settings.yaml
        settingsform render settings.yaml -o form.html
    """
    cli_ctx = get_cli_context(ctx)
    store = open_store(ctx, schema_path)
    renderer = FormRenderer(
        store.schema, store, create_default_registry(), config=cli_ctx.config
    )
    html = str(renderer.render_form())

    if output_path is None:
        click.echo(html)
        return

    output_path.write_text(html, encoding="utf-8")
    if not cli_ctx.quiet:
        console.print(format_success(f"Form written to {output_path}"), markup=False)
