"""Tests for the settingsform CLI commands.

Commands are invoked through Click's CliRunner against a file backend in a
temporary directory.
"""

from __future__ import annotations

import json
from pathlib import Path

from click.testing import CliRunner, Result

from settingsform import __version__
from settingsform.main import cli


def _invoke(runner: CliRunner, config: Path, *args: str) -> Result:
    return runner.invoke(cli, ["--config", str(config), *args])


# =============================================================================
# Entry point
# =============================================================================


class TestEntryPoint:
    """Tests for the cli group."""

    def test_version(self, cli_runner: CliRunner) -> None:
        """Test --version prints the package version."""
        result = cli_runner.invoke(cli, ["--version"])

        assert result.exit_code == 0
        assert __version__ in result.output

    def test_no_command_shows_help(
        self, cli_runner: CliRunner, cli_config: Path
    ) -> None:
        """Test running without a command prints the help."""
        result = _invoke(cli_runner, cli_config)

        assert result.exit_code == 0
        assert "check" in result.output
        assert "export" in result.output

    def test_invalid_config(self, cli_runner: CliRunner, temp_dir: Path) -> None:
        """Test a bad config file exits with the offending field."""
        config = temp_dir / "bad.yaml"
        config.write_text("storage:\n  backend: redis\n")

        result = _invoke(cli_runner, config, "check", "missing.yaml")

        assert result.exit_code == 1
        assert "Field: storage.backend" in result.output


# =============================================================================
# check
# =============================================================================


class TestCheck:
    """Tests for the check command."""

    def test_valid_schema(
        self, cli_runner: CliRunner, cli_config: Path, schema_file: Path
    ) -> None:
        """Test a valid schema lists its keys."""
        result = _invoke(cli_runner, cli_config, "check", str(schema_file))

        assert result.exit_code == 0
        assert "general_basic_title" in result.output
        assert "Schema 'my_plugin' is valid (2 sections, 6 fields)" in result.output

    def test_invalid_schema(
        self, cli_runner: CliRunner, cli_config: Path, temp_dir: Path
    ) -> None:
        """Test an invalid schema fails with its location."""
        path = temp_dir / "broken.yaml"
        path.write_text("group_id: g\nsections:\n  - section_title: No id\n")

        result = _invoke(cli_runner, cli_config, "check", str(path))

        assert result.exit_code == 1
        assert "Error: Section is missing 'section_id'" in result.output
        assert "at sections.0" in result.output


# =============================================================================
# show
# =============================================================================


class TestShow:
    """Tests for the show command."""

    def test_json_defaults(
        self, cli_runner: CliRunner, cli_config: Path, schema_file: Path
    ) -> None:
        """Test effective values as JSON."""
        result = _invoke(cli_runner, cli_config, "show", str(schema_file), "-f", "json")

        assert result.exit_code == 0
        values = json.loads(result.output)
        assert values["general_basic_title"] == "foo"
        assert values["general_basic_disabled"] is False

    def test_unprefixed(
        self, cli_runner: CliRunner, cli_config: Path, schema_file: Path
    ) -> None:
        """Test bare field ids."""
        result = _invoke(
            cli_runner,
            cli_config,
            "show",
            str(schema_file),
            "--unprefixed",
            "--format",
            "json",
        )

        assert result.exit_code == 0
        assert json.loads(result.output)["title"] == "foo"

    def test_table_marks_source(
        self, cli_runner: CliRunner, cli_config: Path, schema_file: Path
    ) -> None:
        """Test the table says where each value comes from."""
        result = _invoke(cli_runner, cli_config, "show", str(schema_file))

        assert result.exit_code == 0
        assert "default" in result.output


# =============================================================================
# render
# =============================================================================


class TestRender:
    """Tests for the render command."""

    def test_stdout(
        self, cli_runner: CliRunner, cli_config: Path, schema_file: Path
    ) -> None:
        """Test the form HTML goes to stdout."""
        result = _invoke(cli_runner, cli_config, "render", str(schema_file))

        assert result.exit_code == 0
        assert '<form id="wpsf_form"' in result.output
        assert 'href="#tab-general"' in result.output

    def test_output_file(
        self,
        cli_runner: CliRunner,
        cli_config: Path,
        schema_file: Path,
        temp_dir: Path,
    ) -> None:
        """Test -o writes the HTML to a file."""
        output = temp_dir / "form.html"

        result = _invoke(
            cli_runner, cli_config, "render", str(schema_file), "-o", str(output)
        )

        assert result.exit_code == 0
        assert "wpsf-settings--my_plugin" in output.read_text(encoding="utf-8")


# =============================================================================
# export / import
# =============================================================================


class TestTransfer:
    """Tests for the export and import commands."""

    def test_export_empty(
        self, cli_runner: CliRunner, cli_config: Path, schema_file: Path
    ) -> None:
        """Test exporting a group with nothing stored."""
        result = _invoke(cli_runner, cli_config, "export", str(schema_file))

        assert result.exit_code == 0
        assert result.output.strip() == "{}"

    def test_import_then_export(
        self,
        cli_runner: CliRunner,
        cli_config: Path,
        schema_file: Path,
        temp_dir: Path,
    ) -> None:
        """Test an imported document is stored and exported again."""
        document = temp_dir / "in.json"
        document.write_text('{"general_basic_title": "bar", "legacy": 1}')

        imported = _invoke(
            cli_runner, cli_config, "import", str(schema_file), str(document)
        )
        assert imported.exit_code == 0
        assert "Imported 2 settings into 'my_plugin'" in imported.output
        assert "Warning: 1 imported keys are not in the schema: legacy" in (
            imported.output
        )

        shown = _invoke(cli_runner, cli_config, "show", str(schema_file), "-f", "json")
        assert json.loads(shown.output)["general_basic_title"] == "bar"

        exported = _invoke(
            cli_runner, cli_config, "export", str(schema_file), "-o", str(temp_dir)
        )
        assert exported.exit_code == 0
        body = (temp_dir / "backup-my_plugin.json").read_text(encoding="utf-8")
        assert body == '{"general_basic_title":"bar","legacy":1}'

    def test_import_invalid_document(
        self,
        cli_runner: CliRunner,
        cli_config: Path,
        schema_file: Path,
        temp_dir: Path,
    ) -> None:
        """Test a non-object document is rejected and nothing is stored."""
        document = temp_dir / "bad.json"
        document.write_text("[1, 2, 3]")

        result = _invoke(
            cli_runner, cli_config, "import", str(schema_file), str(document)
        )

        assert result.exit_code == 1
        assert "Error: Settings document must be a JSON object" in result.output
        assert not (temp_dir / "store" / "my_plugin_settings.json").exists()
