"""Tests for the main CLI module.

These tests verify the export command's options and its error reporting.
"""

import json
from unittest.mock import patch

from typer.testing import CliRunner

from lean_doc_export.cli.main import app
from lean_doc_export.config import Config

runner = CliRunner()


class TestExportCommand:
    """Tests for the export command."""

    def test_defaults_print_to_stdout(self, environment_file, monkeypatch):
        """Test that a bare invocation reads the configured dump and prints."""
        monkeypatch.setattr(Config, "ENVIRONMENT_PATH", environment_file)

        with patch("lean_doc_export.cli.main.export_json") as mock_export:
            result = runner.invoke(app, [])

        assert result.exit_code == 0
        mock_export.assert_called_once()
        _, kwargs = mock_export.call_args
        assert kwargs == {"output_file": None, "plain_text": False}

    def test_to_file(self, environment_file, temp_directory, monkeypatch):
        """Test writing the document to the configured output file."""
        output_file = temp_directory / "json_export.txt"
        monkeypatch.setattr(Config, "OUTPUT_FILE", output_file)

        result = runner.invoke(
            app, ["--environment", str(environment_file), "--to-file"]
        )

        assert result.exit_code == 0
        written = json.loads(output_file.read_text(encoding="utf-8"))
        assert [decl["name"] for decl in written["decls"]] == [
            "nat.add_comm",
            "nat.has_add",
            "prod",
            "tactic.interactive.ring",
        ]

    def test_plain_text_flag(self, environment_file):
        with patch("lean_doc_export.cli.main.export_json") as mock_export:
            result = runner.invoke(
                app, ["--environment", str(environment_file), "--plain-text"]
            )

        assert result.exit_code == 0
        assert mock_export.call_args.kwargs["plain_text"] is True

    def test_missing_environment(self, temp_directory):
        """Test that an unreadable dump reports an error marker."""
        result = runner.invoke(
            app, ["--environment", str(temp_directory / "missing.json")]
        )

        assert result.exit_code == 1
        assert "error" in result.output

    def test_undecodable_environment(self, temp_directory):
        """Test that a dump that is not UTF-8 reports an error marker."""
        path = temp_directory / "environment.json"
        path.write_bytes(b"\xff")

        result = runner.invoke(app, ["--environment", str(path)])

        assert result.exit_code == 1
        assert "error" in result.output
        assert not isinstance(result.exception, UnicodeDecodeError)

    def test_enumeration_failure(self, environment_file):
        with patch(
            "lean_doc_export.cli.main.JsonEnvironment.load"
        ) as mock_load:
            mock_load.return_value.declaration_names.side_effect = RuntimeError(
                "no table"
            )
            result = runner.invoke(app, ["--environment", str(environment_file)])

        assert result.exit_code == 1
        assert "error" in result.output
