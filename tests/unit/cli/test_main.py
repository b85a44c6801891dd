"""Unit tests for the main CLI application."""

from pathlib import Path

from typer.testing import CliRunner
from wingen import __version__
from wingen.cli.main import app

runner = CliRunner()


class TestMainApp:
    """Tests for global options."""

    def test_version(self) -> None:
        """--version prints the version and exits."""
        result = runner.invoke(app, ["--version"])
        assert result.exit_code == 0
        assert f"wingen version {__version__}" in result.stdout

    def test_help_lists_commands(self) -> None:
        """Help lists every command."""
        result = runner.invoke(app, ["--help"])
        assert result.exit_code == 0
        for command in ("catalog", "plan", "generate", "share", "config"):
            assert command in result.stdout

    def test_invalid_config_file(self, cli_args: list[str], config_file: Path) -> None:
        """A broken config file is reported and exits with code 1."""
        config_file.write_text("not = [valid")
        result = runner.invoke(app, [*cli_args, "plan", "vscode"])
        assert result.exit_code == 1
        assert "Invalid TOML syntax" in result.output
