"""Unit tests for the top-level command group."""

from __future__ import annotations

from pathlib import Path

from click.testing import CliRunner

from lucene_filters import __version__
from lucene_filters.cli import cli


class TestGroup:
    def test_version(self) -> None:
        result = CliRunner().invoke(cli, ["--version"])
        assert result.exit_code == 0
        assert __version__ in result.output

    def test_commands_are_registered(self) -> None:
        assert {"parse", "build", "fields", "init-config", "help"} <= set(cli.commands)

    def test_invalid_config_exits_1(self, temp_dir: Path) -> None:
        config_path = temp_dir / "broken.toml"
        config_path.write_text("[query\n")
        result = CliRunner().invoke(cli, ["--config", str(config_path), "fields", "list"])
        assert result.exit_code == 1
        assert "Cannot parse" in result.output

    def test_invalid_config_value_exits_1(self, temp_dir: Path) -> None:
        config_path = temp_dir / "bad.toml"
        config_path.write_text('[query]\ndefault_operator = "XOR"\n')
        result = CliRunner().invoke(cli, ["--config", str(config_path), "fields", "list"])
        assert result.exit_code == 1
        assert "default_operator" in result.output

    def test_missing_config_warns(self, temp_dir: Path) -> None:
        result = CliRunner().invoke(
            cli, ["--config", str(temp_dir / "none.toml"), "fields", "list", "-f", "json"]
        )
        assert result.exit_code == 0
        assert "No config file found" in result.output


class TestHelpCommand:
    def test_group_help(self) -> None:
        result = CliRunner().invoke(cli, ["help"])
        assert result.exit_code == 0
        assert "parse" in result.output
        assert "build" in result.output

    def test_command_help(self) -> None:
        result = CliRunner().invoke(cli, ["help", "parse"])
        assert result.exit_code == 0
        assert "--operator" in result.output

    def test_nested_command_help(self) -> None:
        result = CliRunner().invoke(cli, ["help", "fields", "add"])
        assert result.exit_code == 0
        assert "--autocomplete" in result.output

    def test_unknown_command(self) -> None:
        result = CliRunner().invoke(cli, ["help", "frobnicate"])
        assert result.exit_code == 1
        assert "Unknown command" in result.output
