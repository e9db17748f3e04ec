"""Unit tests for the build command."""

from __future__ import annotations

from pathlib import Path

import pytest
from click.testing import CliRunner

from lucene_filters.cli import cli


def _invoke(config: Path, *args: str):
    runner = CliRunner()
    return runner.invoke(cli, ["--config", str(config), "build", *args])


class TestBuildCommand:
    def test_positive_filters(self, sample_config: Path) -> None:
        result = _invoke(sample_config, "string-field=hello", "integer-field=3")
        assert result.exit_code == 0, result.output
        assert result.output == "string-field:hello integer-field:3\n"

    def test_excluded_filters(self, sample_config: Path) -> None:
        result = _invoke(sample_config, "enum-field=red,blue", "-x", "integer-field=3")
        assert result.exit_code == 0, result.output
        assert result.output == "enum-field:(red OR blue) NOT integer-field:3\n"

    def test_only_excluded(self, sample_config: Path) -> None:
        result = _invoke(sample_config, "--exclude", "boolean-field=true")
        assert result.exit_code == 0, result.output
        assert result.output == "NOT boolean-field:true\n"

    @pytest.mark.parametrize(
        ("operator", "expected"),
        [
            ("or", "string-field:a OR string-field:b NOT_OP string-field:c"),
            ("and", "string-field:a AND string-field:b NOT_OP string-field:c"),
            ("implicit", "string-field:a string-field:b NOT_OP string-field:c"),
        ],
    )
    def test_operator_option(self, sample_config: Path, operator: str, expected: str) -> None:
        negated = {"or": "OR NOT", "and": "AND NOT", "implicit": "NOT"}[operator]
        result = _invoke(
            sample_config,
            "--operator",
            operator,
            "string-field=a",
            "string-field=b",
            "-x",
            "string-field=c",
        )
        assert result.exit_code == 0, result.output
        assert result.output == expected.replace("NOT_OP", negated) + "\n"

    def test_values_are_quoted(self, sample_config: Path) -> None:
        result = _invoke(sample_config, "string-field=hello world", "integer-field=-2")
        assert result.exit_code == 0, result.output
        assert result.output == 'string-field:"hello world" integer-field:"-2"\n'

    def test_range(self, sample_config: Path) -> None:
        result = _invoke(sample_config, "float-range-field=0.2..0.6")
        assert result.exit_code == 0, result.output
        assert result.output == "float-range-field:[0.2 TO 0.6]\n"

    def test_no_filters(self, sample_config: Path) -> None:
        result = _invoke(sample_config)
        assert result.exit_code == 0, result.output
        assert result.output == "\n"


class TestBuildFailures:
    def test_unknown_field(self, sample_config: Path) -> None:
        result = _invoke(sample_config, "color=red")
        assert result.exit_code == 1
        assert "unknown field 'color'" in result.output

    def test_bad_value(self, sample_config: Path) -> None:
        result = _invoke(sample_config, "integer-field=many")
        assert result.exit_code == 1

    def test_missing_equals(self, sample_config: Path) -> None:
        result = _invoke(sample_config, "string-field")
        assert result.exit_code == 1

    def test_unknown_enum_option_warns(self, sample_config: Path) -> None:
        result = _invoke(sample_config, "enum-field=red,purple")
        assert result.exit_code == 0
        assert "purple" in result.output
        assert "enum-field:(red OR purple)" in result.output

    def test_quiet_suppresses_option_warning(self, sample_config: Path) -> None:
        runner = CliRunner()
        result = runner.invoke(
            cli, ["--quiet", "--config", str(sample_config), "build", "enum-field=purple"]
        )
        assert result.exit_code == 0
        assert result.output == "enum-field:(purple)\n"

    def test_markup_in_values_is_printed_literally(self, sample_config: Path) -> None:
        result = _invoke(sample_config, "enum-field=[bold]red")
        assert result.exit_code == 0, result.output
        assert "[bold]red" in result.output
        assert result.output.endswith('enum-field:("[bold]red")\n')

    def test_many_filters(self, sample_config: Path) -> None:
        assignments = [f"string-field=v{i}" for i in range(600)]
        result = _invoke(sample_config, *assignments)
        assert result.exit_code == 0, result.output
        assert result.output == " ".join(f"string-field:v{i}" for i in range(600)) + "\n"
