"""End-to-end tests: build a query from filters, then split it back."""

from __future__ import annotations

import json
from pathlib import Path

import pytest
from click.testing import CliRunner

from lucene_filters.cli import cli
from lucene_filters.config import load_config


def _run(config: Path, *args: str):
    result = CliRunner().invoke(cli, ["--quiet", "--config", str(config), *args])
    return result


def _build(config: Path, *args: str) -> str:
    result = _run(config, "build", *args)
    assert result.exit_code == 0, result.output
    return result.output.rstrip("\n")


def _parse(config: Path, *args: str) -> dict:
    result = _run(config, "parse", "-f", "json", *args)
    assert result.exit_code == 0, result.output
    return json.loads(result.output)


def test_example_config_loads(example_config: Path) -> None:
    config, warnings = load_config(example_config)
    assert warnings == []
    assert len(config.fields) == 8
    assert config.fields.get("enum-field").label_for("blue") == "Blue-ish"


def test_build_then_parse(example_config: Path) -> None:
    query = _build(
        example_config,
        "string-field=hello world",
        "integer-range-field=2..8",
        "enum-field=red,black and white",
        "-x",
        "boolean-field=true",
        "-x",
        "float-field=0.25",
    )
    assert query == (
        'string-field:"hello world" integer-range-field:[2 TO 8] '
        'enum-field:(red OR "black and white") NOT boolean-field:true NOT float-field:0.25'
    )

    payload = _parse(example_config, query)
    assert payload["positive"] == [
        {"field": "string-field", "type": "string", "value": "hello world"},
        {"field": "integer-range-field", "type": "integer-range", "value": [2, 8]},
        {"field": "enum-field", "type": "enum", "value": ["red", "black and white"]},
    ]
    assert payload["negative"] == [
        {"field": "boolean-field", "type": "boolean", "value": True},
        {"field": "float-field", "type": "float", "value": 0.25},
    ]


@pytest.mark.parametrize("operator", ["and", "or", "implicit"])
def test_round_trip_with_operator(example_config: Path, operator: str) -> None:
    query = _build(
        example_config,
        "--operator",
        operator,
        "string-field=a",
        "<implicit>=b",
        "-x",
        "integer-field=3",
    )
    payload = _parse(example_config, "--operator", operator, query)
    assert [f["value"] for f in payload["positive"]] == ["a", "b"]
    assert [f["value"] for f in payload["negative"]] == [3]


def test_added_field_is_usable(example_config: Path) -> None:
    result = _run(example_config, "fields", "add", "size", "-t", "integer", "--min", "0")
    assert result.exit_code == 0, result.output

    query = _build(example_config, "size=12")
    assert query == "size:12"
    assert _parse(example_config, query)["positive"] == [
        {"field": "size", "type": "integer", "value": 12}
    ]


def test_mismatched_operator_is_rejected(example_config: Path) -> None:
    query = _build(example_config, "--operator", "or", "string-field=a", "string-field=b")
    result = _run(example_config, "parse", "--operator", "and", query)
    assert result.exit_code == 2
