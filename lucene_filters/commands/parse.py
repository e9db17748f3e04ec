"""Split a Lucene query into typed filters."""

from __future__ import annotations

import json

import click
from rich.markup import escape

from lucene_filters.cli import Context, pass_context
from lucene_filters.commands import OPERATOR_OPTION, resolve_operator
from lucene_filters.filters import Filter, Rejected, split_query
from lucene_filters.filters.values import format_value, value_to_json
from lucene_filters.search import SearchParseError, parse_query
from lucene_filters.utils.output import console, create_table, error, info, verbose

EXIT_SUCCESS = 0
EXIT_PARSE_ERROR = 1
EXIT_REJECTED = 2


@click.command("parse")
@click.argument("query", nargs=-1, required=True)
@OPERATOR_OPTION
@click.option(
    "--format",
    "-f",
    "output_format",
    type=click.Choice(["table", "json"]),
    default="table",
    help="Output format (default: table)",
)
@pass_context
def cli(
    ctx: Context,
    query: tuple[str, ...],
    operator: str | None,
    output_format: str,
) -> None:
    """Show the filters a Lucene query is made of.

    QUERY is a Lucene query string. Multiple arguments are joined with
    spaces. Asserted filters are joined with the operator, excluded
    filters are preceded by NOT.

    \b
    Examples:
      lucene-filters parse 'name:Alice count:5'
      lucene-filters parse 'color:(red OR blue) NOT size:[1 TO 3]'
      lucene-filters parse --operator and 'a AND b AND NOT c'

    \b
    Exit codes:
      0  the query was split into filters
      1  the query is not valid Lucene syntax
      2  the query cannot be expressed as filters
    """
    config = ctx.config
    op = resolve_operator(operator, config.default_operator)
    query_string = " ".join(query)

    try:
        parsed = parse_query(query_string)
    except SearchParseError as e:
        error(f"Invalid search query: {e}")
        raise SystemExit(EXIT_PARSE_ERROR)

    result = split_query(parsed, config.fields, op, max_depth=config.max_depth)
    if isinstance(result, Rejected):
        error(
            f"Query cannot be edited as filters: {result.reason}",
            hint="Only flat combinations of configured fields are supported",
        )
        raise SystemExit(EXIT_REJECTED)

    verbose(
        f"Found {len(result.positive)} asserted and {len(result.negative)} excluded filters"
    )

    if output_format == "json":
        _print_json(query_string, result.positive, result.negative)
    else:
        _print_table(query_string, result.positive, result.negative)

    raise SystemExit(EXIT_SUCCESS)


def _filter_to_dict(filter_: Filter) -> dict:
    return {
        "field": filter_.field.name,
        "type": filter_.field.type.value,
        "value": value_to_json(filter_.value),
    }


def _print_json(query_string: str, positive: list[Filter], negative: list[Filter]) -> None:
    """Print filters as a JSON object."""
    payload = {
        "query": query_string,
        "positive": [_filter_to_dict(f) for f in positive],
        "negative": [_filter_to_dict(f) for f in negative],
    }
    click.echo(json.dumps(payload, indent=2))


def _print_table(query_string: str, positive: list[Filter], negative: list[Filter]) -> None:
    """Print filters as a Rich table."""
    if not positive and not negative:
        info(f"No filters in: {query_string}")
        return

    table = create_table()
    table.add_column("", no_wrap=True)
    table.add_column("Field", style="field.name", no_wrap=True)
    table.add_column("Type", style="field.type", no_wrap=True)
    table.add_column("Value")

    for filter_ in positive:
        table.add_row(
            "[filter.positive]+[/filter.positive]",
            escape(filter_.field.display_name),
            filter_.field.type.value,
            escape(format_value(filter_.field, filter_.value)),
        )
    for filter_ in negative:
        table.add_row(
            "[filter.negative]NOT[/filter.negative]",
            escape(filter_.field.display_name),
            filter_.field.type.value,
            escape(format_value(filter_.field, filter_.value)),
        )

    console.print(table)
