"""Compose a Lucene query from typed filters."""

from __future__ import annotations

import click

from lucene_filters.cli import Context, pass_context
from lucene_filters.commands import OPERATOR_OPTION, resolve_operator
from lucene_filters.exceptions import ValidationError
from lucene_filters.filters import Filter, build_query, unknown_options
from lucene_filters.filters.values import parse_assignment
from lucene_filters.search import to_query_string
from lucene_filters.utils.output import debug, error, warning

EXIT_SUCCESS = 0
EXIT_INVALID_FILTER = 1


@click.command("build")
@click.argument("assignments", metavar="FIELD=VALUE...", nargs=-1)
@click.option(
    "--exclude",
    "-x",
    "exclusions",
    multiple=True,
    metavar="FIELD=VALUE",
    help="Filter to exclude with NOT (repeatable)",
)
@OPERATOR_OPTION
@pass_context
def cli(
    ctx: Context,
    assignments: tuple[str, ...],
    exclusions: tuple[str, ...],
    operator: str | None,
) -> None:
    """Print the Lucene query for a set of filters.

    Each FIELD=VALUE names a configured field and its value. Enum values
    are comma-separated option keys, ranges are written MIN..MAX and
    booleans as true or false.

    \b
    Examples:
      lucene-filters build name=Alice count=5
      lucene-filters build color=red,blue -x size=1..3
      lucene-filters build --operator or name=Alice name=Bob
    """
    config = ctx.config
    op = resolve_operator(operator, config.default_operator)

    try:
        positive = [parse_assignment(config.fields, a) for a in assignments]
        negative = [parse_assignment(config.fields, a) for a in exclusions]
    except ValidationError as e:
        error(str(e), hint="List the configured fields with: lucene-filters fields list")
        raise SystemExit(EXIT_INVALID_FILTER)

    if not ctx.quiet:
        _warn_unknown_options([*positive, *negative])

    root = build_query(positive, negative, op)
    debug(f"Composed {len(positive)} asserted and {len(negative)} excluded filters")
    click.echo(to_query_string(root))

    raise SystemExit(EXIT_SUCCESS)


def _warn_unknown_options(filters: list[Filter]) -> None:
    for filter_ in filters:
        unknown = unknown_options(filter_)
        if unknown:
            warning(
                f"Field '{filter_.field.name}' has no option(s) {', '.join(unknown)}; "
                f"known: {', '.join(filter_.field.option_keys)}"
            )
