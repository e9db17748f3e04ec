"""Declare a new field in the configuration file."""

from __future__ import annotations

from dataclasses import replace

import click

from lucene_filters.cli import Context, pass_context
from lucene_filters.commands.fields import (
    EXIT_INVALID_FIELD,
    EXIT_SUCCESS,
    EXIT_WRITE_ERROR,
    cli,
)
from lucene_filters.config import save_config
from lucene_filters.exceptions import ValidationError
from lucene_filters.filters import FieldDescriptor, FieldType, empty_value
from lucene_filters.filters.values import parse_value_text
from lucene_filters.utils.output import error, success, verbose


def _parse_options(options: tuple[str, ...]) -> tuple[tuple[str, str], ...]:
    """Parse KEY=LABEL pairs; a bare KEY is its own label."""
    parsed = []
    for option in options:
        key, sep, label = option.partition("=")
        if not key:
            raise ValidationError("option", option, "must be written as KEY=LABEL")
        parsed.append((key, label if sep else key))
    return tuple(parsed)


@cli.command("add")
@click.argument("name")
@click.option(
    "--type",
    "-t",
    "field_type",
    type=click.Choice([t.value for t in FieldType]),
    required=True,
    help="Value type of the field",
)
@click.option("--display-name", "-d", default=None, help="Human-readable label")
@click.option(
    "--default",
    "default_text",
    default=None,
    help="Default value, written like a build value (e.g. 5, 1..3, red,blue)",
)
@click.option("--min", "minimum", type=float, default=None, help="Lower numeric bound")
@click.option("--max", "maximum", type=float, default=None, help="Upper numeric bound")
@click.option(
    "--option",
    "-o",
    "options",
    multiple=True,
    metavar="KEY=LABEL",
    help="Enum option (repeatable)",
)
@click.option(
    "--autocomplete",
    is_flag=True,
    default=False,
    help="Offer autocompletion for enum values",
)
@pass_context
def add_field(
    ctx: Context,
    name: str,
    field_type: str,
    display_name: str | None,
    default_text: str | None,
    minimum: float | None,
    maximum: float | None,
    options: tuple[str, ...],
    autocomplete: bool,
) -> None:
    """Add field NAME to the configuration file.

    \b
    Examples:
      lucene-filters fields add count --type integer --min 0 --max 10 --default 5
      lucene-filters fields add color --type enum -o red=Red -o blue=Blue --autocomplete
    """
    config = ctx.config

    if name in config.fields:
        error(f"Field already exists: {name}")
        raise SystemExit(EXIT_INVALID_FIELD)

    try:
        parsed_type = FieldType(field_type)
        # The default text is parsed according to the validated descriptor
        descriptor = FieldDescriptor(
            name=name,
            display_name=display_name or name,
            type=parsed_type,
            default_value=empty_value(parsed_type),
            minimum=minimum,
            maximum=maximum,
            options=_parse_options(options),
            autocomplete=autocomplete,
        )
        if default_text is not None:
            descriptor = replace(
                descriptor, default_value=parse_value_text(descriptor, default_text)
            )
    except ValidationError as e:
        error(str(e))
        raise SystemExit(EXIT_INVALID_FIELD)

    config.fields = config.fields.with_field(descriptor)
    verbose(f"Field registry: {config.fields!r}")

    try:
        save_config(config)
    except OSError as e:
        error(f"Failed to write config file: {e}")
        raise SystemExit(EXIT_WRITE_ERROR)

    success(f"Added {parsed_type.value} field: {name}")
    raise SystemExit(EXIT_SUCCESS)
