"""List configured fields."""

from __future__ import annotations

import json

import click
from rich.markup import escape

from lucene_filters.cli import Context, pass_context
from lucene_filters.commands.fields import EXIT_SUCCESS, cli
from lucene_filters.filters import FieldDescriptor, FieldType
from lucene_filters.filters.values import format_value, value_to_json
from lucene_filters.utils.output import console, create_table


@cli.command("list")
@click.option(
    "--format",
    "-f",
    "output_format",
    type=click.Choice(["table", "json"]),
    default="table",
    help="Output format (default: table)",
)
@pass_context
def list_fields(ctx: Context, output_format: str) -> None:
    """List the fields queries can be split on."""
    config = ctx.config
    fields = list(config.fields)

    if output_format == "json":
        click.echo(json.dumps([_field_to_json(f) for f in fields], indent=2))
        raise SystemExit(EXIT_SUCCESS)

    table = create_table()
    table.add_column("Name", style="field.name", no_wrap=True)
    table.add_column("Label")
    table.add_column("Type", style="field.type", no_wrap=True)
    table.add_column("Default")
    table.add_column("Bounds", justify="right")
    table.add_column("Options")

    for descriptor in fields:
        table.add_row(
            escape(descriptor.name),
            escape(descriptor.display_name),
            descriptor.type.value,
            escape(format_value(descriptor, descriptor.default_value)),
            _format_bounds(descriptor),
            _format_options(descriptor),
        )

    console.print(table)
    raise SystemExit(EXIT_SUCCESS)


def _format_bounds(descriptor: FieldDescriptor) -> str:
    if descriptor.minimum is None and descriptor.maximum is None:
        return ""
    low = "" if descriptor.minimum is None else str(descriptor.minimum)
    high = "" if descriptor.maximum is None else str(descriptor.maximum)
    return f"{low}..{high}"


def _format_options(descriptor: FieldDescriptor) -> str:
    if descriptor.type is not FieldType.ENUM:
        return ""
    labels = [
        escape(key if label == key else f"{key} ({label})") for key, label in descriptor.options
    ]
    if descriptor.autocomplete:
        labels.append("[dim]autocomplete[/dim]")
    return ", ".join(labels)


def _field_to_json(descriptor: FieldDescriptor) -> dict:
    return {
        "name": descriptor.name,
        "display_name": descriptor.display_name,
        "type": descriptor.type.value,
        "default": value_to_json(descriptor.default_value),
        "min": descriptor.minimum,
        "max": descriptor.maximum,
        "options": dict(descriptor.options),
        "autocomplete": descriptor.autocomplete,
    }
