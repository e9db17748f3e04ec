"""Command-line text forms of filter values.

Filters are written as ``FIELD=VALUE`` on the command line. The value
syntax depends on the field type::

    name=Alice            string, taken verbatim
    count=5               integer
    ratio=0.5             float
    enabled=true          boolean (true/false)
    size=2..8             integer or float range, inclusive
    color=red,blue        enum, comma-separated option keys
"""

from __future__ import annotations

from typing import Any

from lucene_filters.exceptions import ValidationError
from lucene_filters.filters.deserializer import parse_float, parse_integer
from lucene_filters.filters.fields import FieldDescriptor, FieldRegistry, FieldType, Filter
from lucene_filters.filters.serializer import value_to_text

RANGE_SEPARATOR = ".."


def parse_value_text(field: FieldDescriptor, text: str) -> Any:
    """Convert command-line text into a value for ``field``.

    Raises:
        ValidationError: If the text is not a valid value for the field type.
    """
    field_type = field.type
    if field_type is FieldType.STRING:
        return text
    if field_type is FieldType.INTEGER:
        number = parse_integer(text)
        if number is None:
            raise ValidationError(f"value for field '{field.name}'", text, "must be an integer")
        return number
    if field_type is FieldType.FLOAT:
        number = parse_float(text)
        if number is None:
            raise ValidationError(f"value for field '{field.name}'", text, "must be a number")
        return number
    if field_type is FieldType.BOOLEAN:
        if text not in ("true", "false"):
            raise ValidationError(
                f"value for field '{field.name}'", text, "must be 'true' or 'false'"
            )
        return text == "true"
    if field_type.is_range:
        low_text, sep, high_text = text.partition(RANGE_SEPARATOR)
        parse = parse_integer if field_type is FieldType.INTEGER_RANGE else parse_float
        low = parse(low_text) if sep else None
        high = parse(high_text) if sep else None
        if low is None or high is None:
            raise ValidationError(
                f"value for field '{field.name}'", text, "must be written as MIN..MAX"
            )
        return (low, high)
    # Enum: comma-separated option keys, empty text selects nothing
    return tuple(item.strip() for item in text.split(",") if item.strip())


def parse_assignment(registry: FieldRegistry, assignment: str) -> Filter:
    """Parse ``FIELD=VALUE`` into a filter on a registered field.

    Raises:
        ValidationError: If the assignment is malformed, the field is not
            registered or the value does not fit the field type.
    """
    name, sep, text = assignment.partition("=")
    if not sep or not name:
        raise ValidationError("filter", assignment, "must be written as FIELD=VALUE")
    field = registry.get(name)
    if field is None:
        raise ValidationError("filter", assignment, f"unknown field '{name}'")
    return Filter(field, parse_value_text(field, text))


def format_value(field: FieldDescriptor, value: Any) -> str:
    """Render a filter value in its command-line text form."""
    if field.type.is_range:
        low, high = value
        return f"{value_to_text(low)}{RANGE_SEPARATOR}{value_to_text(high)}"
    if field.type is FieldType.ENUM:
        return ",".join(value)
    return value_to_text(value)


def value_to_json(value: Any) -> Any:
    """Convert a filter value into a JSON-serializable object."""
    if isinstance(value, tuple):
        return list(value)
    return value
