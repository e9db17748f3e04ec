"""Typed field descriptors, the field registry and filters."""

from __future__ import annotations

import enum
import math
from collections.abc import Iterable, Iterator, Sequence
from dataclasses import dataclass
from typing import Any

from lucene_filters.exceptions import ValidationError
from lucene_filters.search.ast_nodes import IMPLICIT_FIELD


class FieldType(str, enum.Enum):
    """Value type of a filter field."""

    STRING = "string"
    INTEGER = "integer"
    FLOAT = "float"
    INTEGER_RANGE = "integer-range"
    FLOAT_RANGE = "float-range"
    BOOLEAN = "boolean"
    ENUM = "enum"

    @property
    def is_range(self) -> bool:
        return self in (FieldType.INTEGER_RANGE, FieldType.FLOAT_RANGE)

    @property
    def is_numeric(self) -> bool:
        return self in (FieldType.INTEGER, FieldType.FLOAT)


def _is_integer(value: Any) -> bool:
    return isinstance(value, int) and not isinstance(value, bool)


def _is_number(value: Any) -> bool:
    if isinstance(value, float):
        return math.isfinite(value)
    return _is_integer(value)


def check_value(field_name: str, field_type: FieldType, value: Any) -> Any:
    """Check that a value has the shape required by a field type.

    Args:
        field_name: Field name, used in error messages.
        field_type: Declared type of the field.
        value: Candidate value.

    Returns:
        The value, with ranges and enum selections normalised to tuples.

    Raises:
        ValidationError: If the value does not match the field type.
    """
    if field_type is FieldType.STRING:
        if isinstance(value, str):
            return value
        reason = "must be a string"
    elif field_type is FieldType.INTEGER:
        if _is_integer(value):
            return value
        reason = "must be an integer"
    elif field_type is FieldType.FLOAT:
        if _is_number(value):
            return value
        reason = "must be a number"
    elif field_type.is_range:
        check = _is_integer if field_type is FieldType.INTEGER_RANGE else _is_number
        if (
            isinstance(value, Sequence)
            and not isinstance(value, str)
            and len(value) == 2
            and all(check(bound) for bound in value)
        ):
            return (value[0], value[1])
        reason = f"must be a pair of {'integers' if check is _is_integer else 'numbers'}"
    elif field_type is FieldType.BOOLEAN:
        if isinstance(value, bool):
            return value
        reason = "must be a boolean"
    else:
        if (
            isinstance(value, Sequence)
            and not isinstance(value, str)
            and all(isinstance(item, str) for item in value)
        ):
            return tuple(value)
        reason = "must be a list of strings"
    raise ValidationError(f"value for field '{field_name}'", value, reason)


@dataclass(frozen=True)
class FieldDescriptor:
    """Static metadata for one filterable field.

    Attributes:
        name: Field name as written in queries. ``<implicit>`` is reserved
            for terms without a field prefix.
        display_name: Human-readable label.
        type: Value type.
        default_value: Value a freshly added filter starts with.
        minimum: Lower numeric bound, for numeric and range fields.
        maximum: Upper numeric bound, for numeric and range fields.
        options: Ordered ``(key, label)`` pairs, for enum fields.
        autocomplete: Whether an enum editor should offer autocompletion.
    """

    name: str
    display_name: str
    type: FieldType
    default_value: Any
    minimum: float | None = None
    maximum: float | None = None
    options: tuple[tuple[str, str], ...] = ()
    autocomplete: bool = False

    def __post_init__(self) -> None:
        if not isinstance(self.type, FieldType):
            try:
                object.__setattr__(self, "type", FieldType(self.type))
            except ValueError as e:
                raise ValidationError(
                    f"type of field '{self.name}'", self.type, "unknown field type"
                ) from e
        if not self.name:
            raise ValidationError("field name", self.name, "must not be empty")
        if self.name == IMPLICIT_FIELD and self.type is not FieldType.STRING:
            raise ValidationError(
                f"type of field '{self.name}'", self.type, "the implicit field must be a string"
            )
        if self.options and self.type is not FieldType.ENUM:
            raise ValidationError(
                f"options of field '{self.name}'", self.options, "only enum fields have options"
            )
        object.__setattr__(self, "options", tuple((str(k), str(v)) for k, v in self.options))
        object.__setattr__(
            self, "default_value", check_value(self.name, self.type, self.default_value)
        )

    @property
    def option_keys(self) -> tuple[str, ...]:
        return tuple(key for key, _ in self.options)

    def label_for(self, key: str) -> str:
        """Return the display label of an enum option, or the key itself."""
        return dict(self.options).get(key, key)


@dataclass(frozen=True)
class Filter:
    """A typed ``(field, value)`` constraint.

    The value shape follows ``field.type``: ``str``, ``int``, ``float``,
    a ``(min, max)`` tuple, ``bool`` or a tuple of enum option keys.
    """

    field: FieldDescriptor
    value: Any

    def __post_init__(self) -> None:
        object.__setattr__(
            self, "value", check_value(self.field.name, self.field.type, self.value)
        )


class FieldRegistry:
    """Immutable, ordered collection of field descriptors."""

    def __init__(self, fields: Iterable[FieldDescriptor] = ()) -> None:
        self._fields: tuple[FieldDescriptor, ...] = tuple(fields)
        self._by_name: dict[str, FieldDescriptor] = {}
        for field in self._fields:
            if field.name in self._by_name:
                raise ValidationError("field registry", field.name, "duplicate field name")
            self._by_name[field.name] = field

    def get(self, name: str) -> FieldDescriptor | None:
        """Look up a field by exact name."""
        return self._by_name.get(name)

    def with_field(self, field: FieldDescriptor) -> FieldRegistry:
        """Return a new registry with ``field`` appended."""
        return FieldRegistry((*self._fields, field))

    def __iter__(self) -> Iterator[FieldDescriptor]:
        return iter(self._fields)

    def __len__(self) -> int:
        return len(self._fields)

    def __contains__(self, name: object) -> bool:
        return name in self._by_name

    def __repr__(self) -> str:
        return f"FieldRegistry({[f.name for f in self._fields]!r})"


_EMPTY_VALUES: dict[FieldType, Any] = {
    FieldType.STRING: "",
    FieldType.INTEGER: 0,
    FieldType.FLOAT: 0.0,
    FieldType.INTEGER_RANGE: (0, 0),
    FieldType.FLOAT_RANGE: (0.0, 0.0),
    FieldType.BOOLEAN: False,
    FieldType.ENUM: (),
}


def empty_value(field_type: FieldType) -> Any:
    """Default value for a field that does not declare one."""
    return _EMPTY_VALUES[field_type]


def default_registry() -> FieldRegistry:
    """Registry used when no fields are configured: only the implicit field."""
    return FieldRegistry(
        [
            FieldDescriptor(
                name=IMPLICIT_FIELD,
                display_name="Default field",
                type=FieldType.STRING,
                default_value="",
            )
        ]
    )


def unknown_options(filter_: Filter) -> list[str]:
    """Return enum values of a filter that are not declared option keys.

    Fields without declared options accept any value, so nothing is reported
    for them.
    """
    field = filter_.field
    if field.type is not FieldType.ENUM or not field.options:
        return []
    keys = set(field.option_keys)
    return [value for value in filter_.value if value not in keys]
