"""Unit tests for field descriptors, filters and the field registry."""

from __future__ import annotations

import math

import pytest

from lucene_filters.exceptions import ValidationError
from lucene_filters.filters.fields import (
    FieldDescriptor,
    FieldRegistry,
    FieldType,
    Filter,
    check_value,
    default_registry,
    empty_value,
    unknown_options,
)
from lucene_filters.search.ast_nodes import IMPLICIT_FIELD


class TestFieldType:
    def test_values(self) -> None:
        assert [t.value for t in FieldType] == [
            "string",
            "integer",
            "float",
            "integer-range",
            "float-range",
            "boolean",
            "enum",
        ]

    def test_is_range(self) -> None:
        assert FieldType.INTEGER_RANGE.is_range
        assert FieldType.FLOAT_RANGE.is_range
        assert not FieldType.INTEGER.is_range

    def test_is_numeric(self) -> None:
        assert FieldType.INTEGER.is_numeric
        assert FieldType.FLOAT.is_numeric
        assert not FieldType.FLOAT_RANGE.is_numeric
        assert not FieldType.BOOLEAN.is_numeric


class TestCheckValue:
    @pytest.mark.parametrize(
        ("field_type", "value", "expected"),
        [
            (FieldType.STRING, "x", "x"),
            (FieldType.INTEGER, 3, 3),
            (FieldType.FLOAT, 3, 3),
            (FieldType.FLOAT, 0.5, 0.5),
            (FieldType.INTEGER_RANGE, [1, 2], (1, 2)),
            (FieldType.FLOAT_RANGE, (0.1, 2), (0.1, 2)),
            (FieldType.BOOLEAN, False, False),
            (FieldType.ENUM, ["a", "b"], ("a", "b")),
            (FieldType.ENUM, [], ()),
        ],
    )
    def test_accepts(self, field_type: FieldType, value, expected) -> None:
        assert check_value("f", field_type, value) == expected

    @pytest.mark.parametrize(
        ("field_type", "value"),
        [
            (FieldType.STRING, 3),
            (FieldType.INTEGER, 3.5),
            (FieldType.INTEGER, True),
            (FieldType.INTEGER, "3"),
            (FieldType.FLOAT, math.nan),
            (FieldType.FLOAT, math.inf),
            (FieldType.FLOAT, False),
            (FieldType.INTEGER_RANGE, [1]),
            (FieldType.INTEGER_RANGE, [1, 2.5]),
            (FieldType.FLOAT_RANGE, "12"),
            (FieldType.BOOLEAN, "true"),
            (FieldType.ENUM, "red"),
            (FieldType.ENUM, ["red", 1]),
        ],
    )
    def test_rejects(self, field_type: FieldType, value) -> None:
        with pytest.raises(ValidationError):
            check_value("f", field_type, value)


class TestFieldDescriptor:
    def test_type_is_coerced_from_string(self) -> None:
        descriptor = FieldDescriptor(name="n", display_name="N", type="integer", default_value=1)
        assert descriptor.type is FieldType.INTEGER

    def test_unknown_type(self) -> None:
        with pytest.raises(ValidationError):
            FieldDescriptor(name="n", display_name="N", type="date", default_value="")

    def test_empty_name(self) -> None:
        with pytest.raises(ValidationError):
            FieldDescriptor(name="", display_name="N", type=FieldType.STRING, default_value="")

    def test_implicit_field_must_be_string(self) -> None:
        with pytest.raises(ValidationError):
            FieldDescriptor(
                name=IMPLICIT_FIELD, display_name="D", type=FieldType.INTEGER, default_value=0
            )

    def test_options_only_on_enums(self) -> None:
        with pytest.raises(ValidationError):
            FieldDescriptor(
                name="n",
                display_name="N",
                type=FieldType.STRING,
                default_value="",
                options=(("a", "A"),),
            )

    def test_default_is_validated(self) -> None:
        with pytest.raises(ValidationError):
            FieldDescriptor(name="n", display_name="N", type=FieldType.INTEGER, default_value="x")

    def test_default_is_normalised(self, registry: FieldRegistry) -> None:
        assert registry.get("integer-range-field").default_value == (2, 8)
        assert registry.get("enum-field").default_value == ("red",)

    def test_option_keys_and_labels(self, registry: FieldRegistry) -> None:
        enum_field = registry.get("enum-field")
        assert enum_field.option_keys == ("red", "green", "blue", "black and white")
        assert enum_field.label_for("blue") == "Blue-ish"
        assert enum_field.label_for("purple") == "purple"


class TestFilter:
    def test_value_is_validated(self, registry: FieldRegistry) -> None:
        with pytest.raises(ValidationError):
            Filter(registry.get("boolean-field"), "true")

    def test_equality(self, registry: FieldRegistry) -> None:
        field = registry.get("enum-field")
        assert Filter(field, ["red"]) == Filter(field, ("red",))

    def test_unknown_options(self, registry: FieldRegistry) -> None:
        field = registry.get("enum-field")
        assert unknown_options(Filter(field, ["red", "purple", "blue"])) == ["purple"]
        assert unknown_options(Filter(registry.get("string-field"), "purple")) == []

    def test_enum_without_options_accepts_anything(self) -> None:
        field = FieldDescriptor(name="tag", display_name="Tag", type=FieldType.ENUM, default_value=[])
        assert unknown_options(Filter(field, ["anything"])) == []


class TestFieldRegistry:
    def test_lookup(self, registry: FieldRegistry) -> None:
        assert registry.get("string-field").display_name == "String field"
        assert registry.get("missing") is None
        assert "enum-field" in registry
        assert "missing" not in registry

    def test_order_and_length(self, registry: FieldRegistry) -> None:
        assert len(registry) == 8
        assert [f.name for f in registry][:2] == [IMPLICIT_FIELD, "string-field"]

    def test_duplicate_names(self) -> None:
        field = FieldDescriptor(name="a", display_name="A", type=FieldType.STRING, default_value="")
        with pytest.raises(ValidationError):
            FieldRegistry([field, field])

    def test_with_field_returns_new_registry(self) -> None:
        base = default_registry()
        field = FieldDescriptor(name="a", display_name="A", type=FieldType.STRING, default_value="")
        extended = base.with_field(field)
        assert "a" in extended
        assert "a" not in base

    def test_default_registry_holds_implicit_field(self) -> None:
        base = default_registry()
        assert [f.name for f in base] == [IMPLICIT_FIELD]
        assert base.get(IMPLICIT_FIELD).type is FieldType.STRING


def test_empty_values_fit_their_types() -> None:
    for field_type in FieldType:
        assert check_value("f", field_type, empty_value(field_type)) == empty_value(field_type)
