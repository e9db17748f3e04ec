"""Shared pytest fixtures."""

from __future__ import annotations

import shutil
import tempfile
from pathlib import Path
from typing import TYPE_CHECKING

import pytest

from lucene_filters.filters import FieldDescriptor, FieldRegistry, FieldType

if TYPE_CHECKING:
    from collections.abc import Generator


def make_reference_registry() -> FieldRegistry:
    """One field of every type, with the bounds and options used across tests."""
    return FieldRegistry(
        [
            FieldDescriptor(
                name="<implicit>",
                display_name="Default field",
                type=FieldType.STRING,
                default_value="test",
            ),
            FieldDescriptor(
                name="string-field",
                display_name="String field",
                type=FieldType.STRING,
                default_value="test",
            ),
            FieldDescriptor(
                name="integer-field",
                display_name="Integer field",
                type=FieldType.INTEGER,
                default_value=5,
                minimum=0,
                maximum=10,
            ),
            FieldDescriptor(
                name="float-field",
                display_name="Float field",
                type=FieldType.FLOAT,
                default_value=0.5,
                minimum=0,
                maximum=1,
            ),
            FieldDescriptor(
                name="integer-range-field",
                display_name="Integer range field",
                type=FieldType.INTEGER_RANGE,
                default_value=(2, 8),
                minimum=0,
                maximum=10,
            ),
            FieldDescriptor(
                name="float-range-field",
                display_name="Float range field",
                type=FieldType.FLOAT_RANGE,
                default_value=(0.2, 0.8),
                minimum=0,
                maximum=1,
            ),
            FieldDescriptor(
                name="boolean-field",
                display_name="Boolean field",
                type=FieldType.BOOLEAN,
                default_value=False,
            ),
            FieldDescriptor(
                name="enum-field",
                display_name="Enum field",
                type=FieldType.ENUM,
                default_value=("red",),
                options=(
                    ("red", "Red"),
                    ("green", "Green"),
                    ("blue", "Blue-ish"),
                    ("black and white", "Black and white"),
                ),
                autocomplete=True,
            ),
        ]
    )


@pytest.fixture
def temp_dir() -> Generator[Path, None, None]:
    """Create a temporary directory for test files."""
    path = Path(tempfile.mkdtemp())
    try:
        yield path
    finally:
        shutil.rmtree(path, ignore_errors=True)


@pytest.fixture
def registry() -> FieldRegistry:
    """The reference field registry."""
    return make_reference_registry()


@pytest.fixture
def sample_config(temp_dir: Path) -> Path:
    """Create a sample config file declaring a few fields."""
    config_path = temp_dir / "config.toml"
    config_path.write_text("""[display]
colored_output = false

[query]
default_operator = "<implicit>"
max_depth = 64

[[fields]]
name = "<implicit>"
display_name = "Default field"
type = "string"

[[fields]]
name = "string-field"
display_name = "String field"
type = "string"
default = "test"

[[fields]]
name = "integer-field"
display_name = "Integer field"
type = "integer"
default = 5
min = 0
max = 10

[[fields]]
name = "float-range-field"
display_name = "Float range field"
type = "float-range"
default = [0.2, 0.8]
min = 0
max = 1

[[fields]]
name = "boolean-field"
type = "boolean"

[[fields]]
name = "enum-field"
display_name = "Enum field"
type = "enum"
default = ["red"]
autocomplete = true

[fields.options]
red = "Red"
green = "Green"
blue = "Blue-ish"
"black and white" = "Black and white"
""")
    return config_path
