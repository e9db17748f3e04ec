"""Configuration management for lucene-filters."""

from __future__ import annotations

import logging
import tomllib
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

import tomli_w

from lucene_filters.exceptions import (
    ConfigParseError,
    ConfigValidationError,
    ValidationError,
)
from lucene_filters.filters.deserializer import DEFAULT_MAX_DEPTH
from lucene_filters.filters.fields import (
    FieldDescriptor,
    FieldRegistry,
    FieldType,
    default_registry,
    empty_value,
)
from lucene_filters.search.ast_nodes import IMPLICIT, POSITIVE_OPERATORS
from lucene_filters.utils.fileops import atomic_write

log = logging.getLogger(__name__)


def get_default_config_path() -> Path:
    """Get the default configuration file path."""
    return Path.home() / ".config" / "lucene-filters" / "config.toml"


@dataclass
class Config:
    """Application configuration.

    Attributes:
        fields: Fields that queries may be split into filters on.
        default_operator: Operator joining filters when none is given on the
            command line.
        max_depth: Maximum query nesting walked before a query is rejected.
        colored_output: Whether to use colored terminal output.
        config_path: Path the config was loaded from, or will be saved to.
            None for a Config built in code.
    """

    fields: FieldRegistry = field(default_factory=default_registry)
    default_operator: str = IMPLICIT
    max_depth: int = DEFAULT_MAX_DEPTH
    colored_output: bool = True
    config_path: Path | None = None

    def validate(self) -> list[str]:
        """Validate configuration values.

        Returns:
            List of warning messages for non-fatal issues.

        Raises:
            ConfigValidationError: If a critical validation fails.
        """
        warnings: list[str] = []

        if self.default_operator not in POSITIVE_OPERATORS:
            raise ConfigValidationError(
                "query.default_operator",
                self.default_operator,
                f"must be one of {', '.join(POSITIVE_OPERATORS)}",
            )

        if self.max_depth < 1:
            raise ConfigValidationError("query.max_depth", self.max_depth, "must be positive")

        if len(self.fields) == 0:
            warnings.append("No fields configured; every field-qualified query will be rejected")

        for descriptor in self.fields:
            if (
                descriptor.minimum is not None
                and descriptor.maximum is not None
                and descriptor.minimum > descriptor.maximum
            ):
                warnings.append(
                    f"Field '{descriptor.name}' has min={descriptor.minimum} "
                    f"greater than max={descriptor.maximum}"
                )

        return warnings


def load_config(config_path: Path | None = None) -> tuple[Config, list[str]]:
    """Load configuration from file or use defaults.

    Args:
        config_path: Explicit config file path. If None, uses default location.

    Returns:
        Tuple of (Config object, list of warning messages).

    Raises:
        ConfigParseError: If config file exists but has invalid syntax.
        ConfigValidationError: If config values are invalid.
    """
    warnings: list[str] = []

    if config_path is None:
        config_path = get_default_config_path()

    config_path = config_path.expanduser().resolve()

    if not config_path.exists():
        # Use defaults, saving back to the requested location
        config = Config(config_path=config_path)
        warnings.append(
            f"No config file found at {config_path}. Using defaults. "
            f"Create config with: lucene-filters init-config"
        )
        config_warnings = config.validate()
        return config, warnings + config_warnings

    # Load from file
    try:
        with open(config_path, "rb") as f:
            data = tomllib.load(f)
    except tomllib.TOMLDecodeError as e:
        raise ConfigParseError(config_path, str(e)) from e

    config = _parse_config_dict(data, config_path)
    config_warnings = config.validate()
    log.debug("Loaded config from %s (%d fields)", config_path, len(config.fields))

    return config, warnings + config_warnings


def _parse_number(key: str, value: Any) -> float | None:
    if value is None:
        return None
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise ConfigValidationError(key, value, "must be a number")
    return value


def _parse_field(index: int, entry: Any) -> FieldDescriptor:
    """Parse one ``[[fields]]`` table into a FieldDescriptor."""
    prefix = f"fields[{index}]"
    if not isinstance(entry, dict):
        raise ConfigValidationError(prefix, entry, "must be a table")

    name = entry.get("name")
    if not isinstance(name, str) or not name:
        raise ConfigValidationError(f"{prefix}.name", name, "must be a non-empty string")

    type_name = entry.get("type", FieldType.STRING.value)
    try:
        field_type = FieldType(type_name)
    except ValueError:
        raise ConfigValidationError(
            f"{prefix}.type",
            type_name,
            f"must be one of {', '.join(t.value for t in FieldType)}",
        ) from None

    display_name = entry.get("display_name", name)
    if not isinstance(display_name, str):
        raise ConfigValidationError(f"{prefix}.display_name", display_name, "must be a string")

    options = entry.get("options", {})
    if not isinstance(options, dict) or not all(isinstance(v, str) for v in options.values()):
        raise ConfigValidationError(
            f"{prefix}.options", options, "must be a table of option labels"
        )

    autocomplete = entry.get("autocomplete", False)
    if not isinstance(autocomplete, bool):
        raise ConfigValidationError(f"{prefix}.autocomplete", autocomplete, "must be a boolean")

    default = entry.get("default", empty_value(field_type))

    try:
        return FieldDescriptor(
            name=name,
            display_name=display_name,
            type=field_type,
            default_value=default,
            minimum=_parse_number(f"{prefix}.min", entry.get("min")),
            maximum=_parse_number(f"{prefix}.max", entry.get("max")),
            options=tuple(options.items()),
            autocomplete=autocomplete,
        )
    except ValidationError as e:
        raise ConfigValidationError(prefix, entry, str(e)) from e


def _parse_config_dict(data: dict[str, Any], config_path: Path) -> Config:
    """Parse configuration dictionary into Config object."""
    config = Config(config_path=config_path)

    # Parse [display] section
    display = data.get("display", {})
    if "colored_output" in display:
        value = display["colored_output"]
        if not isinstance(value, bool):
            raise ConfigValidationError("display.colored_output", value, "must be a boolean")
        config.colored_output = value

    # Parse [query] section
    query = data.get("query", {})
    if "default_operator" in query:
        value = query["default_operator"]
        if not isinstance(value, str):
            raise ConfigValidationError("query.default_operator", value, "must be a string")
        config.default_operator = value

    if "max_depth" in query:
        value = query["max_depth"]
        if isinstance(value, bool) or not isinstance(value, int):
            raise ConfigValidationError("query.max_depth", value, "must be an integer")
        config.max_depth = value

    # Parse [[fields]] array
    if "fields" in data:
        entries = data["fields"]
        if not isinstance(entries, list):
            raise ConfigValidationError("fields", entries, "must be an array of tables")
        descriptors = [_parse_field(i, entry) for i, entry in enumerate(entries)]
        try:
            config.fields = FieldRegistry(descriptors)
        except ValidationError as e:
            raise ConfigValidationError("fields", entries, str(e)) from e

    return config


def _field_to_dict(descriptor: FieldDescriptor) -> dict[str, Any]:
    data: dict[str, Any] = {
        "name": descriptor.name,
        "display_name": descriptor.display_name,
        "type": descriptor.type.value,
    }
    default = descriptor.default_value
    data["default"] = list(default) if isinstance(default, tuple) else default
    if descriptor.minimum is not None:
        data["min"] = descriptor.minimum
    if descriptor.maximum is not None:
        data["max"] = descriptor.maximum
    if descriptor.type is FieldType.ENUM:
        data["autocomplete"] = descriptor.autocomplete
        if descriptor.options:
            data["options"] = dict(descriptor.options)
    return data


def save_config(config: Config, config_path: Path | None = None) -> None:
    """Save configuration to file.

    Args:
        config: Configuration to save.
        config_path: Path to save to. If None, uses config.config_path or default.
    """
    if config_path is None:
        config_path = config.config_path or get_default_config_path()

    config_path = config_path.expanduser().resolve()

    # Build TOML structure
    data: dict[str, Any] = {
        "display": {
            "colored_output": config.colored_output,
        },
        "query": {
            "default_operator": config.default_operator,
            "max_depth": config.max_depth,
        },
        "fields": [_field_to_dict(descriptor) for descriptor in config.fields],
    }

    atomic_write(config_path, tomli_w.dumps(data))
    log.debug("Saved config to %s", config_path)
