"""Exceptions raised by lucene-filters.

Queries that fall outside the supported subset of the grammar are not
errors: ``deserialize`` and ``split_query`` return a ``Rejected`` value
for them. Exceptions are kept for broken configuration, invalid filters
built by the caller and query text that does not parse at all.
"""

from __future__ import annotations

from pathlib import Path


class LuceneFiltersError(Exception):
    """Base class; catch this to handle every lucene-filters error."""


class ConfigError(LuceneFiltersError):
    """The configuration file cannot be used."""


class ConfigParseError(ConfigError):
    def __init__(self, path: Path, detail: str) -> None:
        self.path = path
        self.detail = detail
        super().__init__(f"Cannot parse {path}: {detail}")


class ConfigValidationError(ConfigError):
    def __init__(self, key: str, value: object, reason: str) -> None:
        self.key = key
        self.value = value
        self.reason = reason
        super().__init__(f"Invalid config value for '{key}': {reason}")


class ValidationError(LuceneFiltersError):
    """A field descriptor or filter value does not fit its declared type."""

    def __init__(self, field: str, value: object, reason: str) -> None:
        self.field = field
        self.value = value
        self.reason = reason
        super().__init__(f"Invalid {field}: {reason}")


class UnhandledFieldTypeError(LuceneFiltersError):
    """A field type outside FieldType reached value coercion."""

    def __init__(self, field_type: object) -> None:
        self.field_type = field_type
        super().__init__(f'Unhandled field type "{field_type}"')


class SearchParseError(LuceneFiltersError):
    """Query text is not valid Lucene syntax."""

    def __init__(self, query: str, message: str) -> None:
        self.query = query
        self.message = message
        super().__init__(f"Failed to parse search query '{query}': {message}")
