"""Translation between typed filters and Lucene query ASTs."""

from lucene_filters.filters.deserializer import deserialize
from lucene_filters.filters.enum_terms import extract_enum_terms
from lucene_filters.filters.escaping import needs_quoting, negate_operator
from lucene_filters.filters.fields import (
    FieldDescriptor,
    FieldRegistry,
    FieldType,
    Filter,
    default_registry,
    empty_value,
    unknown_options,
)
from lucene_filters.filters.query import QueryFilters, build_query, split_query
from lucene_filters.filters.rejection import Rejected
from lucene_filters.filters.serializer import serialize
from lucene_filters.filters.values import format_value, parse_assignment, parse_value_text

__all__ = [
    "FieldDescriptor",
    "FieldRegistry",
    "FieldType",
    "Filter",
    "QueryFilters",
    "Rejected",
    "build_query",
    "default_registry",
    "deserialize",
    "empty_value",
    "extract_enum_terms",
    "format_value",
    "needs_quoting",
    "negate_operator",
    "parse_assignment",
    "parse_value_text",
    "serialize",
    "split_query",
    "unknown_options",
]
