"""Lucene query syntax: AST, parser and printer."""

from lucene_filters.search.ast_nodes import (
    IMPLICIT_FIELD,
    BinaryGroup,
    LeftOnlyGroup,
    Node,
    RangedTermNode,
    TermNode,
)
from lucene_filters.search.parser import SearchParseError, parse_query
from lucene_filters.search.printer import to_query_string

__all__ = [
    "IMPLICIT_FIELD",
    "BinaryGroup",
    "LeftOnlyGroup",
    "Node",
    "RangedTermNode",
    "SearchParseError",
    "TermNode",
    "parse_query",
    "to_query_string",
]
