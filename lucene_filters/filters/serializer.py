"""Convert filters into Lucene AST fragments."""

from __future__ import annotations

from collections.abc import Sequence
from typing import Any

from lucene_filters.filters.escaping import needs_quoting
from lucene_filters.filters.fields import FieldType, Filter
from lucene_filters.search.ast_nodes import (
    IMPLICIT_FIELD,
    INCLUSIVE_BOTH,
    OR,
    BinaryGroup,
    Group,
    LeftOnlyGroup,
    Node,
    RangedTermNode,
    TermNode,
)


def value_to_text(value: Any) -> str:
    """Canonical query text for a scalar filter value."""
    if isinstance(value, bool):
        return "true" if value else "false"
    return str(value)


def _term(field: str, text: str, *, force_quotes: bool = False) -> TermNode:
    return TermNode(
        field=field,
        term=text,
        quoted=force_quotes or text == "" or needs_quoting(text),
    )


def _serialize_enum(field_name: str, values: Sequence[str]) -> Group:
    if not values:
        return LeftOnlyGroup(left=_term(IMPLICIT_FIELD, ""), field=field_name, parenthesized=True)

    terms = [_term(IMPLICIT_FIELD, value) for value in values]
    if len(terms) == 1:
        return LeftOnlyGroup(left=terms[0], field=field_name, parenthesized=True)

    # Build the right-hand chain from its innermost wrapper outwards
    chain: Node = LeftOnlyGroup(left=terms[-1])
    for term in reversed(terms[1:-1]):
        chain = BinaryGroup(left=term, operator=OR, right=chain)
    return BinaryGroup(
        left=terms[0],
        operator=OR,
        right=chain,
        field=field_name,
        parenthesized=True,
    )


def serialize(filter_: Filter) -> Node:
    """Convert a filter into the AST fragment that expresses it.

    Range filters become ``field:[min TO max]``, enum filters a
    parenthesized OR chain ``field:(a OR b)`` and everything else a single
    ``field:value`` term. Terms are quoted whenever the text would otherwise
    not stay one token, including negative numbers whose leading ``-`` would
    read as a prohibit prefix.

    Args:
        filter_: Filter to serialize.

    Returns:
        The AST fragment; it never carries boost, prefix, fuzzy or regex
        modifiers.
    """
    field = filter_.field
    value = filter_.value

    if field.type.is_range:
        return RangedTermNode(
            field=field.name,
            term_min=value_to_text(value[0]),
            term_max=value_to_text(value[1]),
            inclusive=INCLUSIVE_BOTH,
        )
    if field.type is FieldType.ENUM:
        return _serialize_enum(field.name, value)

    negative = field.type.is_numeric and value < 0
    return _term(field.name, value_to_text(value), force_quotes=negative)
