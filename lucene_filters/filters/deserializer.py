"""Recover typed filters from a parsed Lucene AST.

The walk follows the right-recursive shape the query grammar produces::

    a b NOT c   ->   (a, <implicit>, (b, NOT, c))

Each binary group contributes its left side and, through recursion, its
right side. Whether the first filter of a side belongs to the requested
polarity is decided locally: by a leading ``NOT`` on the top-level group
for the left side, and by the joining operator for the right side.
Anything that cannot be represented as a typed filter rejects the whole
call.
"""

from __future__ import annotations

import enum
import logging
import math
import re
from dataclasses import dataclass

from lucene_filters.exceptions import UnhandledFieldTypeError
from lucene_filters.filters.enum_terms import extract_enum_terms
from lucene_filters.filters.escaping import negate_operator
from lucene_filters.filters.fields import FieldDescriptor, FieldRegistry, FieldType, Filter
from lucene_filters.filters.rejection import Rejected, unsupported_modifier
from lucene_filters.search.ast_nodes import (
    IMPLICIT,
    INCLUSIVE_BOTH,
    NOT,
    Group,
    Leaf,
    LeftOnlyGroup,
    Node,
    RangedTermNode,
    TermNode,
)

logger = logging.getLogger(__name__)

# Nesting depth beyond which a query is rejected instead of walked
DEFAULT_MAX_DEPTH = 256

_INTEGER_RE = re.compile(r"[+-]?\d+")
_FLOAT_RE = re.compile(r"[+-]?(?:\d+(?:\.\d*)?|\.\d+)(?:[eE][+-]?\d+)?")


class _Adjustment(enum.Enum):
    """What to do with the first filter of a subtree result."""

    KEEP = "keep"
    DROP_FIRST = "drop-first"

    def apply(self, filters: list[Filter]) -> list[Filter]:
        if self is _Adjustment.DROP_FIRST:
            return filters[1:]
        return filters


@dataclass(frozen=True)
class _Request:
    registry: FieldRegistry
    operator: str
    negated_operator: str
    positive: bool
    max_depth: int


def parse_integer(text: str) -> int | None:
    """Parse decimal integer text, or return None."""
    if _INTEGER_RE.fullmatch(text) is None:
        return None
    return int(text)


def parse_float(text: str) -> float | None:
    """Parse finite decimal number text, or return None.

    Literals beyond the float range such as ``1e400`` count as unparseable.
    """
    if _FLOAT_RE.fullmatch(text) is None:
        return None
    number = float(text)
    if not math.isfinite(number):
        return None
    return number


def _coerce_range(node: RangedTermNode, field: FieldDescriptor) -> Filter | Rejected:
    if not field.type.is_range:
        return Rejected(f"field '{field.name}' does not accept a range")
    if node.inclusive != INCLUSIVE_BOTH:
        return Rejected("exclusive range bounds are not supported")
    parse = parse_integer if field.type is FieldType.INTEGER_RANGE else parse_float
    low = parse(node.term_min)
    high = parse(node.term_max)
    if low is None or high is None:
        return Rejected(
            f"range [{node.term_min} TO {node.term_max}] is not numeric for field '{field.name}'"
        )
    return Filter(field, (low, high))


def _coerce_term(node: TermNode, field: FieldDescriptor) -> Filter | Rejected:
    if field.type.is_range:
        return Rejected(f"field '{field.name}' requires a range")

    text = node.term
    if field.type is FieldType.STRING:
        return Filter(field, text)
    if field.type is FieldType.INTEGER:
        number = parse_integer(text)
        if number is None:
            return Rejected(f"'{text}' is not an integer for field '{field.name}'")
        return Filter(field, number)
    if field.type is FieldType.FLOAT:
        number = parse_float(text)
        if number is None:
            return Rejected(f"'{text}' is not a number for field '{field.name}'")
        return Filter(field, number)
    if field.type is FieldType.BOOLEAN:
        if text not in ("true", "false"):
            return Rejected(f"'{text}' is not a boolean for field '{field.name}'")
        return Filter(field, text == "true")
    if field.type is FieldType.ENUM:
        return Filter(field, [text])
    raise UnhandledFieldTypeError(field.type)


def _leaf_filters(node: Leaf, registry: FieldRegistry) -> list[Filter] | Rejected:
    if isinstance(node, TermNode):
        modifier = unsupported_modifier(node)
        if modifier is not None:
            return Rejected(f"{modifier} is not supported")

    field = registry.get(node.field)
    if field is None:
        return Rejected(f"unknown field '{node.field}'")

    if isinstance(node, RangedTermNode):
        result = _coerce_range(node, field)
    else:
        result = _coerce_term(node, field)
    if isinstance(result, Rejected):
        return result
    return [result]


def _field_group_filters(node: Group, registry: FieldRegistry) -> list[Filter] | Rejected:
    # e.g. color:(red OR blue)
    field = registry.get(node.field)
    if field is None:
        return Rejected(f"unknown field '{node.field}'")
    if field.type is not FieldType.ENUM:
        return Rejected(f"field '{field.name}' does not accept a parenthesized group")
    terms = extract_enum_terms(node)
    if isinstance(terms, Rejected):
        return terms
    return [Filter(field, terms)]


def _walk(node: Node, request: _Request, top_level: bool, depth: int) -> list[Filter] | Rejected:
    if depth > request.max_depth:
        return Rejected(f"query nesting exceeds {request.max_depth} levels")

    if isinstance(node, (TermNode, RangedTermNode)):
        return _leaf_filters(node, request.registry)
    if node.field is not None:
        return _field_group_filters(node, request.registry)
    if node.parenthesized:
        return Rejected("nested groups are not supported")

    left = _walk(node.left, request, False, depth + 1)
    if isinstance(left, Rejected):
        return left

    starts_with_not = node.start == NOT
    if top_level and request.positive == starts_with_not:
        left = _Adjustment.DROP_FIRST.apply(left)

    if isinstance(node, LeftOnlyGroup):
        return left

    right = _walk(node.right, request, False, depth + 1)
    if isinstance(right, Rejected):
        return right

    if node.operator == request.operator:
        points_away = not request.positive
    elif node.operator == request.negated_operator:
        points_away = request.positive
    else:
        return Rejected(f"operator '{node.operator}' is not supported here")

    adjustment = _Adjustment.DROP_FIRST if points_away else _Adjustment.KEEP
    return left + adjustment.apply(right)


def deserialize(
    node: Node,
    registry: FieldRegistry,
    operator: str = IMPLICIT,
    positive: bool = True,
    top_level: bool = True,
    *,
    max_depth: int = DEFAULT_MAX_DEPTH,
) -> list[Filter] | Rejected:
    """Extract the filters of one polarity from a query AST.

    Args:
        node: Parsed query, or any fragment of one.
        registry: Fields that filters may refer to.
        operator: Operator joining the wanted filters: ``<implicit>``,
            ``AND`` or ``OR``. Its negated form joins the filters of the
            opposite polarity.
        positive: True for asserted filters, False for filters under NOT.
        top_level: Whether ``node`` is the query root, where a leading
            ``NOT`` applies.
        max_depth: Maximum group nesting walked before rejecting.

    Returns:
        The filters in source order, or Rejected if any part of the query
        has no typed-filter equivalent.
    """
    request = _Request(
        registry=registry,
        operator=operator,
        negated_operator=negate_operator(operator),
        positive=positive,
        max_depth=max_depth,
    )
    result = _walk(node, request, top_level, 0)
    if isinstance(result, Rejected):
        logger.debug("Rejected query: %s", result.reason)
    return result
