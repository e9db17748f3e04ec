"""Extract the values of a parenthesized enum group like ``color:(red OR blue)``."""

from __future__ import annotations

from lucene_filters.filters.rejection import Rejected, unsupported_modifier
from lucene_filters.search.ast_nodes import (
    IMPLICIT_FIELD,
    OR,
    BinaryGroup,
    Group,
    LeftOnlyGroup,
    Node,
    RangedTermNode,
    TermNode,
)


def _plain_term(node: Node) -> str | Rejected:
    if isinstance(node, RangedTermNode):
        return Rejected("ranges are not allowed inside an enum group")
    if not isinstance(node, TermNode):
        return Rejected("nested groups are not allowed inside an enum group")
    if node.field != IMPLICIT_FIELD:
        return Rejected(f"field '{node.field}' is not allowed inside an enum group")
    modifier = unsupported_modifier(node)
    if modifier is not None:
        return Rejected(f"{modifier} is not supported")
    return node.term


def extract_enum_terms(ast: Group) -> list[str] | Rejected:
    """Collect the OR-joined terms of an enum group in source order.

    Every term must be a plain term on the implicit field, and every
    operator in the chain must be ``OR``.

    Args:
        ast: The group attached to the enum field.

    Returns:
        The terms, or Rejected if the group is not a plain OR chain.
    """
    terms: list[str] = []
    node: Group = ast
    # The chain only ever grows to the right
    while True:
        left = _plain_term(node.left)
        if isinstance(left, Rejected):
            return left
        terms.append(left)

        if isinstance(node, LeftOnlyGroup):
            return terms
        if node.operator != OR:
            return Rejected(f"operator '{node.operator}' is not allowed inside an enum group")

        if isinstance(node.right, (LeftOnlyGroup, BinaryGroup)):
            node = node.right
            continue

        right = _plain_term(node.right)
        if isinstance(right, Rejected):
            return right
        terms.append(right)
        return terms
