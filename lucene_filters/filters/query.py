"""Compose whole queries from filter lists and split them back apart."""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass, field, replace

from lucene_filters.filters.deserializer import DEFAULT_MAX_DEPTH, deserialize
from lucene_filters.filters.escaping import negate_operator
from lucene_filters.filters.fields import FieldRegistry, Filter
from lucene_filters.filters.rejection import Rejected
from lucene_filters.filters.serializer import serialize
from lucene_filters.search.ast_nodes import IMPLICIT, NOT, BinaryGroup, Group, LeftOnlyGroup, Node


@dataclass
class QueryFilters:
    """Filters of one query, split by polarity."""

    positive: list[Filter] = field(default_factory=list)
    negative: list[Filter] = field(default_factory=list)


def split_query(
    node: Node | None,
    registry: FieldRegistry,
    operator: str = IMPLICIT,
    *,
    max_depth: int = DEFAULT_MAX_DEPTH,
) -> QueryFilters | Rejected:
    """Extract both the asserted and the negated filters of a query.

    Args:
        node: Parsed query. None stands for the empty query.
        registry: Fields that filters may refer to.
        operator: Operator joining the filters.
        max_depth: Maximum group nesting walked before rejecting.

    Returns:
        The filters, or Rejected if either polarity cannot be extracted.
    """
    if node is None:
        return QueryFilters()

    positive = deserialize(node, registry, operator, True, max_depth=max_depth)
    if isinstance(positive, Rejected):
        return positive
    negative = deserialize(node, registry, operator, False, max_depth=max_depth)
    if isinstance(negative, Rejected):
        return negative
    return QueryFilters(positive=positive, negative=negative)


def build_query(
    positive: Sequence[Filter],
    negative: Sequence[Filter] = (),
    operator: str = IMPLICIT,
) -> Node | None:
    """Join filters into one query AST.

    Asserted filters are joined with ``operator``, negated ones with its
    negated form, in the order given (asserted first). ``split_query``
    with the same operator returns the filters unchanged.

    Returns:
        The query root, or None if there are no filters.
    """
    items = [(serialize(f), True) for f in positive] + [(serialize(f), False) for f in negative]
    if not items:
        return None

    negated = negate_operator(operator)
    first_fragment, first_positive = items[0]
    if len(items) == 1:
        root: Group = LeftOnlyGroup(left=first_fragment)
    else:
        chain, _ = items[-1]
        for index in range(len(items) - 2, -1, -1):
            fragment = items[index][0]
            joined_positive = items[index + 1][1]
            chain = BinaryGroup(
                left=fragment,
                operator=operator if joined_positive else negated,
                right=chain,
            )
        root = chain

    if not first_positive:
        root = replace(root, start=NOT)
    return root
