"""Quoting and operator helpers shared by the serializer and deserializer."""

from __future__ import annotations

import re

from lucene_filters.search.ast_nodes import AND, AND_NOT, IMPLICIT, NOT, OR, OR_NOT

_NEGATED_OPERATORS: dict[str, str] = {
    IMPLICIT: NOT,
    AND: AND_NOT,
    OR: OR_NOT,
}

# A leading sign would read as a +/- prefix, the rest split or modify the term
_NEEDS_QUOTING_RE = re.compile(r"^[+-]|[\s/~^:(){}\[\]]")


def negate_operator(operator: str) -> str:
    """Return the operator expressing NOT of ``operator``.

    ``<implicit>`` becomes ``NOT``, ``AND`` becomes ``AND NOT`` and ``OR``
    becomes ``OR NOT``.

    Raises:
        ValueError: If ``operator`` is not one of the three positive operators.
    """
    try:
        return _NEGATED_OPERATORS[operator]
    except KeyError:
        raise ValueError(f"Not a positive operator: {operator!r}") from None


def needs_quoting(text: str) -> bool:
    """Whether ``text`` must be quoted to stay a single query term."""
    return _NEEDS_QUOTING_RE.search(text) is not None
