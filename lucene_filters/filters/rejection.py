"""The uniform "cannot be represented as filters" outcome."""

from __future__ import annotations

from dataclasses import dataclass

from lucene_filters.search.ast_nodes import TermNode


@dataclass(frozen=True)
class Rejected:
    """A query outside the supported grammar subset.

    Callers should fall back to raw-text editing of the query.
    """

    reason: str


def unsupported_modifier(node: TermNode) -> str | None:
    """Name the first term modifier that has no typed-filter equivalent."""
    if node.boost is not None:
        return "boost"
    if node.prefix is not None:
        return f"'{node.prefix}' prefix"
    if node.regex:
        return "regular expression"
    if node.similarity is not None:
        return "fuzzy similarity"
    if node.proximity is not None:
        return "proximity"
    return None
