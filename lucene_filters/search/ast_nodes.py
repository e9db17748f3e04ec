"""AST data classes for parsed Lucene queries.

The node set is closed: every parsed or serialized query is built from
exactly these four shapes, so consumers can dispatch with ``isinstance``
instead of probing for attributes.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Union

# Field name used for terms written without a ``field:`` prefix.
IMPLICIT_FIELD = "<implicit>"

# Boolean operators joining two sides of a BinaryGroup.
IMPLICIT = "<implicit>"
AND = "AND"
OR = "OR"
NOT = "NOT"
AND_NOT = "AND NOT"
OR_NOT = "OR NOT"

# Operators a caller may request when extracting filters.
POSITIVE_OPERATORS: tuple[str, ...] = (IMPLICIT, AND, OR)

# Range bracket inclusivity.
INCLUSIVE_BOTH = "both"
INCLUSIVE_NONE = "none"
INCLUSIVE_LEFT = "left"
INCLUSIVE_RIGHT = "right"


@dataclass(frozen=True)
class TermNode:
    """A single term like ``field:value``, ``"a phrase"`` or ``/re/``.

    ``prefix`` is the ``+``/``-`` marker, ``similarity`` the fuzzy
    modifier (``~0.8``), ``proximity`` the phrase slop (``"a b"~3``).
    """

    field: str
    term: str
    quoted: bool = False
    boost: float | None = None
    prefix: str | None = None
    regex: bool = False
    similarity: float | None = None
    proximity: int | None = None


@dataclass(frozen=True)
class RangedTermNode:
    """A range like ``field:[1 TO 5]``."""

    field: str
    term_min: str
    term_max: str
    inclusive: str = INCLUSIVE_BOTH


@dataclass(frozen=True)
class LeftOnlyGroup:
    """A group with a single child.

    Produced for a whole single-clause query, for ``( ... )`` around a
    single clause and for ``field:(value)``.
    """

    left: Node
    field: str | None = None
    parenthesized: bool = False
    start: str | None = None


@dataclass(frozen=True)
class BinaryGroup:
    """Two sides joined by an operator: ``left <operator> right``."""

    left: Node
    operator: str
    right: Node
    field: str | None = None
    parenthesized: bool = False
    start: str | None = None


Leaf = Union[TermNode, RangedTermNode]
Group = Union[LeftOnlyGroup, BinaryGroup]
Node = Union[TermNode, RangedTermNode, LeftOnlyGroup, BinaryGroup]
