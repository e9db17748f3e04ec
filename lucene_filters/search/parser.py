"""Parse Lucene query syntax into an AST."""

from __future__ import annotations

import re
from dataclasses import replace
from importlib import resources
from typing import Any

from lark import Lark, Token, UnexpectedInput
from lark.visitors import Transformer_NonRecursive

from lucene_filters.exceptions import SearchParseError
from lucene_filters.search.ast_nodes import (
    AND,
    AND_NOT,
    IMPLICIT,
    IMPLICIT_FIELD,
    INCLUSIVE_BOTH,
    INCLUSIVE_LEFT,
    INCLUSIVE_NONE,
    INCLUSIVE_RIGHT,
    NOT,
    OR,
    OR_NOT,
    BinaryGroup,
    LeftOnlyGroup,
    Node,
    RangedTermNode,
    TermNode,
)

# Similarity assumed for a bare ``~`` fuzzy marker
DEFAULT_SIMILARITY = 0.5

_OPERATOR_ALIASES: dict[str, str] = {
    "&&": AND,
    "||": OR,
}

_ESCAPE_RE = re.compile(r"\\(.)", re.DOTALL)


def _load_grammar() -> str:
    """Load the Lark grammar from the package resources."""
    return resources.files("lucene_filters.search").joinpath("grammar.lark").read_text()


_GRAMMAR_TEXT = _load_grammar()

_parser = Lark(
    _GRAMMAR_TEXT,
    parser="lalr",
)


def _unescape(text: str) -> str:
    return _ESCAPE_RE.sub(r"\1", text)


def _collapse(node: Node) -> Node:
    """Unwrap a right-hand side that holds a single clause."""
    if isinstance(node, LeftOnlyGroup) and node.start is None:
        return node.left
    return node


def _apply_modifiers(term: TermNode, modifiers: list[tuple[str, str]]) -> TermNode:
    for kind, value in modifiers:
        if kind == "boost":
            term = replace(term, boost=float(value))
        elif term.quoted:
            term = replace(term, proximity=int(float(value)) if value else 0)
        else:
            term = replace(term, similarity=float(value) if value else DEFAULT_SIMILARITY)
    return term


def _split_prefix(items: list[Any]) -> tuple[str | None, list[Any]]:
    if isinstance(items[0], Token) and items[0].type == "PREFIX":
        return str(items[0]), items[1:]
    return None, items


class _LuceneTransformer(Transformer_NonRecursive):
    """Transform Lark parse tree into AST data classes.

    Long clause chains nest deeply, so the tree is walked without recursion.
    """

    def start(self, items: list[Any]) -> Node | None:
        return items[0] if items else None

    def negated_node(self, items: list[Any]) -> Node:
        # items[0] is the NOT token, items[1] the group it opens
        return replace(items[1], start=NOT)

    def single_node(self, items: list[Any]) -> LeftOnlyGroup:
        return LeftOnlyGroup(left=items[0])

    def operator_node(self, items: list[Any]) -> BinaryGroup:
        left, operator, right = items
        return BinaryGroup(left=left, operator=operator, right=_collapse(right))

    def implicit_node(self, items: list[Any]) -> BinaryGroup:
        left, right = items
        return BinaryGroup(left=left, operator=IMPLICIT, right=_collapse(right))

    def operator(self, items: list[Any]) -> str:
        op = str(items[0])
        op = _OPERATOR_ALIASES.get(op, op)
        # Collapse whitespace in "AND   NOT"
        return " ".join(op.split())

    def paren_exp(self, items: list[Any]) -> Node:
        return replace(items[0], parenthesized=True)

    def field_group(self, items: list[Any]) -> Node:
        field_name, group = items
        return replace(group, field=field_name)

    def field_range(self, items: list[Any]) -> RangedTermNode:
        node = items[-1]
        if len(items) == 2:
            node = replace(node, field=items[0])
        return node

    def field_term(self, items: list[Any]) -> TermNode:
        node = items[-1]
        if len(items) == 2:
            node = replace(node, field=items[0])
        return node

    def prefixed_field_term(self, items: list[Any]) -> TermNode:
        # +field:value, equivalent to field:+value
        prefix, field_name, node = items
        if node.prefix is None:
            node = replace(node, prefix=str(prefix))
        return replace(node, field=field_name)

    def range(self, items: list[Any]) -> RangedTermNode:
        opening, term_min, term_max, closing = (str(item) for item in items)
        if opening == "[" and closing == "]":
            inclusive = INCLUSIVE_BOTH
        elif opening == "[":
            inclusive = INCLUSIVE_LEFT
        elif closing == "]":
            inclusive = INCLUSIVE_RIGHT
        else:
            inclusive = INCLUSIVE_NONE
        return RangedTermNode(
            field=IMPLICIT_FIELD,
            term_min=term_min,
            term_max=term_max,
            inclusive=inclusive,
        )

    def unquoted_term(self, items: list[Any]) -> TermNode:
        prefix, rest = _split_prefix(items)
        term = TermNode(field=IMPLICIT_FIELD, term=_unescape(str(rest[0])), prefix=prefix)
        return _apply_modifiers(term, rest[1:])

    def quoted_term(self, items: list[Any]) -> TermNode:
        prefix, rest = _split_prefix(items)
        raw = str(rest[0])[1:-1]
        term = TermNode(field=IMPLICIT_FIELD, term=_unescape(raw), quoted=True, prefix=prefix)
        return _apply_modifiers(term, rest[1:])

    def regex_term(self, items: list[Any]) -> TermNode:
        prefix, rest = _split_prefix(items)
        return TermNode(field=IMPLICIT_FIELD, term=str(rest[0])[1:-1], prefix=prefix, regex=True)

    def fuzzy(self, items: list[Any]) -> tuple[str, str]:
        return ("fuzzy", str(items[0])[1:])

    def boost(self, items: list[Any]) -> tuple[str, str]:
        return ("boost", str(items[0])[1:])

    def FIELD_NAME(self, token: Token) -> str:
        # Strip the trailing colon and any blanks before it
        return str(token)[:-1].rstrip()


_transformer = _LuceneTransformer()


def parse_query(query_string: str) -> Node | None:
    """Parse a Lucene query string into an AST.

    Args:
        query_string: The query to parse.

    Returns:
        The root group of the query, or None for an empty query.

    Raises:
        SearchParseError: If the query cannot be parsed.
    """
    query_string = query_string.strip()
    if not query_string:
        return None

    try:
        tree = _parser.parse(query_string)
        return _transformer.transform(tree)
    except UnexpectedInput as e:
        raise SearchParseError(query_string, str(e)) from e
