"""Render AST nodes back into Lucene query text."""

from __future__ import annotations

from lucene_filters.search.ast_nodes import (
    IMPLICIT,
    IMPLICIT_FIELD,
    INCLUSIVE_BOTH,
    INCLUSIVE_LEFT,
    INCLUSIVE_RIGHT,
    BinaryGroup,
    Group,
    LeftOnlyGroup,
    Node,
    RangedTermNode,
    TermNode,
)

_KEYWORDS: frozenset[str] = frozenset({"AND", "OR", "NOT"})

# Characters that end an unquoted term
_UNQUOTED_SPECIAL = set(' \t\r\n\\":(){}[]/^~')


def _format_number(value: float) -> str:
    if value == int(value):
        return str(int(value))
    return str(value)


def _field_prefix(field: str | None) -> str:
    if field is None or field == IMPLICIT_FIELD:
        return ""
    return f"{field}:"


def _escape_quoted(text: str) -> str:
    return text.replace("\\", "\\\\").replace('"', '\\"')


def _escape_unquoted(text: str) -> str:
    if text in _KEYWORDS:
        return "\\" + text
    escaped = "".join("\\" + ch if ch in _UNQUOTED_SPECIAL else ch for ch in text)
    if escaped[:1] in ("+", "-"):
        escaped = "\\" + escaped
    return escaped


def _print_term(node: TermNode) -> str:
    if node.regex:
        text = f"/{node.term}/"
    elif node.quoted:
        text = f'"{_escape_quoted(node.term)}"'
        if node.proximity is not None:
            text += f"~{node.proximity}"
    elif not node.term:
        text = '""'
    else:
        text = _escape_unquoted(node.term)
        if node.similarity is not None:
            text += f"~{_format_number(node.similarity)}"
    if node.boost is not None:
        text += f"^{_format_number(node.boost)}"
    return f"{_field_prefix(node.field)}{node.prefix or ''}{text}"


def _print_range(node: RangedTermNode) -> str:
    opening = "[" if node.inclusive in (INCLUSIVE_BOTH, INCLUSIVE_LEFT) else "{"
    closing = "]" if node.inclusive in (INCLUSIVE_BOTH, INCLUSIVE_RIGHT) else "}"
    return f"{_field_prefix(node.field)}{opening}{node.term_min} TO {node.term_max}{closing}"


def _continues_chain(node: Node) -> bool:
    # A bare right-hand group prints inline as the rest of its parent's chain
    return (
        isinstance(node, (LeftOnlyGroup, BinaryGroup))
        and node.field is None
        and node.start is None
        and not node.parenthesized
    )


def _print_group(node: Group) -> str:
    parts: list[str] = []
    if node.start is not None:
        parts.append(f"{node.start} ")

    # Chains nest to the right, one level per clause: walk them in a loop
    current: Group = node
    while True:
        parts.append(to_query_string(current.left))
        if not isinstance(current, BinaryGroup):
            break
        parts.append(" " if current.operator == IMPLICIT else f" {current.operator} ")
        if not _continues_chain(current.right):
            parts.append(to_query_string(current.right))
            break
        current = current.right

    text = "".join(parts)
    if node.parenthesized or node.field is not None:
        text = f"({text})"
    return f"{_field_prefix(node.field)}{text}"


def to_query_string(node: Node | None) -> str:
    """Render an AST node as Lucene query text.

    Args:
        node: Node to render. None renders as the empty query.

    Returns:
        Query text that parses back into an equivalent tree.
    """
    if node is None:
        return ""
    if isinstance(node, TermNode):
        return _print_term(node)
    if isinstance(node, RangedTermNode):
        return _print_range(node)
    return _print_group(node)
