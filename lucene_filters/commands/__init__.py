"""Subcommands of the lucene-filters CLI and the options they share."""

from __future__ import annotations

import importlib
import pkgutil
from typing import TYPE_CHECKING

import click

from lucene_filters.search.ast_nodes import AND, IMPLICIT, OR

if TYPE_CHECKING:
    from collections.abc import Iterator

# Operator names accepted on the command line
OPERATOR_CHOICES: dict[str, str] = {
    "implicit": IMPLICIT,
    "and": AND,
    "or": OR,
}

# Shared --operator option; None means the configured default
OPERATOR_OPTION = click.option(
    "--operator",
    "-O",
    type=click.Choice(list(OPERATOR_CHOICES), case_sensitive=False),
    default=None,
    help="Operator joining the filters (default: query.default_operator from config)",
)


def resolve_operator(choice: str | None, default: str) -> str:
    """Map an --operator choice to its AST operator."""
    if choice is None:
        return default
    return OPERATOR_CHOICES[choice.lower()]


def discover_commands() -> Iterator[click.Command]:
    """Yield the ``cli`` command of every public module in this package.

    Subpackages such as ``fields`` expose a click group under the same
    name and are picked up like plain command modules.
    """
    for module_info in pkgutil.iter_modules(__path__):
        if module_info.name.startswith("_"):
            continue
        module = importlib.import_module(f"{__name__}.{module_info.name}")
        command = getattr(module, "cli", None)
        if isinstance(command, click.Command):
            yield command
