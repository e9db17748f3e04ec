"""Field registry commands."""

from __future__ import annotations

import click

# Exit codes per CLI contract
EXIT_SUCCESS = 0
EXIT_INVALID_FIELD = 1
EXIT_WRITE_ERROR = 2


@click.group("fields")
def cli() -> None:
    """Field registry commands.

    Commands for listing and declaring the fields queries are split on.
    """
    pass


# Import submodules to register their commands with the cli group
from lucene_filters.commands.fields import add as _add  # noqa: E402, F401
from lucene_filters.commands.fields import show as _show  # noqa: E402, F401
