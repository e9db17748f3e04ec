"""Terminal output for the CLI.

Results go to stdout through ``console``; messages about the run
(warnings, errors, verbose and debug notes) go to stderr so that
``parse --format json`` and ``build`` output stays pipeable. Messages
are plain text: any markup in them is printed literally.
"""

from __future__ import annotations

import logging
from typing import Any

from rich import box
from rich.console import Console
from rich.logging import RichHandler
from rich.markup import escape
from rich.table import Table
from rich.theme import Theme

THEME = Theme(
    {
        "info": "cyan",
        "warning": "yellow",
        "error": "bold red",
        "success": "bold green",
        "hint": "dim cyan",
        "field.name": "bold",
        "field.type": "magenta",
        "filter.positive": "bold green",
        "filter.negative": "bold red",
    }
)

console = Console(theme=THEME)
error_console = Console(theme=THEME, stderr=True)

_verbose_enabled = False
_debug_enabled = False


def set_verbosity(*, verbose: bool = False, debug: bool = False) -> None:
    """Set how chatty the CLI is.

    With ``debug`` the package loggers are routed through a RichHandler
    on stderr, which shows why the deserializer rejected a query.
    """
    global _verbose_enabled, _debug_enabled
    _verbose_enabled = verbose or debug
    _debug_enabled = debug

    if debug:
        handler = RichHandler(console=error_console, show_path=False, show_time=False)
        logging.basicConfig(level=logging.DEBUG, format="%(message)s", handlers=[handler], force=True)


def set_color(enabled: bool) -> None:
    for target in (console, error_console):
        target.no_color = not enabled


def _notice(style: str, label: str, message: str) -> None:
    error_console.print(f"[{style}]{label}:[/{style}] {escape(message)}")


def info(message: str) -> None:
    console.print(message, style="info", markup=False)


def success(message: str) -> None:
    console.print(message, style="success", markup=False)


def warning(message: str) -> None:
    _notice("warning", "Warning", message)


def error(message: str, hint: str | None = None) -> None:
    """Report an error on stderr, optionally followed by how to fix it."""
    _notice("error", "Error", message)
    if hint:
        error_console.print(f"  {hint}", style="hint", markup=False)


def verbose(message: str) -> None:
    if _verbose_enabled:
        error_console.print(message, style="info", markup=False)


def debug(message: str) -> None:
    if _debug_enabled:
        _notice("dim", "debug", message)


def create_table(title: str | None = None, **kwargs: Any) -> Table:
    """Create a table in the CLI's style; keyword arguments override it."""
    kwargs.setdefault("box", box.SIMPLE_HEAD)
    kwargs.setdefault("header_style", "bold")
    return Table(title=title, **kwargs)
