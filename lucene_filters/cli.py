"""Command-line interface for lucene-filters."""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from pathlib import Path

import click

from lucene_filters import __version__
from lucene_filters.config import Config, load_config
from lucene_filters.exceptions import LuceneFiltersError
from lucene_filters.utils.output import error, set_color, set_verbosity, warning


@dataclass
class Context:
    """State shared by every subcommand."""

    config: Config = field(default_factory=Config)
    verbose: bool = False
    debug: bool = False
    quiet: bool = False


pass_context = click.make_pass_decorator(Context, ensure=True)


def _color_enabled(no_color: bool, config: Config | None) -> bool:
    if no_color or "NO_COLOR" in os.environ:
        return False
    return config is None or config.colored_output


@click.group(context_settings={"help_option_names": ["-h", "--help"]})
@click.option(
    "--config",
    "-c",
    "config_path",
    type=click.Path(dir_okay=False, path_type=Path),
    help="Config file with the field definitions "
    "(default: ~/.config/lucene-filters/config.toml)",
)
@click.option("--no-color", is_flag=True, help="Disable colored output")
@click.option("--verbose", "-v", is_flag=True, help="Show what the command is doing")
@click.option("--debug", is_flag=True, help="Log every rejection reason (implies --verbose)")
@click.option("--quiet", "-q", is_flag=True, help="Only print results and errors")
@click.version_option(version=__version__, prog_name="lucene-filters")
@click.pass_context
def cli(
    ctx: click.Context,
    config_path: Path | None,
    no_color: bool,
    verbose: bool,
    debug: bool,
    quiet: bool,
) -> None:
    """Edit Lucene queries as typed field filters.

    A query such as 'color:(red OR blue) NOT size:[1 TO 3]' is split into
    the filters it asserts and the filters it excludes, each typed by the
    field it names. Filters can be composed back into query text.

    Fields are declared in ~/.config/lucene-filters/config.toml, or in the
    file given with --config.

    \b
    Examples:
      lucene-filters parse 'color:(red OR blue) NOT size:[1 TO 3]'
      lucene-filters build color=red,blue -x size=1..3
      lucene-filters fields list
    """
    app_ctx = ctx.ensure_object(Context)
    app_ctx.verbose = verbose or debug
    app_ctx.debug = debug
    app_ctx.quiet = quiet
    set_verbosity(verbose=verbose, debug=debug)

    try:
        config, warnings = load_config(config_path)
    except LuceneFiltersError as e:
        set_color(_color_enabled(no_color, None))
        error(str(e), hint="Fix the file or pass another one with --config")
        ctx.exit(1)

    app_ctx.config = config
    set_color(_color_enabled(no_color, config))
    if not quiet:
        for message in warnings:
            warning(message)


@cli.command("help")
@click.argument("command", nargs=-1)
@click.pass_context
def help_cmd(ctx: click.Context, command: tuple[str, ...]) -> None:
    """Show help for COMMAND, e.g. 'help fields add'."""
    target: click.Command = cli
    for name in command:
        sub = target.get_command(ctx, name) if isinstance(target, click.Group) else None
        if sub is None:
            error(f"Unknown command: {' '.join(command)}")
            ctx.exit(1)
        target = sub
    with click.Context(target, info_name=" ".join(("lucene-filters", *command))) as sub_ctx:
        click.echo(target.get_help(sub_ctx))


def register_commands() -> None:
    """Attach every command module of lucene_filters.commands to the group."""
    from lucene_filters.commands import discover_commands

    for command in discover_commands():
        cli.add_command(command)


register_commands()
