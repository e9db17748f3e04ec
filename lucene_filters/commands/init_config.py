"""Write the example configuration file."""

from __future__ import annotations

from importlib import resources
from pathlib import Path

import click

from lucene_filters.config import get_default_config_path
from lucene_filters.utils.fileops import atomic_write
from lucene_filters.utils.output import error, info, success

EXIT_SUCCESS = 0
EXIT_EXISTS_OR_UNWRITABLE = 1

EXAMPLE_CONFIG = "config.example.toml"


def _load_example_config() -> str:
    return resources.files("lucene_filters").joinpath(EXAMPLE_CONFIG).read_text(encoding="utf-8")


@click.command("init-config")
@click.option("--force", "-f", is_flag=True, help="Replace an existing config file")
@click.option(
    "--output",
    "-o",
    type=click.Path(dir_okay=False, path_type=Path),
    help="Where to write the file (default: ~/.config/lucene-filters/config.toml)",
)
def cli(force: bool, output: Path | None) -> None:
    """Write an example config declaring one field of every type.

    Edit the [[fields]] tables afterwards to describe the fields of your
    index, or add them with 'lucene-filters fields add'.

    \b
    Examples:
      lucene-filters init-config
      lucene-filters init-config --output ./fields.toml
      lucene-filters init-config --force
    """
    target = (output or get_default_config_path()).expanduser().resolve()

    if target.exists() and not force:
        error(f"Config file already exists: {target}", hint="Use --force to overwrite")
        raise SystemExit(EXIT_EXISTS_OR_UNWRITABLE)

    try:
        atomic_write(target, _load_example_config())
    except OSError as e:
        error(f"Failed to write config file: {e}")
        raise SystemExit(EXIT_EXISTS_OR_UNWRITABLE)

    success(f"Created config file: {target}")
    info("List the declared fields with: lucene-filters fields list")
    raise SystemExit(EXIT_SUCCESS)
