"""Integration test fixtures built on the shipped example configuration."""

from __future__ import annotations

from pathlib import Path

import pytest
from click.testing import CliRunner

from lucene_filters.cli import cli


@pytest.fixture
def example_config(temp_dir: Path) -> Path:
    """Write the example config with ``init-config`` and return its path."""
    config_path = temp_dir / "lucene-filters" / "config.toml"
    result = CliRunner().invoke(cli, ["init-config", "--output", str(config_path)])
    assert result.exit_code == 0, result.output
    return config_path
