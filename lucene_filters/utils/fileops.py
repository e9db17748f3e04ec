"""File operations for configuration files."""

from __future__ import annotations

import os
import tempfile
from pathlib import Path

# Config files are only read by their owner
CONFIG_FILE_MODE = 0o600


def atomic_write(path: Path, content: str, mode: int = CONFIG_FILE_MODE) -> None:
    """Replace *path* with *content* in a single rename.

    Parent directories are created as needed. The content goes to a
    temporary file next to *path* first, so readers see either the old
    file or the complete new one.
    """
    path.parent.mkdir(parents=True, exist_ok=True)
    fd, tmp_path = tempfile.mkstemp(dir=path.parent, prefix=".tmp-", suffix=".toml")
    try:
        os.fchmod(fd, mode)
        with open(fd, "w", encoding="utf-8") as f:
            f.write(content)
        Path(tmp_path).replace(path)
    except BaseException:
        Path(tmp_path).unlink(missing_ok=True)
        raise
