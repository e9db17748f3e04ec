"""Utility modules for lucene-filters."""

from lucene_filters.utils.fileops import atomic_write
from lucene_filters.utils.output import (
    console,
    error,
    info,
    success,
    warning,
)

__all__ = [
    "atomic_write",
    "console",
    "error",
    "info",
    "success",
    "warning",
]
