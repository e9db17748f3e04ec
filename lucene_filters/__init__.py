"""lucene-filters: edit Lucene queries as typed filters."""

__version__ = "0.1.0"
