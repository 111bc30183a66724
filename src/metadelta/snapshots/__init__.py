"""Snapshot parsers for retrieval output."""

from metadelta.snapshots.loader import (
    load_snapshot,
    parse_metadata_list,
    parse_metadata_list_output,
    parse_snapshot,
    strip_ansi,
)

__all__ = [
    "load_snapshot",
    "parse_metadata_list",
    "parse_metadata_list_output",
    "parse_snapshot",
    "strip_ansi",
]
