"""Metadelta error types and utilities."""

from __future__ import annotations

import os
import tempfile
from pathlib import Path


def atomic_write(path: Path, content: str) -> None:
    """Write content to a file atomically using temp file + rename.

    Writes to a temporary file in the same directory, fsyncs it,
    then atomically replaces the target path.
    """
    fd, tmp = tempfile.mkstemp(dir=path.parent, suffix=".tmp")
    closed = False
    try:
        os.write(fd, content.encode())
        os.fsync(fd)
        os.close(fd)
        closed = True
        os.replace(tmp, str(path))
    except BaseException:
        if not closed:
            os.close(fd)
        try:
            os.unlink(tmp)
        except OSError:
            pass
        raise


class MetadeltaError(Exception):
    """Base exception for Metadelta."""

    pass


class DuplicateKeyError(MetadeltaError):
    """One side of a comparison holds two artifacts with the same key."""

    def __init__(self, key: str, side: str):
        self.key = key
        self.side = side
        super().__init__(f"Duplicate artifact key '{key}' in {side} snapshot")


class RuleTableError(MetadeltaError):
    """Error in a type rule table definition."""

    pass


class SnapshotError(MetadeltaError):
    """Error reading or parsing an artifact snapshot."""

    pass
