"""Snapshot loading — turn retrieval output into artifact lists.

Nothing here talks to an org or a repository. These functions parse what a
retrieval step already produced: ``sf org list metadata --json`` output or a
snapshot file written by a previous export.
"""

from __future__ import annotations

import json
import logging
import re
from pathlib import Path

import yaml

from metadelta.core.errors import SnapshotError
from metadelta.core.models import Artifact

logger = logging.getLogger(__name__)

SIDES = ("left", "right")

_ANSI_RE = re.compile(r"\x1b\[[0-9;]*m")


def strip_ansi(text: str | None) -> str:
    """Remove ANSI colour codes that CLI tools sometimes emit around JSON."""
    if not text:
        return ""
    return _ANSI_RE.sub("", text)


def _check_side(side: str) -> None:
    if side not in SIDES:
        raise ValueError(f"side must be 'left' or 'right', got {side!r}")


def _with_content(artifact: Artifact, content: str | None, side: str) -> Artifact:
    if side == "left":
        artifact.left_content = content
    else:
        artifact.right_content = content
    return artifact


def parse_metadata_list(records: list[dict], artifact_type: str) -> list[Artifact]:
    """Convert a ``sf org list metadata`` result list for one type.

    Listings carry no content, so the artifacts come back with content unset.
    """
    artifacts = []
    for record in records:
        if not isinstance(record, dict):
            raise SnapshotError(f"Expected a metadata record mapping, got {type(record).__name__}")
        name = record.get("fullName") or record.get("name")
        if not name:
            raise SnapshotError(f"{artifact_type} record has no fullName: {record!r}")
        artifacts.append(Artifact(
            artifact_type=artifact_type,
            name=name,
            modified_at=record.get("lastModifiedDate"),
            modified_by=record.get("lastModifiedByName") or record.get("lastModifiedBy"),
        ))
    logger.debug("Parsed %d %s records", len(artifacts), artifact_type)
    return artifacts


def parse_metadata_list_output(output: str, artifact_type: str) -> list[Artifact]:
    """Parse raw ``--json`` stdout (possibly ANSI-coloured) for one type."""
    try:
        response = json.loads(strip_ansi(output))
    except json.JSONDecodeError as e:
        raise SnapshotError(f"Invalid JSON for {artifact_type} listing: {e}") from e
    if not isinstance(response, dict):
        raise SnapshotError(f"Unexpected {artifact_type} listing: expected a JSON object")
    records = response.get("result") or []
    if isinstance(records, dict):
        records = [records]
    return parse_metadata_list(records, artifact_type)


def parse_snapshot(data: list | dict, side: str) -> list[Artifact]:
    """Build artifacts from a snapshot document.

    Accepts either a list of records or a mapping with an ``artifacts`` list.
    Each record needs ``type`` and ``name``; ``content`` becomes the content
    for the given side.
    """
    _check_side(side)
    if isinstance(data, dict):
        data = data.get("artifacts", [])
    if not isinstance(data, list):
        raise SnapshotError("Snapshot must be a list of artifacts or a mapping with 'artifacts'")

    artifacts = []
    for i, record in enumerate(data):
        if not isinstance(record, dict):
            raise SnapshotError(f"Snapshot entry {i} is not a mapping")
        artifact_type = record.get("type") or record.get("artifact_type")
        name = record.get("name")
        if not artifact_type or not name:
            raise SnapshotError(f"Snapshot entry {i} needs 'type' and 'name'")
        artifact = Artifact(
            artifact_type=artifact_type,
            name=name,
            key=record.get("key", ""),
            modified_at=record.get("modified_at"),
            modified_by=record.get("modified_by"),
        )
        artifacts.append(_with_content(artifact, record.get("content"), side))
    return artifacts


def load_snapshot(path: str | Path, side: str) -> list[Artifact]:
    """Read a JSON or YAML snapshot file."""
    path = Path(path)
    try:
        text = path.read_text()
    except OSError as e:
        raise SnapshotError(f"Cannot read snapshot {path}: {e}") from e

    try:
        if path.suffix in (".yaml", ".yml"):
            data = yaml.safe_load(text) or []
        else:
            data = json.loads(strip_ansi(text))
    except (json.JSONDecodeError, yaml.YAMLError) as e:
        raise SnapshotError(f"Cannot parse snapshot {path}: {e}") from e

    artifacts = parse_snapshot(data, side)
    logger.info("Loaded %d artifacts from %s (%s)", len(artifacts), path, side)
    return artifacts
