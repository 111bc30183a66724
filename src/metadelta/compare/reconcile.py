"""Reconciliation — partition two snapshots into added/removed/changed/unchanged."""

from __future__ import annotations

import logging
from dataclasses import replace

from metadelta.core.errors import DuplicateKeyError
from metadelta.core.models import Artifact, Classification, ComparisonResult

logger = logging.getLogger(__name__)


def index_by_key(items: list[Artifact], side: str) -> dict[str, Artifact]:
    """Map key -> artifact, preserving input order. Duplicate keys are fatal."""
    index: dict[str, Artifact] = {}
    for item in items:
        if item.key in index:
            raise DuplicateKeyError(item.key, side)
        index[item.key] = item
    return index


def content_equal(left: str | None, right: str | None) -> bool:
    """Exact equality; missing content only equals missing content."""
    if left is None or right is None:
        return left is None and right is None
    return left == right


def side_content(item: Artifact, side: str) -> str | None:
    """Content an artifact carries for one side, falling back to the other field.

    A snapshot loaded for either side may hold its content in whichever field;
    the same collection passed as both sides compares equal.
    """
    if side == "left":
        return item.left_content if item.left_content is not None else item.right_content
    return item.right_content if item.right_content is not None else item.left_content


def reconcile(left: list[Artifact], right: list[Artifact]) -> ComparisonResult:
    """Classify every key of the left (source) and right (target) snapshots.

    Returns new artifact views carrying their classification; the input
    artifacts are not modified. Partitions keep the order of the snapshot
    they come from: left order for added/changed/unchanged, right order
    for removed.
    """
    left_index = index_by_key(left, "left")
    right_index = index_by_key(right, "right")

    result = ComparisonResult()

    for key, item in left_index.items():
        counterpart = right_index.get(key)
        if counterpart is None:
            result.added.append(replace(item, classification=Classification.ADDED))
            continue

        merged = replace(
            item,
            left_content=side_content(item, "left"),
            right_content=side_content(counterpart, "right"),
        )
        if content_equal(merged.left_content, merged.right_content):
            merged.classification = Classification.UNCHANGED
            result.unchanged.append(merged)
        else:
            merged.classification = Classification.CHANGED
            result.changed.append(merged)

    for key, item in right_index.items():
        if key not in left_index:
            result.removed.append(replace(item, classification=Classification.REMOVED))

    logger.info(
        "Reconciled %d left / %d right artifacts: %d added, %d removed, %d changed, %d unchanged",
        len(left_index), len(right_index),
        len(result.added), len(result.removed), len(result.changed), len(result.unchanged),
    )
    return result
