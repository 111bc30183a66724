"""Positional line diff for side-by-side content views.

Lines are compared index by index; there is no re-alignment. An insertion in
the middle of one side marks every following line as changed.
"""

from __future__ import annotations

from dataclasses import dataclass

from metadelta.core.models import Artifact, Classification, DiffLine


@dataclass
class DiffStats:
    """Line counts per classification for one diff."""

    added: int = 0
    removed: int = 0
    changed: int = 0
    unchanged: int = 0

    @property
    def has_changes(self) -> bool:
        return bool(self.added or self.removed or self.changed)

    @property
    def total(self) -> int:
        return self.added + self.removed + self.changed + self.unchanged


def classify_line(left: str, right: str) -> Classification:
    if left == right:
        return Classification.UNCHANGED
    if not left:
        return Classification.ADDED
    if not right:
        return Classification.REMOVED
    return Classification.CHANGED


def diff_lines(left_text: str | None, right_text: str | None) -> list[DiffLine]:
    """Align both texts by line index and classify each position."""
    left_lines = (left_text or "").split("\n")
    right_lines = (right_text or "").split("\n")

    lines = []
    for i in range(max(len(left_lines), len(right_lines))):
        left = left_lines[i] if i < len(left_lines) else ""
        right = right_lines[i] if i < len(right_lines) else ""
        lines.append(DiffLine(
            line_number=i + 1,
            left_text=left,
            right_text=right,
            classification=classify_line(left, right),
        ))
    return lines


def diff_artifact(artifact: Artifact) -> list[DiffLine]:
    """Diff an artifact's left content against its right content."""
    return diff_lines(artifact.left_content, artifact.right_content)


def diff_stats(lines: list[DiffLine]) -> DiffStats:
    stats = DiffStats()
    for line in lines:
        name = line.classification.value
        setattr(stats, name, getattr(stats, name) + 1)
    return stats
