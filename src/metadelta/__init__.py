"""Metadelta - compare two metadata snapshots and package the differences.

Usage:
    from metadelta import RuleTable, build_manifest, expand, reconcile

    result = reconcile(source_artifacts, target_artifacts)
    for item in result.changed:
        lines = diff_lines(item.left_content, item.right_content)
    items = expand(selected, result, RuleTable.default())
    print(build_manifest(items).to_xml())
"""

from metadelta.compare.expand import expand, expand_selection
from metadelta.compare.filters import CompareFilter, filter_items
from metadelta.compare.linediff import DiffStats, diff_artifact, diff_lines, diff_stats
from metadelta.compare.manifest import build_manifest
from metadelta.compare.reconcile import reconcile
from metadelta.core.errors import DuplicateKeyError, MetadeltaError, RuleTableError, SnapshotError
from metadelta.core.models import Artifact, Classification, ComparisonResult, DiffLine, PackageManifest
from metadelta.rules.table import AutoWireKind, RuleTable, TypeRule

__all__ = [
    "Artifact",
    "AutoWireKind",
    "Classification",
    "CompareFilter",
    "ComparisonResult",
    "DiffLine",
    "DiffStats",
    "DuplicateKeyError",
    "MetadeltaError",
    "PackageManifest",
    "RuleTable",
    "RuleTableError",
    "SnapshotError",
    "TypeRule",
    "build_manifest",
    "diff_artifact",
    "diff_lines",
    "diff_stats",
    "expand",
    "expand_selection",
    "filter_items",
    "reconcile",
]

__version__ = "0.1.0"
