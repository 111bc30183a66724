"""Filtering of comparison results by type, status and search text."""

from __future__ import annotations

from dataclasses import dataclass, field

from metadelta.core.models import Artifact, Classification, ComparisonResult

DEFAULT_STATUSES = (
    Classification.ADDED,
    Classification.REMOVED,
    Classification.CHANGED,
)


@dataclass
class CompareFilter:
    """Criteria for narrowing a comparison listing.

    An empty ``artifact_types`` matches every type. Unchanged artifacts are
    hidden unless asked for.
    """

    artifact_types: tuple[str, ...] = ()
    statuses: tuple[Classification, ...] = field(default=DEFAULT_STATUSES)
    search_term: str = ""


def matches_search(item: Artifact, term: str) -> bool:
    """Case-insensitive substring match on name, key or type."""
    term = term.lower()
    return (
        term in item.name.lower()
        or term in item.key.lower()
        or term in item.artifact_type.lower()
    )


def filter_items(items: list[Artifact], compare_filter: CompareFilter) -> list[Artifact]:
    statuses = {Classification(s) for s in compare_filter.statuses}
    selected = []
    for item in items:
        if compare_filter.artifact_types and item.artifact_type not in compare_filter.artifact_types:
            continue
        if item.classification not in statuses:
            continue
        if compare_filter.search_term and not matches_search(item, compare_filter.search_term):
            continue
        selected.append(item)
    return selected


def available_types(result: ComparisonResult) -> list[str]:
    return sorted({item.artifact_type for item in result.all_items()})
