"""Core data models for Metadelta."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum


class Classification(str, Enum):
    """Reconciliation outcome for an artifact or a diff line."""

    ADDED = "added"
    REMOVED = "removed"
    CHANGED = "changed"
    UNCHANGED = "unchanged"


@dataclass
class Artifact:
    """A named, typed unit of configuration taken from one snapshot.

    ``key`` is the sole identity used to match artifacts across snapshots and
    defaults to ``"<artifact_type>/<name>"``. Content of ``None`` means the
    content was never retrieved; it compares equal only to other ``None``.
    """

    artifact_type: str  # "ApexClass", "CustomObject", ...
    name: str
    key: str = ""
    modified_at: str | None = None
    modified_by: str | None = None
    left_content: str | None = None
    right_content: str | None = None
    classification: Classification | None = None
    selected: bool = False

    def __post_init__(self):
        if not self.key:
            self.key = f"{self.artifact_type}/{self.name}"


@dataclass
class ComparisonResult:
    """Four disjoint partitions covering every key seen in either snapshot."""

    added: list[Artifact] = field(default_factory=list)  # only in left
    removed: list[Artifact] = field(default_factory=list)  # only in right
    changed: list[Artifact] = field(default_factory=list)
    unchanged: list[Artifact] = field(default_factory=list)

    def all_items(self) -> list[Artifact]:
        """Flattened universe in the order added, removed, changed, unchanged."""
        return [*self.added, *self.removed, *self.changed, *self.unchanged]

    def items_for(self, status: Classification | str | None = None) -> list[Artifact]:
        """Return one partition, or the whole universe when status is None."""
        if status is None:
            return self.all_items()
        return list(getattr(self, Classification(status).value))

    def counts(self) -> dict[str, int]:
        return {
            Classification.ADDED.value: len(self.added),
            Classification.REMOVED.value: len(self.removed),
            Classification.CHANGED.value: len(self.changed),
            Classification.UNCHANGED.value: len(self.unchanged),
        }

    @property
    def total(self) -> int:
        return sum(self.counts().values())

    @property
    def has_changes(self) -> bool:
        return bool(self.added or self.removed or self.changed)

    def get(self, key: str) -> Artifact | None:
        """Find an artifact by key across all partitions."""
        for item in self.all_items():
            if item.key == key:
                return item
        return None

    def selected_items(self) -> list[Artifact]:
        return [item for item in self.all_items() if item.selected]


@dataclass
class DiffLine:
    """One aligned row of a positional line diff."""

    line_number: int  # 1-based position, not an edit-script index
    left_text: str
    right_text: str
    classification: Classification


@dataclass
class PackageManifest:
    """Deployable package descriptor: artifact type -> member names."""

    types: dict[str, list[str]] = field(default_factory=dict)
    version: str = "58.0"

    @property
    def member_count(self) -> int:
        return sum(len(members) for members in self.types.values())

    def __contains__(self, item: object) -> bool:
        if not isinstance(item, tuple) or len(item) != 2:
            return False
        artifact_type, name = item
        return name in self.types.get(artifact_type, [])

    def to_dict(self) -> dict:
        return {
            "version": self.version,
            "types": {name: list(members) for name, members in self.types.items()},
        }

    def to_xml(self) -> str:
        """Render as a Metadata API ``package.xml`` document."""
        from metadelta.compare.manifest import render_package_xml

        return render_package_xml(self)
