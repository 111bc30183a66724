"""Type rule table — per-type directory, file naming and auto-wire rules.

A ``RuleTable`` is a plain configuration value. It is passed explicitly to the
expander and the package planner, so several tables can coexist in one process.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from importlib import resources
from pathlib import Path
from typing import Iterator

import yaml

from metadelta.core.errors import RuleTableError


class AutoWireKind(str, Enum):
    """Which related artifacts must travel with an artifact of a type."""

    NONE = "none"
    SIBLING_BUNDLE = "siblingBundle"  # name + "/" prefix within the bundle type
    COMPANION_META = "companionMeta"  # name + "-meta" of the same type
    CHILDREN_BY_PREFIX = "childrenByPrefix"  # name + "." prefix in child types
    PARENT_BY_PREFIX = "parentByPrefix"  # text before the first "." in parent type


@dataclass(frozen=True)
class TypeRule:
    """Static metadata for one artifact type."""

    artifact_type: str
    container_path: str = "classes"
    file_suffix: str = ""
    auto_wire: AutoWireKind = AutoWireKind.NONE
    related_types: tuple[str, ...] = ()
    display_name: str = ""

    def file_name(self, name: str) -> str:
        return f"{name}{self.file_suffix}"

    def targets(self) -> tuple[str, ...]:
        """Types the auto-wire rule pulls from; defaults to this rule's own type."""
        return self.related_types or (self.artifact_type,)

    @classmethod
    def from_dict(cls, data: dict) -> TypeRule:
        if not isinstance(data, dict):
            raise RuleTableError(f"Type rule must be a mapping, got {type(data).__name__}")
        artifact_type = data.get("type") or data.get("artifact_type")
        if not artifact_type:
            raise RuleTableError(f"Type rule is missing 'type': {data!r}")

        raw_kind = data.get("auto_wire") or AutoWireKind.NONE.value
        try:
            kind = AutoWireKind(raw_kind)
        except ValueError:
            valid = ", ".join(k.value for k in AutoWireKind)
            raise RuleTableError(
                f"Unknown auto_wire '{raw_kind}' for type '{artifact_type}' (expected one of: {valid})"
            ) from None

        related = data.get("related_types") or ()
        if isinstance(related, str):
            related = (related,)

        return cls(
            artifact_type=artifact_type,
            container_path=data.get("container_path", "classes"),
            file_suffix=data.get("file_suffix", "") or "",
            auto_wire=kind,
            related_types=tuple(related),
            display_name=data.get("display_name", "") or artifact_type,
        )


DEFAULT_RULE = TypeRule(artifact_type="*", container_path="classes")


class RuleTable:
    """Lookup of type rules with a documented fallback for unknown types."""

    def __init__(self, rules: list[TypeRule] | tuple[TypeRule, ...] = (), default: TypeRule | None = None):
        self._rules: dict[str, TypeRule] = {}
        for rule in rules:
            if rule.artifact_type in self._rules:
                raise RuleTableError(f"Duplicate type rule for '{rule.artifact_type}'")
            self._rules[rule.artifact_type] = rule
        self.default_rule = default or DEFAULT_RULE

    def get(self, artifact_type: str) -> TypeRule | None:
        return self._rules.get(artifact_type)

    def resolve(self, artifact_type: str) -> TypeRule:
        """Return the rule for a type, or the default rule (auto-wire ``none``)."""
        rule = self._rules.get(artifact_type)
        if rule is not None:
            return rule
        return TypeRule(
            artifact_type=artifact_type,
            container_path=self.default_rule.container_path,
            file_suffix=self.default_rule.file_suffix,
            auto_wire=AutoWireKind.NONE,
            display_name=artifact_type,
        )

    def types(self) -> list[str]:
        return list(self._rules)

    def __contains__(self, artifact_type: object) -> bool:
        return artifact_type in self._rules

    def __iter__(self) -> Iterator[TypeRule]:
        return iter(self._rules.values())

    def __len__(self) -> int:
        return len(self._rules)

    @classmethod
    def from_dict(cls, data: dict) -> RuleTable:
        """Build a table from a ``{"types": [...], "default": {...}}`` document."""
        if not isinstance(data, dict):
            raise RuleTableError("Rule table document must be a mapping")
        entries = data.get("types") or []
        if not isinstance(entries, list):
            raise RuleTableError("'types' must be a list of type rules")

        default = None
        if data.get("default"):
            default = TypeRule.from_dict({"type": "*", **data["default"]})
        return cls([TypeRule.from_dict(entry) for entry in entries], default=default)

    @classmethod
    def from_yaml(cls, path: str | Path) -> RuleTable:
        path = Path(path)
        try:
            data = yaml.safe_load(path.read_text()) or {}
        except (yaml.YAMLError, OSError) as e:
            raise RuleTableError(f"Cannot read rule table {path}: {e}") from e
        return cls.from_dict(data)

    @classmethod
    def default(cls) -> RuleTable:
        """The packaged Salesforce metadata rule table."""
        text = resources.files("metadelta.rules").joinpath("default_rules.yaml").read_text()
        return cls.from_dict(yaml.safe_load(text))
