"""Dependency expansion — close a selection over the type auto-wire rules."""

from __future__ import annotations

import logging
from collections import deque

from metadelta.core.models import Artifact, ComparisonResult
from metadelta.rules.table import AutoWireKind, RuleTable, TypeRule

logger = logging.getLogger(__name__)


def _find(items: list[Artifact], types: tuple[str, ...], name: str) -> Artifact | None:
    return next((c for c in items if c.artifact_type in types and c.name == name), None)


def _candidates(item: Artifact, rule: TypeRule, universe: list[Artifact]) -> list[Artifact]:
    """Universe artifacts the rule says must travel with ``item``, in universe order."""
    kind = rule.auto_wire
    targets = rule.targets()

    if kind is AutoWireKind.SIBLING_BUNDLE:
        prefix = item.name + "/"
        return [c for c in universe if c.artifact_type in targets and c.name.startswith(prefix)]

    if kind is AutoWireKind.COMPANION_META:
        match = _find(universe, (item.artifact_type,), item.name + "-meta")
        return [match] if match else []

    if kind is AutoWireKind.CHILDREN_BY_PREFIX:
        prefix = item.name + "."
        return [c for c in universe if c.artifact_type in targets and c.name.startswith(prefix)]

    if kind is AutoWireKind.PARENT_BY_PREFIX:
        parent_name, sep, _ = item.name.partition(".")
        if not sep:
            return []
        match = _find(universe, targets, parent_name)
        return [match] if match else []

    return []


def expand(
    seed: list[Artifact],
    universe: ComparisonResult,
    rules: RuleTable,
) -> list[Artifact]:
    """Transitive closure of ``seed`` under the auto-wire rules.

    Membership is by artifact key. Sources are processed breadth-first in
    seed order, then in the order new artifacts are discovered; the result
    keeps that order and contains no duplicates. Types without a rule do not
    pull anything in.
    """
    items = universe.all_items()

    working: dict[str, Artifact] = {}
    queue: deque[Artifact] = deque()
    for item in seed:
        if item.key not in working:
            working[item.key] = item
            queue.append(item)
    seeded = len(working)

    while queue:
        item = queue.popleft()
        rule = rules.get(item.artifact_type)
        if rule is None:
            logger.debug("No type rule for %s; nothing auto-wired", item.artifact_type)
            continue
        if rule.auto_wire is AutoWireKind.NONE:
            continue

        for candidate in _candidates(item, rule, items):
            if candidate.key in working:
                continue
            working[candidate.key] = candidate
            queue.append(candidate)
            logger.debug("Auto-wired %s via %s (%s)", candidate.key, item.key, rule.auto_wire.value)

    if len(working) > seeded:
        logger.info("Expanded %d selected artifacts to %d", seeded, len(working))
    return list(working.values())


def expand_selection(universe: ComparisonResult, rules: RuleTable) -> list[Artifact]:
    """Expand whatever the selection workflow has flagged as selected."""
    return expand(universe.selected_items(), universe, rules)
