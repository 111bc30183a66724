"""Tests for snapshot reconciliation."""

from __future__ import annotations

import random

import pytest

from metadelta import Artifact, Classification, DuplicateKeyError, reconcile
from metadelta.compare.reconcile import content_equal, index_by_key, side_content


def _keys(items):
    return [a.key for a in items]


class TestScenarios:
    def test_only_left_is_added(self):
        result = reconcile([Artifact("ApexClass", "Foo", left_content="X")], [])
        assert _keys(result.added) == ["ApexClass/Foo"]
        assert result.removed == []
        assert result.changed == []
        assert result.unchanged == []

    def test_different_content_is_changed(self):
        result = reconcile(
            [Artifact("ApexClass", "Foo", left_content="X")],
            [Artifact("ApexClass", "Foo", right_content="Y")],
        )
        assert _keys(result.changed) == ["ApexClass/Foo"]
        assert result.changed[0].left_content == "X"
        assert result.changed[0].right_content == "Y"

    def test_same_content_is_unchanged(self):
        result = reconcile(
            [Artifact("ApexClass", "Foo", left_content="X")],
            [Artifact("ApexClass", "Foo", right_content="X")],
        )
        assert _keys(result.unchanged) == ["ApexClass/Foo"]
        assert not result.has_changes

    def test_same_snapshot_on_both_sides_is_unchanged(self):
        snapshot = [Artifact("ApexClass", "Foo", left_content="X")]
        result = reconcile(snapshot, snapshot)
        assert _keys(result.unchanged) == ["ApexClass/Foo"]
        assert result.changed == []
        assert result.unchanged[0].left_content == "X"
        assert result.unchanged[0].right_content == "X"

    def test_content_in_either_field_is_compared(self):
        result = reconcile(
            [Artifact("ApexClass", "Foo", right_content="X")],
            [Artifact("ApexClass", "Foo", left_content="Y")],
        )
        assert _keys(result.changed) == ["ApexClass/Foo"]
        assert result.changed[0].left_content == "X"
        assert result.changed[0].right_content == "Y"

    def test_side_content_prefers_own_field(self):
        item = Artifact("ApexClass", "Foo", left_content="L", right_content="R")
        assert side_content(item, "left") == "L"
        assert side_content(item, "right") == "R"
        assert side_content(Artifact("ApexClass", "Foo", left_content="L"), "right") == "L"
        assert side_content(Artifact("ApexClass", "Foo"), "left") is None

    def test_only_right_is_removed(self):
        result = reconcile([], [Artifact("ApexClass", "Foo", right_content="X")])
        assert _keys(result.removed) == ["ApexClass/Foo"]
        assert result.removed[0].classification is Classification.REMOVED


class TestMissingContent:
    def test_missing_both_sides_is_unchanged(self):
        result = reconcile([Artifact("Profile", "Admin")], [Artifact("Profile", "Admin")])
        assert _keys(result.unchanged) == ["Profile/Admin"]

    def test_missing_one_side_is_changed(self):
        result = reconcile(
            [Artifact("Profile", "Admin", left_content="")],
            [Artifact("Profile", "Admin")],
        )
        assert _keys(result.changed) == ["Profile/Admin"]

    def test_content_equal(self):
        assert content_equal(None, None)
        assert content_equal("a", "a")
        assert not content_equal("", None)
        assert not content_equal("a", "b")


class TestDuplicateKeys:
    def test_duplicate_left_key_raises(self):
        left = [Artifact("ApexClass", "Foo"), Artifact("ApexClass", "Foo")]
        with pytest.raises(DuplicateKeyError) as exc:
            reconcile(left, [])
        assert exc.value.key == "ApexClass/Foo"
        assert exc.value.side == "left"

    def test_duplicate_right_key_raises(self):
        right = [Artifact("ApexClass", "Foo"), Artifact("ApexClass", "Bar", key="ApexClass/Foo")]
        with pytest.raises(DuplicateKeyError, match="right"):
            reconcile([], right)

    def test_same_name_different_type_is_not_duplicate(self):
        index = index_by_key([Artifact("ApexClass", "Foo"), Artifact("ApexTrigger", "Foo")], "left")
        assert list(index) == ["ApexClass/Foo", "ApexTrigger/Foo"]


class TestPartitionProperties:
    def test_partitions_are_exhaustive_and_disjoint(self, source_artifacts, target_artifacts):
        result = reconcile(source_artifacts, target_artifacts)
        all_keys = {a.key for a in source_artifacts} | {a.key for a in target_artifacts}

        seen = _keys(result.all_items())
        assert len(seen) == len(set(seen))
        assert set(seen) == all_keys
        assert result.total == len(all_keys)

    def test_expected_classification(self, source_artifacts, target_artifacts):
        result = reconcile(source_artifacts, target_artifacts)
        assert _keys(result.removed) == ["ApexClass/LegacyJob"]
        assert _keys(result.changed) == ["ApexClass/AccountService", "CustomField/Account.Phone"]
        assert _keys(result.unchanged) == [
            "ApexClass/AccountService-meta",
            "CustomObject/Account",
            "Profile/Admin",
        ]
        assert "ApexClass/NewHelper" in _keys(result.added)

    def test_removal_is_symmetric_with_addition(self, source_artifacts, target_artifacts):
        forward = reconcile(source_artifacts, target_artifacts)
        backward = reconcile(target_artifacts, source_artifacts)
        assert set(_keys(forward.removed)) == set(_keys(backward.added))
        assert set(_keys(forward.added)) == set(_keys(backward.removed))

    def test_ordering_follows_input(self):
        left = [Artifact("T", n, left_content=n) for n in ("c", "a", "b")]
        right = [Artifact("T", n, right_content=n) for n in ("z", "a", "y")]
        result = reconcile(left, right)
        assert [a.name for a in result.added] == ["c", "b"]
        assert [a.name for a in result.removed] == ["z", "y"]

    def test_random_snapshots_partition_cleanly(self):
        rng = random.Random(7)
        for _ in range(20):
            left = [Artifact("T", str(n), left_content=str(rng.randint(0, 2)))
                    for n in rng.sample(range(30), 12)]
            right = [Artifact("T", str(n), right_content=str(rng.randint(0, 2)))
                     for n in rng.sample(range(30), 12)]
            result = reconcile(left, right)
            union = {a.key for a in left} | {a.key for a in right}
            assert sorted(_keys(result.all_items())) == sorted(union)


class TestNoMutation:
    def test_inputs_are_not_classified(self, source_artifacts, target_artifacts):
        reconcile(source_artifacts, target_artifacts)
        assert all(a.classification is None for a in source_artifacts)
        assert all(a.classification is None for a in target_artifacts)

    def test_reconcile_twice_gives_same_result(self, source_artifacts, target_artifacts):
        first = reconcile(source_artifacts, target_artifacts)
        second = reconcile(source_artifacts, target_artifacts)
        assert first == second

    def test_selected_flag_is_carried_over(self):
        left = [Artifact("ApexClass", "Foo", left_content="X", selected=True)]
        result = reconcile(left, [])
        assert result.added[0].selected is True
        assert result.added[0] is not left[0]
