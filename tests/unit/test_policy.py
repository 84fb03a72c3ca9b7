"""Tests for the bump level policy."""

from __future__ import annotations

import itertools
from collections.abc import Callable

import pytest

from changebump.core.fragments import Change, Kind
from changebump.core.policy import (
    BUMP_RULES,
    compute_batch_bump_level,
    compute_bump_level,
    compute_change_bump_level,
)
from changebump.core.version import BumpLevel, Version
from changebump.exceptions import EmptyBatchError

MakeChange = Callable[..., Change]

STABLE = Version.parse("1.0.0")
PRE_STABLE = Version.parse("0.1.0")
INITIAL = Version.parse("0.0.5")

ALL_BREAKING = (None, False, True)


class TestComputeBumpLevel:
    """Tests for compute_bump_level()."""

    @pytest.mark.parametrize(
        ("version", "kind", "breaking", "expected"),
        [
            ("1.0.0", Kind.ADDED, None, BumpLevel.MINOR),
            ("1.0.0", Kind.CHANGED, False, BumpLevel.MINOR),
            ("1.0.0", Kind.REMOVED, None, BumpLevel.MAJOR),
            ("1.0.0", Kind.DEPRECATED, None, BumpLevel.MINOR),
            ("1.0.0", Kind.SECURITY, None, BumpLevel.PATCH),
            ("1.0.0", Kind.SECURITY, True, BumpLevel.PATCH),
            ("1.0.0", Kind.FIXED, None, BumpLevel.PATCH),
            ("0.1.0", Kind.CHANGED, None, BumpLevel.MINOR),
            ("0.1.0", Kind.ADDED, True, BumpLevel.MINOR),
            ("0.1.0", Kind.FIXED, None, BumpLevel.PATCH),
            ("0.0.5", Kind.REMOVED, True, BumpLevel.PATCH),
        ],
    )
    def test_scenarios(self, version: str, kind: Kind, breaking: bool | None, expected: BumpLevel):
        """Known version/kind/breaking combinations."""
        assert compute_bump_level(Version.parse(version), kind, breaking) == expected

    @pytest.mark.parametrize(
        ("version", "kind", "breaking"),
        list(
            itertools.product(
                [STABLE, PRE_STABLE, INITIAL], [Kind.FIXED, Kind.SECURITY], ALL_BREAKING
            )
        ),
    )
    def test_fixed_and_security_always_patch(
        self, version: Version, kind: Kind, breaking: bool | None
    ):
        """Fixes and security changes are patches regardless of version or flag."""
        assert compute_bump_level(version, kind, breaking) == BumpLevel.PATCH

    @pytest.mark.parametrize(("kind", "breaking"), list(itertools.product(Kind, ALL_BREAKING)))
    def test_initial_development_always_patch(self, kind: Kind, breaking: bool | None):
        """Anything against 0.0.x is a patch."""
        assert compute_bump_level(INITIAL, kind, breaking) == BumpLevel.PATCH

    @pytest.mark.parametrize("kind", [Kind.CHANGED, Kind.REMOVED])
    def test_stable_interface_changes(self, kind: Kind):
        """Changed/removed on a stable version: explicit non-breaking is minor, else major."""
        assert compute_bump_level(STABLE, kind, False) == BumpLevel.MINOR
        assert compute_bump_level(STABLE, kind, None) == BumpLevel.MAJOR
        assert compute_bump_level(STABLE, kind, True) == BumpLevel.MAJOR

    @pytest.mark.parametrize("kind", [Kind.ADDED, Kind.DEPRECATED])
    def test_stable_additions(self, kind: Kind):
        """Added/deprecated on a stable version are minor unless declared breaking."""
        assert compute_bump_level(STABLE, kind, False) == BumpLevel.MINOR
        assert compute_bump_level(STABLE, kind, None) == BumpLevel.MINOR
        assert compute_bump_level(STABLE, kind, True) == BumpLevel.MAJOR

    @pytest.mark.parametrize("kind", [Kind.CHANGED, Kind.REMOVED])
    def test_pre_stable_interface_changes(self, kind: Kind):
        """Changed/removed on 0.y.z shift everything down one level."""
        assert compute_bump_level(PRE_STABLE, kind, False) == BumpLevel.PATCH
        assert compute_bump_level(PRE_STABLE, kind, None) == BumpLevel.MINOR
        assert compute_bump_level(PRE_STABLE, kind, True) == BumpLevel.MINOR

    @pytest.mark.parametrize("kind", [Kind.ADDED, Kind.DEPRECATED])
    def test_pre_stable_additions(self, kind: Kind):
        """Added/deprecated on 0.y.z are patches unless declared breaking."""
        assert compute_bump_level(PRE_STABLE, kind, False) == BumpLevel.PATCH
        assert compute_bump_level(PRE_STABLE, kind, None) == BumpLevel.PATCH
        assert compute_bump_level(PRE_STABLE, kind, True) == BumpLevel.MINOR

    def test_unspecified_differs_from_false(self):
        """An absent breaking flag is not treated as False."""
        assert compute_bump_level(STABLE, Kind.REMOVED, None) != compute_bump_level(
            STABLE, Kind.REMOVED, False
        )

    def test_prerelease_suffix_uses_numeric_shape(self):
        """Pre-release tags do not change which rules apply."""
        version = Version.parse("2.0.0-rc.1")
        assert compute_bump_level(version, Kind.REMOVED, None) == BumpLevel.MAJOR

    def test_large_versions(self):
        """Shapes are decided by major and minor only."""
        assert compute_bump_level(Version(12, 0, 0), Kind.ADDED, None) == BumpLevel.MINOR
        assert compute_bump_level(Version(0, 42, 7), Kind.CHANGED, None) == BumpLevel.MINOR

    def test_rules_are_total(self):
        """Every combination matches some rule."""
        versions = [STABLE, PRE_STABLE, INITIAL, Version(0, 0, 0), Version(3, 7, 1)]
        for version, kind, breaking in itertools.product(versions, Kind, ALL_BREAKING):
            assert any(rule.matches(version, kind, breaking) for rule in BUMP_RULES)

    def test_rule_names_unique(self):
        """Each rule has a distinct name."""
        names = [rule.name for rule in BUMP_RULES]
        assert len(names) == len(set(names))


class TestComputeChangeBumpLevel:
    """Tests for compute_change_bump_level()."""

    def test_uses_change_fields(self, make_change: MakeChange):
        """Kind and breaking flag come from the change."""
        change = make_change(kind=Kind.CHANGED, breaking=False)
        assert compute_change_bump_level(change, STABLE) == BumpLevel.MINOR


class TestComputeBatchBumpLevel:
    """Tests for compute_batch_bump_level()."""

    def test_empty_batch_raises(self):
        """An empty batch is an error, not a default level."""
        with pytest.raises(EmptyBatchError, match="at least one change"):
            compute_batch_bump_level([], STABLE)

    def test_empty_generator_raises(self):
        """Empty iterables other than lists also raise."""
        with pytest.raises(EmptyBatchError):
            compute_batch_bump_level(iter(()), STABLE)

    def test_single_change(self, make_change: MakeChange):
        assert compute_batch_bump_level([make_change(Kind.ADDED)], STABLE) == BumpLevel.MINOR

    def test_max_across_changes(self, make_change: MakeChange):
        """The most severe change decides."""
        changes = [
            make_change(Kind.FIXED),
            make_change(Kind.ADDED),
            make_change(Kind.REMOVED),
            make_change(Kind.SECURITY),
        ]
        assert compute_batch_bump_level(changes, STABLE) == BumpLevel.MAJOR

    @pytest.mark.parametrize(
        "others",
        [
            [],
            [Kind.FIXED],
            [Kind.ADDED, Kind.DEPRECATED],
            [Kind.SECURITY, Kind.FIXED, Kind.ADDED],
        ],
    )
    def test_removed_unspecified_forces_major(self, make_change: MakeChange, others: list[Kind]):
        """A removal with no breaking flag on a stable version is always major."""
        changes = [make_change(kind) for kind in others]
        changes.insert(len(changes) // 2, make_change(Kind.REMOVED))
        assert compute_batch_bump_level(changes, STABLE) == BumpLevel.MAJOR

    def test_security_only_on_initial_version(self, make_change: MakeChange):
        """A lone security fix is a patch even against 0.0.x."""
        changes = [make_change(Kind.SECURITY)]
        assert compute_batch_bump_level(changes, Version(0, 0, 1)) == BumpLevel.PATCH

    def test_security_plus_major_change(self, make_change: MakeChange):
        """Adding a major-triggering change raises the whole batch to major."""
        changes = [make_change(Kind.SECURITY), make_change(Kind.REMOVED, breaking=True)]
        assert compute_batch_bump_level(changes, STABLE) == BumpLevel.MAJOR

    def test_order_independent(self, make_change: MakeChange):
        """The result does not depend on input order."""
        changes = [
            make_change(Kind.CHANGED, breaking=False),
            make_change(Kind.ADDED, breaking=True),
            make_change(Kind.FIXED),
        ]
        expected = compute_batch_bump_level(changes, PRE_STABLE)
        for permutation in itertools.permutations(changes):
            assert compute_batch_bump_level(permutation, PRE_STABLE) == expected
