"""Bump level policy.

Decides how far a version must move to release a change. The decision is
an ordered table of rules; the first rule that matches wins, so earlier
rules take precedence over later, overlapping ones.

Unspecified breaking status is treated as breaking, except for an explicit
``breaking: false``, which lowers the level by one step. How much a change
costs depends on how much stability the current version has promised:

===============================  ============  ============
change                           x.y.z (x>=1)  0.y.z (y>=1)
===============================  ============  ============
fixed / security                 patch         patch
changed / removed, not breaking  minor         patch
changed / removed, otherwise     major         minor
added / deprecated, breaking     major         minor
added / deprecated, otherwise    minor         patch
===============================  ============  ============

Every change against a 0.0.z version is a patch.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterable
from dataclasses import dataclass

from changebump.core.fragments import Change, Kind
from changebump.core.version import BumpLevel, Version
from changebump.exceptions import EmptyBatchError

logger = logging.getLogger(__name__)

_PATCH_ONLY_KINDS = frozenset({Kind.SECURITY, Kind.FIXED})
_INTERFACE_KINDS = frozenset({Kind.CHANGED, Kind.REMOVED})


def _is_pre_stable(version: Version) -> bool:
    return version.major == 0 and version.minor >= 1


@dataclass(frozen=True)
class BumpRule:
    """One row of the policy table."""

    name: str
    matches: Callable[[Version, Kind, bool | None], bool]
    level: BumpLevel


BUMP_RULES: tuple[BumpRule, ...] = (
    # Possibly debatable: a fix that breaks the API still only bumps patch.
    BumpRule(
        "fix-or-security",
        lambda v, kind, breaking: kind in _PATCH_ONLY_KINDS,
        BumpLevel.PATCH,
    ),
    # 1.0.0 and later
    BumpRule(
        "stable-interface-not-breaking",
        lambda v, kind, breaking: (
            v.is_stable and kind in _INTERFACE_KINDS and breaking is False
        ),
        BumpLevel.MINOR,
    ),
    BumpRule(
        "stable-interface",
        lambda v, kind, breaking: v.is_stable and kind in _INTERFACE_KINDS,
        BumpLevel.MAJOR,
    ),
    BumpRule(
        "stable-breaking",
        lambda v, kind, breaking: v.is_stable and breaking is True,
        BumpLevel.MAJOR,
    ),
    BumpRule(
        "stable",
        lambda v, kind, breaking: v.is_stable,
        BumpLevel.MINOR,
    ),
    # 0.1.0 up to 1.0.0
    BumpRule(
        "pre-stable-interface-not-breaking",
        lambda v, kind, breaking: (
            _is_pre_stable(v) and kind in _INTERFACE_KINDS and breaking is False
        ),
        BumpLevel.PATCH,
    ),
    BumpRule(
        "pre-stable-interface",
        lambda v, kind, breaking: _is_pre_stable(v) and kind in _INTERFACE_KINDS,
        BumpLevel.MINOR,
    ),
    BumpRule(
        "pre-stable-breaking",
        lambda v, kind, breaking: _is_pre_stable(v) and breaking is True,
        BumpLevel.MINOR,
    ),
    BumpRule(
        "pre-stable",
        lambda v, kind, breaking: _is_pre_stable(v),
        BumpLevel.PATCH,
    ),
    # 0.0.x
    BumpRule(
        "initial-development",
        lambda v, kind, breaking: v.is_initial_development,
        BumpLevel.PATCH,
    ),
)


def compute_bump_level(version: Version, kind: Kind, breaking: bool | None) -> BumpLevel:
    """Compute the bump level required to release a single change.

    Args:
        version: Current version of the project
        kind: Kind of the change
        breaking: Author-declared breaking flag, or None if unspecified

    Returns:
        Required bump level
    """
    for rule in BUMP_RULES:
        if rule.matches(version, kind, breaking):
            return rule.level

    # Unreachable: the version shapes above cover every major/minor pair.
    raise AssertionError(f"No bump rule matched {version}, {kind.value}, {breaking}")


def compute_change_bump_level(change: Change, version: Version) -> BumpLevel:
    """Compute the bump level for a parsed change."""
    return compute_bump_level(version, change.kind, change.breaking)


def compute_batch_bump_level(changes: Iterable[Change], version: Version) -> BumpLevel:
    """Compute the bump level required to release all pending changes.

    The result is the highest level required by any single change.

    Args:
        changes: Pending changes
        version: Current version of the project

    Returns:
        Highest required bump level

    Raises:
        EmptyBatchError: If there are no changes
    """
    level: BumpLevel | None = None

    for change in changes:
        change_level = compute_change_bump_level(change, version)
        logger.debug(
            "%s (%s, breaking=%s) requires a %s bump",
            change.source or change.content,
            change.kind.value,
            change.breaking,
            change_level,
        )
        if level is None or change_level > level:
            level = change_level

    if level is None:
        raise EmptyBatchError("Expected at least one change fragment to compute a bump level")

    return level
