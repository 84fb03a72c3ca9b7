"""Core business logic for changebump.

This module contains the fundamental building blocks:
- Semantic version parsing and bump levels
- Change fragment parsing
- The bump level policy
- Changelog ordering, grouping and rendering
"""

from __future__ import annotations

from changebump.core.changelog import (
    CATEGORY_ORDER,
    ChangelogSection,
    compile_changelog,
    group_changes,
    render_changelog,
    sort_changes,
)
from changebump.core.fragments import Change, FrontMatter, Kind, parse_fragment
from changebump.core.policy import (
    BUMP_RULES,
    compute_batch_bump_level,
    compute_bump_level,
    compute_change_bump_level,
)
from changebump.core.version import BumpLevel, Version, parse_version

__all__ = [
    # Policy
    "BUMP_RULES",
    # Changelog
    "CATEGORY_ORDER",
    # Version
    "BumpLevel",
    # Fragments
    "Change",
    "ChangelogSection",
    "FrontMatter",
    "Kind",
    "Version",
    "compile_changelog",
    "compute_batch_bump_level",
    "compute_bump_level",
    "compute_change_bump_level",
    "group_changes",
    "parse_fragment",
    "parse_version",
    "render_changelog",
    "sort_changes",
]
