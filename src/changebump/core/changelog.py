"""Changelog compilation from change fragments.

Changes are sorted once over the whole batch (highest priority first,
then oldest first) and then grouped by kind. Groups are emitted in a fixed
category order; kinds with no changes produce no section.
"""

from __future__ import annotations

from collections.abc import Callable, Iterable, Sequence
from dataclasses import dataclass
from datetime import UTC, date, datetime
from typing import TYPE_CHECKING

from changebump.core.fragments import Change, Kind
from changebump.exceptions import EmptyBatchError

if TYPE_CHECKING:
    from changebump.core.version import Version

# Order of sections in the rendered changelog.
CATEGORY_ORDER: tuple[Kind, ...] = (
    Kind.ADDED,
    Kind.FIXED,
    Kind.CHANGED,
    Kind.REMOVED,
    Kind.DEPRECATED,
    Kind.SECURITY,
)

Clock = Callable[[], date]


def utc_today() -> date:
    """Current calendar date in UTC."""
    return datetime.now(UTC).date()


def change_sort_key(change: Change) -> tuple[bool, int, datetime]:
    """Sort key: explicit priorities first (highest first), then oldest first."""
    has_no_priority = change.priority is None
    return (has_no_priority, -(change.priority or 0), change.created)


def sort_changes(changes: Iterable[Change]) -> list[Change]:
    """Sort changes by priority (descending, unset last), then creation time.

    The sort is stable, so changes with equal keys keep their input order.
    """
    return sorted(changes, key=change_sort_key)


def group_changes(changes: Iterable[Change]) -> list[tuple[Kind, list[Change]]]:
    """Sort changes and group them by kind in changelog section order.

    Args:
        changes: Changes to group

    Returns:
        List of (kind, changes) pairs for every kind with at least one change
    """
    by_kind: dict[Kind, list[Change]] = {}
    for change in sort_changes(changes):
        by_kind.setdefault(change.kind, []).append(change)

    return [(kind, by_kind[kind]) for kind in CATEGORY_ORDER if kind in by_kind]


@dataclass(frozen=True)
class ChangelogSection:
    """A compiled changelog section for one release."""

    version: str
    date: date
    groups: Sequence[tuple[Kind, Sequence[Change]]]

    @property
    def heading(self) -> str:
        return f"## {self.version} - {self.date.year}-{self.date.month}-{self.date.day}"

    @property
    def change_count(self) -> int:
        """Number of changes across all groups."""
        return sum(len(changes) for _, changes in self.groups)


def compile_changelog(
    changes: Iterable[Change],
    version: Version | str,
    *,
    clock: Clock = utc_today,
    allow_empty: bool = False,
) -> ChangelogSection:
    """Compile pending changes into a changelog section.

    Args:
        changes: Pending changes
        version: Version being released, rendered with str()
        clock: Returns the release date
        allow_empty: Return a section without groups instead of failing
            when there are no changes

    Returns:
        Compiled changelog section

    Raises:
        EmptyBatchError: If there are no changes and allow_empty is False
    """
    groups = group_changes(changes)

    if not groups and not allow_empty:
        raise EmptyBatchError(
            "No change fragments found; nothing to put in the changelog. "
            "Set [tool.changebump.changelog] allow_empty = true to render an empty section."
        )

    return ChangelogSection(version=str(version), date=clock(), groups=groups)


def format_change(change: Change) -> str:
    """Format a change as a markdown bullet.

    Continuation lines of multi-line bodies are indented so they stay
    inside the list item.
    """
    first, *rest = change.content.splitlines()
    return "\n".join([f"- {first}", *(f"  {line}" if line else "" for line in rest)])


def render_changelog(section: ChangelogSection) -> str:
    """Render a changelog section as markdown."""
    lines = [section.heading, ""]

    for kind, changes in section.groups:
        lines.append(f"### {kind.header}")
        lines.append("")
        lines.extend(format_change(change) for change in changes)
        lines.append("")

    return "\n".join(lines).rstrip("\n") + "\n"
