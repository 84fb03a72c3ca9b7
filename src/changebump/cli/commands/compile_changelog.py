"""Implementation of the 'compile-changelog' command.

Prints a markdown changelog section for the pending change fragments.
Nothing is written to disk; redirect the output where it belongs.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from changebump.cli.commands import emit, fail, load_command_config
from changebump.core.changelog import compile_changelog, render_changelog, utc_today
from changebump.core.version import Version
from changebump.exceptions import ChangebumpError
from changebump.store import load_project_changes

if TYPE_CHECKING:
    from pathlib import Path

    from rich.console import Console

    from changebump.config.models import ProvenanceKind
    from changebump.core.changelog import Clock


def run_compile_changelog(
    project_path: Path,
    new_version: str,
    changes_dir: Path | None,
    provenance: ProvenanceKind | None,
    console: Console,
    err_console: Console,
    clock: Clock = utc_today,
) -> None:
    """Run the compile-changelog command.

    Args:
        project_path: Project directory
        new_version: Version being released
        changes_dir: Fragment directory override
        provenance: Provenance source override
        console: Console for standard output
        err_console: Console for error output
        clock: Source of the release date
    """
    try:
        version = Version.parse(new_version)
    except ChangebumpError as e:
        fail(err_console, e)

    config = load_command_config(project_path, changes_dir, provenance, err_console)

    try:
        changes = load_project_changes(project_path, config)
        section = compile_changelog(
            changes,
            version,
            clock=clock,
            allow_empty=config.changelog.allow_empty,
        )
    except ChangebumpError as e:
        fail(err_console, e)

    emit(console, render_changelog(section))
