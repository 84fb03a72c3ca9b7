"""Implementation of the 'compute-bump-level' command.

Prints the bump level (major, minor or patch) needed to release every
pending change fragment.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from changebump.cli.commands import emit, fail, load_command_config
from changebump.core.policy import compute_batch_bump_level
from changebump.core.version import Version
from changebump.exceptions import ChangebumpError
from changebump.store import load_project_changes

if TYPE_CHECKING:
    from pathlib import Path

    from rich.console import Console

    from changebump.config.models import ProvenanceKind


def run_compute_bump_level(
    project_path: Path,
    current_version: str,
    changes_dir: Path | None,
    provenance: ProvenanceKind | None,
    console: Console,
    err_console: Console,
) -> None:
    """Run the compute-bump-level command.

    Args:
        project_path: Project directory
        current_version: Version currently released (e.g., "1.4.2")
        changes_dir: Fragment directory override
        provenance: Provenance source override
        console: Console for standard output
        err_console: Console for error output
    """
    try:
        version = Version.parse(current_version)
    except ChangebumpError as e:
        fail(err_console, e)

    config = load_command_config(project_path, changes_dir, provenance, err_console)

    try:
        changes = load_project_changes(project_path, config)
        level = compute_batch_bump_level(changes, version)
    except ChangebumpError as e:
        fail(err_console, e)

    emit(console, f"{level}\n")
