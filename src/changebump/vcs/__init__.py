"""Provenance sources: where a fragment's creation time comes from."""

from __future__ import annotations

from datetime import UTC, datetime
from typing import TYPE_CHECKING, Protocol

from changebump.exceptions import GitError, ProvenanceError
from changebump.vcs.git import GitRepository

if TYPE_CHECKING:
    from pathlib import Path

    from changebump.config.models import ProvenanceKind


class ProvenanceSource(Protocol):
    """Returns the instant a fragment file was introduced."""

    def __call__(self, path: Path) -> datetime: ...


class GitBlameProvenance:
    """Creation time from the commit that last touched the fragment's final line."""

    def __init__(self, repo: GitRepository) -> None:
        self.repo = repo

    def __call__(self, path: Path) -> datetime:
        try:
            return self.repo.last_line_commit_time(path)
        except GitError as e:
            raise ProvenanceError(f"Failed to blame: {e}", path=path) from e


def file_mtime(path: Path) -> datetime:
    """Creation time from the file's modification time."""
    try:
        return datetime.fromtimestamp(path.stat().st_mtime, tz=UTC)
    except OSError as e:
        raise ProvenanceError(f"Failed to read modification time: {e}", path=path) from e


def get_provenance(kind: ProvenanceKind, project_path: Path) -> ProvenanceSource:
    """Build the provenance source named in configuration.

    Raises:
        ProvenanceError: If the git repository cannot be opened
    """
    if kind == "mtime":
        return file_mtime

    try:
        repo = GitRepository(project_path)
    except GitError as e:
        raise ProvenanceError(f"Failed to open git repository: {e}") from e
    return GitBlameProvenance(repo)


__all__ = [
    "GitBlameProvenance",
    "GitRepository",
    "ProvenanceSource",
    "file_mtime",
    "get_provenance",
]
