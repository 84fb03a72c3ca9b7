"""Pytest configuration and fixtures."""

from __future__ import annotations

import os
import shutil
import subprocess
from collections.abc import Callable
from datetime import UTC, datetime, timedelta
from pathlib import Path

import pytest

from changebump.core.fragments import Change, Kind

BASE_TIME = datetime(2024, 3, 1, 12, 0, 0, tzinfo=UTC)

MakeChange = Callable[..., Change]
WriteFragment = Callable[..., Path]


@pytest.fixture
def make_change() -> MakeChange:
    """Factory for Change objects with sensible defaults."""

    def _make(
        kind: Kind = Kind.ADDED,
        breaking: bool | None = None,
        priority: int | None = None,
        age: int = 0,
        content: str = "",
    ) -> Change:
        # age is in seconds before BASE_TIME; larger means older
        return Change(
            kind=kind,
            breaking=breaking,
            priority=priority,
            created=BASE_TIME - timedelta(seconds=age),
            content=content,
        )

    return _make


@pytest.fixture
def project(tmp_path: Path) -> Path:
    """A project directory with an empty .changes directory."""
    (tmp_path / ".changes").mkdir()
    return tmp_path


@pytest.fixture
def write_fragment(project: Path) -> WriteFragment:
    """Write a change fragment into the project's .changes directory."""

    def _write(
        name: str,
        kind: str,
        body: str,
        breaking: bool | None = None,
        priority: int | None = None,
    ) -> Path:
        lines = ["---", f"kind: {kind}"]
        if breaking is not None:
            lines.append(f"breaking: {str(breaking).lower()}")
        if priority is not None:
            lines.append(f"priority: {priority}")
        lines.extend(["---", body, ""])

        path = project / ".changes" / name
        path.write_text("\n".join(lines))
        return path

    return _write


def _git(repo: Path, *args: str) -> None:
    subprocess.run(["git", *args], cwd=repo, check=True, capture_output=True)


@pytest.fixture
def git_project(project: Path) -> Path:
    """A project directory that is also an initialized git repository."""
    if shutil.which("git") is None:
        pytest.skip("git is not installed")

    _git(project, "init", "-q")
    _git(project, "config", "user.name", "Test")
    _git(project, "config", "user.email", "test@test.com")
    _git(project, "config", "commit.gpgsign", "false")
    return project


@pytest.fixture
def commit_all() -> Callable[[Path, str, datetime], None]:
    """Commit every file in a repository with a fixed commit time."""

    def _commit(repo: Path, message: str, when: datetime) -> None:
        timestamp = f"{int(when.timestamp())} +0000"
        subprocess.run(
            ["git", "add", "-A"],
            cwd=repo,
            check=True,
            capture_output=True,
        )
        subprocess.run(
            ["git", "commit", "-q", "-m", message],
            cwd=repo,
            check=True,
            capture_output=True,
            env={
                **os.environ,
                "GIT_AUTHOR_DATE": timestamp,
                "GIT_COMMITTER_DATE": timestamp,
            },
        )

    return _commit

