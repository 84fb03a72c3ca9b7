"""Git repository access.

Git is driven as a subprocess; output is captured and parsed here so the
rest of the package never deals with git's text formats.
"""

from __future__ import annotations

import logging
import re
import subprocess
from datetime import UTC, datetime
from pathlib import Path

from changebump.exceptions import GitError

logger = logging.getLogger(__name__)

# "<sha> <original line> <final line> [<lines in group>]"; SHA-1 or SHA-256 object ids
_BLAME_HEADER_RE = re.compile(r"^([0-9a-f]{40,64}) \d+ \d+(?: \d+)?$")


class GitRepository:
    """A local git working tree."""

    def __init__(self, path: Path | str | None = None) -> None:
        """Open the repository containing path.

        Args:
            path: Any directory inside the working tree (defaults to cwd)

        Raises:
            GitError: If git is not installed or path is not in a repository
        """
        start = Path(path) if path else Path.cwd()
        toplevel = self._run("rev-parse", "--show-toplevel", cwd=start)
        self.path = Path(toplevel.strip())

    def _run(self, *args: str, cwd: Path | None = None) -> str:
        command = ["git", *args]
        logger.debug("Running %s", " ".join(command))

        try:
            result = subprocess.run(
                command,
                capture_output=True,
                text=True,
                check=True,
                cwd=cwd or self.path,
            )
        except FileNotFoundError as e:
            raise GitError("git not found. Is git installed and on PATH?") from e
        except subprocess.CalledProcessError as e:
            raise GitError(
                f"git {args[0]} failed with exit code {e.returncode}",
                stderr=e.stderr,
            ) from e

        return result.stdout

    def blame_porcelain(self, file_path: Path) -> str:
        """Return ``git blame --porcelain`` output for a file."""
        return self._run("blame", "--porcelain", "--", str(file_path.resolve()))

    def last_line_commit_time(self, file_path: Path) -> datetime:
        """Commit time of the commit that owns the last line of a file.

        Args:
            file_path: File inside the working tree

        Returns:
            Timezone-aware commit time in UTC

        Raises:
            GitError: If blame fails or reports no lines
        """
        return parse_blame_last_line_time(self.blame_porcelain(file_path), file_path)


def parse_blame_last_line_time(output: str, file_path: Path | None = None) -> datetime:
    """Extract the committer time of the last blamed line from porcelain output.

    Commit metadata is printed only the first time a commit appears, so
    times are collected per commit while walking the line headers.
    """
    committer_times: dict[str, int] = {}
    current_sha: str | None = None
    last_sha: str | None = None

    for line in output.splitlines():
        if line.startswith("\t"):
            last_sha = current_sha
            continue

        header = _BLAME_HEADER_RE.match(line)
        if header:
            current_sha = header.group(1)
        elif line.startswith("committer-time ") and current_sha is not None:
            committer_times[current_sha] = int(line.split(" ", 1)[1])

    if last_sha is None or last_sha not in committer_times:
        raise GitError(f"git blame reported no lines for {file_path or 'file'}")

    return datetime.fromtimestamp(committer_times[last_sha], tz=UTC)
