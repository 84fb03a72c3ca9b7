"""Exception hierarchy for changebump.

Every error raised by the package derives from ChangebumpError so the
CLI can report it uniformly and exit with a non-zero status.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from pathlib import Path


class ChangebumpError(Exception):
    """Base class for all changebump errors."""


# Configuration


class ConfigError(ChangebumpError):
    """Configuration could not be loaded."""


class ConfigNotFoundError(ConfigError):
    """No pyproject.toml was found."""


class ConfigValidationError(ConfigError):
    """Configuration is malformed or has invalid values."""


# Versions


class VersionParseError(ChangebumpError):
    """A version string is not a valid semantic version."""


# Fragments


class DiscoveryError(ChangebumpError):
    """The fragment directory cannot be opened or listed."""


class FragmentError(ChangebumpError):
    """An error tied to a single fragment file."""

    def __init__(self, message: str, path: Path | None = None) -> None:
        self.path = path
        if path is not None:
            message = f"{path}: {message}"
        super().__init__(message)


class FragmentParseError(FragmentError):
    """A fragment's frontmatter or body is missing or invalid."""


class ProvenanceError(FragmentError):
    """The creation time of a fragment could not be determined."""


class EmptyBatchError(ChangebumpError):
    """No pending change fragments were found."""


# Git


class GitError(ChangebumpError):
    """A git command failed."""

    def __init__(self, message: str, stderr: str | None = None) -> None:
        self.stderr = stderr
        if stderr:
            message = f"{message}: {stderr.strip()}"
        super().__init__(message)
