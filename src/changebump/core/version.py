"""Semantic version parsing and bump levels.

Versions follow Semantic Versioning 2.0.0: ``MAJOR.MINOR.PATCH`` with an
optional ``-prerelease`` and ``+build`` suffix. A leading ``v`` is accepted
so tag names can be passed straight through.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from enum import IntEnum

from changebump.exceptions import VersionParseError

_SEMVER_RE = re.compile(
    r"""
    ^v?
    (?P<major>0|[1-9]\d*)
    \.(?P<minor>0|[1-9]\d*)
    \.(?P<patch>0|[1-9]\d*)
    (?:-(?P<prerelease>
        (?:0|[1-9]\d*|\d*[a-zA-Z-][0-9a-zA-Z-]*)
        (?:\.(?:0|[1-9]\d*|\d*[a-zA-Z-][0-9a-zA-Z-]*))*
    ))?
    (?:\+(?P<build>[0-9a-zA-Z-]+(?:\.[0-9a-zA-Z-]+)*))?
    $
    """,
    re.VERBOSE,
)


class BumpLevel(IntEnum):
    """Semantic version increment, ordered PATCH < MINOR < MAJOR."""

    PATCH = 0
    MINOR = 1
    MAJOR = 2

    def __str__(self) -> str:
        return self.name.lower()


@dataclass(frozen=True)
class Version:
    """A semantic version."""

    major: int
    minor: int
    patch: int
    prerelease: str | None = None
    build: str | None = None

    @classmethod
    def parse(cls, value: str) -> Version:
        """Parse a semantic version string.

        Args:
            value: Version string such as ``1.2.3`` or ``v0.4.0-rc.1``

        Returns:
            Parsed Version

        Raises:
            VersionParseError: If the string is not a valid semantic version
        """
        match = _SEMVER_RE.match(value.strip())
        if match is None:
            raise VersionParseError(
                f"Invalid semantic version: {value!r} (expected MAJOR.MINOR.PATCH)"
            )

        return cls(
            major=int(match.group("major")),
            minor=int(match.group("minor")),
            patch=int(match.group("patch")),
            prerelease=match.group("prerelease"),
            build=match.group("build"),
        )

    @property
    def is_stable(self) -> bool:
        """Whether the public API is declared stable (major >= 1)."""
        return self.major >= 1

    @property
    def is_initial_development(self) -> bool:
        """Whether this is a 0.0.x version."""
        return self.major == 0 and self.minor == 0

    def __str__(self) -> str:
        version = f"{self.major}.{self.minor}.{self.patch}"
        if self.prerelease:
            version += f"-{self.prerelease}"
        if self.build:
            version += f"+{self.build}"
        return version


def parse_version(value: str) -> Version:
    """Parse a semantic version string. Shorthand for Version.parse()."""
    return Version.parse(value)
