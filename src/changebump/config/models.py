"""Configuration models for changebump.

Configuration lives in the ``[tool.changebump]`` table of pyproject.toml.
Every field has a default, so a project without the table works as is.
"""

from __future__ import annotations

from pathlib import Path
from typing import Literal

from pydantic import BaseModel, ConfigDict, Field

ProvenanceKind = Literal["git", "mtime"]


class ChangelogConfig(BaseModel):
    """Changelog compilation settings."""

    model_config = ConfigDict(extra="forbid")

    allow_empty: bool = Field(
        default=False,
        description="Render a heading-only section when there are no fragments",
    )


class ChangebumpConfig(BaseModel):
    """Root configuration."""

    model_config = ConfigDict(extra="forbid")

    changes_dir: Path = Field(
        default=Path(".changes"),
        description="Directory holding change fragments, relative to the project",
    )
    provenance: ProvenanceKind = Field(
        default="git",
        description="How fragment creation times are resolved",
    )
    exclude: list[str] = Field(
        default_factory=lambda: [".*"],
        description="Glob patterns of file names in changes_dir to ignore",
    )
    changelog: ChangelogConfig = Field(default_factory=ChangelogConfig)

    def resolve_changes_dir(self, project_path: Path) -> Path:
        """Absolute fragment directory for a project."""
        if self.changes_dir.is_absolute():
            return self.changes_dir
        return project_path / self.changes_dir
