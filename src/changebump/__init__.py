"""changebump - semantic version bumps and changelogs from change fragments."""

from __future__ import annotations

__version__ = "0.1.0"
