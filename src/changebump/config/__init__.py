"""Configuration management for changebump."""

from __future__ import annotations

from changebump.config.loader import load_config
from changebump.config.models import ChangebumpConfig, ChangelogConfig

__all__ = [
    "ChangebumpConfig",
    "ChangelogConfig",
    "load_config",
]
