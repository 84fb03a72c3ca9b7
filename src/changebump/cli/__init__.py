"""Command-line interface for changebump."""

from __future__ import annotations

from changebump.cli.app import cli, main

__all__ = ["cli", "main"]
