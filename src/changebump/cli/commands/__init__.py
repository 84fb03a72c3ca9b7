"""Command implementations and helpers shared between them."""

from __future__ import annotations

from typing import TYPE_CHECKING, NoReturn

from rich.markup import escape

from changebump.config import load_config
from changebump.exceptions import ChangebumpError

if TYPE_CHECKING:
    from pathlib import Path

    from rich.console import Console

    from changebump.config.models import ChangebumpConfig, ProvenanceKind


def emit(console: Console, text: str) -> None:
    """Write command output to the console's stream unchanged.

    ``Console.print`` expands tabs and rewrites control characters, so
    results bypass the renderer.
    """
    console.file.write(text)
    console.file.flush()


def fail(err_console: Console, error: Exception) -> NoReturn:
    """Report an error and exit with status 1."""
    err_console.print(f"[red]Error:[/] {escape(str(error))}", soft_wrap=True)
    raise SystemExit(1) from error


def load_command_config(
    project_path: Path,
    changes_dir: Path | None,
    provenance: ProvenanceKind | None,
    err_console: Console,
) -> ChangebumpConfig:
    """Load configuration and apply command-line overrides."""
    try:
        config = load_config(project_path)
    except ChangebumpError as e:
        err_console.print(f"[red]Error loading config:[/] {escape(str(e))}", soft_wrap=True)
        raise SystemExit(1) from e

    overrides: dict[str, object] = {}
    if changes_dir is not None:
        overrides["changes_dir"] = changes_dir
    if provenance is not None:
        overrides["provenance"] = provenance

    return config.model_copy(update=overrides)
