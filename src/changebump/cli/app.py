"""CLI entrypoint for changebump."""

from __future__ import annotations

import logging
from pathlib import Path

import click
from rich.console import Console
from rich.logging import RichHandler

from changebump import __version__
from changebump.cli.commands.bump_level import run_compute_bump_level
from changebump.cli.commands.compile_changelog import run_compile_changelog

console = Console()
err_console = Console(stderr=True)


def _configure_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(console=err_console, show_path=False)],
        force=True,
    )


@click.group()
@click.version_option(__version__, prog_name="changebump")
@click.option(
    "--project",
    "-p",
    type=click.Path(exists=True, file_okay=False, dir_okay=True, path_type=Path),
    default=None,
    help="Project directory (defaults to the current directory)",
)
@click.option(
    "--changes-dir",
    type=click.Path(file_okay=False, dir_okay=True, path_type=Path),
    default=None,
    help="Directory holding change fragments (overrides [tool.changebump] changes_dir)",
)
@click.option(
    "--provenance",
    type=click.Choice(["git", "mtime"]),
    default=None,
    help="How fragment creation times are resolved (overrides configuration)",
)
@click.option("--verbose", "-v", is_flag=True, help="Enable debug logging")
@click.pass_context
def cli(
    ctx: click.Context,
    project: Path | None,
    changes_dir: Path | None,
    provenance: str | None,
    verbose: bool,
) -> None:
    """changebump - release bumps and changelogs from change fragments.

    Each pending change is a small file in the fragment directory with a
    YAML frontmatter block (kind, breaking, priority) and a one-line body.
    """
    _configure_logging(verbose)

    ctx.ensure_object(dict)
    ctx.obj["project"] = (project or Path.cwd()).resolve()
    ctx.obj["changes_dir"] = changes_dir.resolve() if changes_dir else None
    ctx.obj["provenance"] = provenance


@cli.command("compute-bump-level")
@click.argument("current_version")
@click.pass_context
def compute_bump_level_cmd(ctx: click.Context, current_version: str) -> None:
    """Print the bump level (major, minor or patch) the pending changes require."""
    run_compute_bump_level(
        ctx.obj["project"],
        current_version,
        ctx.obj["changes_dir"],
        ctx.obj["provenance"],
        console,
        err_console,
    )


@cli.command("compile-changelog")
@click.argument("new_version")
@click.pass_context
def compile_changelog_cmd(ctx: click.Context, new_version: str) -> None:
    """Print the changelog section for NEW_VERSION."""
    run_compile_changelog(
        ctx.obj["project"],
        new_version,
        ctx.obj["changes_dir"],
        ctx.obj["provenance"],
        console,
        err_console,
    )


def main() -> None:
    cli()
