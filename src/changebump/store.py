"""Fragment store: the directory of pending change fragments."""

from __future__ import annotations

import fnmatch
import logging
from collections.abc import Iterable
from typing import TYPE_CHECKING

from changebump.core.fragments import Change, parse_fragment
from changebump.exceptions import DiscoveryError, FragmentParseError
from changebump.vcs import get_provenance

if TYPE_CHECKING:
    from pathlib import Path

    from changebump.config.models import ChangebumpConfig
    from changebump.vcs import ProvenanceSource

logger = logging.getLogger(__name__)


def discover_fragments(directory: Path, exclude: Iterable[str] = (".*",)) -> list[Path]:
    """List fragment files in a directory, sorted by name.

    Subdirectories and files matching an exclude pattern are skipped.

    Raises:
        DiscoveryError: If the directory cannot be listed
    """
    patterns = list(exclude)

    try:
        entries = list(directory.iterdir())
    except OSError as e:
        raise DiscoveryError(f"Failed to open fragment directory {directory}: {e}") from e

    fragments = []
    for entry in sorted(entries):
        if not entry.is_file():
            continue
        if any(fnmatch.fnmatch(entry.name, pattern) for pattern in patterns):
            logger.debug("Skipping excluded file %s", entry)
            continue
        fragments.append(entry)

    return fragments


def load_change(path: Path, provenance: ProvenanceSource) -> Change:
    """Read, parse and timestamp a single fragment.

    Raises:
        FragmentParseError: If the fragment cannot be read or parsed
        ProvenanceError: If the creation time cannot be resolved
    """
    try:
        text = path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as e:
        raise FragmentParseError(f"Failed to read fragment: {e}", path=path) from e

    frontmatter, body = parse_fragment(text, path=path)
    created = provenance(path)
    change = Change(
        kind=frontmatter.kind,
        breaking=frontmatter.breaking,
        priority=frontmatter.priority,
        created=created,
        content=body,
        source=path,
    )
    logger.debug("Loaded %s fragment %s (created %s)", change.kind.value, path.name, created)
    return change


def load_changes(
    directory: Path,
    provenance: ProvenanceSource,
    exclude: Iterable[str] = (".*",),
) -> list[Change]:
    """Load every pending change in a fragment directory.

    Any unreadable or invalid fragment aborts the whole load.

    Args:
        directory: Fragment directory
        provenance: Resolves each fragment's creation time
        exclude: Glob patterns of file names to ignore

    Returns:
        Changes in file-name order
    """
    return [load_change(path, provenance) for path in discover_fragments(directory, exclude)]


def load_project_changes(project_path: Path, config: ChangebumpConfig) -> list[Change]:
    """Load pending changes for a project as configured."""
    directory = config.resolve_changes_dir(project_path)
    logger.debug("Reading fragments from %s (provenance: %s)", directory, config.provenance)

    paths = discover_fragments(directory, config.exclude)
    if not paths:
        return []

    provenance = get_provenance(config.provenance, project_path)
    return [load_change(path, provenance) for path in paths]
