"""Change fragment parsing.

A fragment is a small document describing one pending change::

    ---
    kind: added
    breaking: false
    priority: 3
    ---
    Support reading fragments from a custom directory.

The metadata block is YAML and validated with pydantic. The body becomes
the changelog line.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from enum import Enum
from typing import TYPE_CHECKING

import yaml
from pydantic import BaseModel, Field, StrictBool, StrictInt, ValidationError

from changebump.exceptions import FragmentParseError

if TYPE_CHECKING:
    from datetime import datetime
    from pathlib import Path

FRONTMATTER_DELIMITER = "---\n"


class _FrontMatterLoader(yaml.SafeLoader):
    """Safe loader that resolves only true/false spellings as booleans.

    YAML 1.1 also reads yes/no/on/off as booleans; here they stay strings
    so a flag such as ``breaking: no`` is rejected instead of guessed.
    """


_FrontMatterLoader.yaml_implicit_resolvers = {
    first: [(tag, regexp) for tag, regexp in resolvers if tag != "tag:yaml.org,2002:bool"]
    for first, resolvers in yaml.SafeLoader.yaml_implicit_resolvers.items()
}
_FrontMatterLoader.add_implicit_resolver(
    "tag:yaml.org,2002:bool",
    re.compile(r"^(?:true|True|TRUE|false|False|FALSE)$"),
    list("tTfF"),
)


class Kind(str, Enum):
    """Category of a change, as written in the fragment frontmatter."""

    ADDED = "added"
    FIXED = "fixed"
    CHANGED = "changed"
    DEPRECATED = "deprecated"
    REMOVED = "removed"
    SECURITY = "security"

    @property
    def header(self) -> str:
        """Section title used in the rendered changelog."""
        return self.value.capitalize()


class FrontMatter(BaseModel):
    """Metadata block of a change fragment."""

    kind: Kind
    # None means the author did not say; it is not the same as False.
    breaking: StrictBool | None = None
    priority: StrictInt | None = Field(default=None, ge=0, le=255)


@dataclass(frozen=True)
class Change:
    """A single pending change, ready for bump calculation and rendering."""

    kind: Kind
    breaking: bool | None
    priority: int | None
    created: datetime
    content: str
    source: Path | None = None


def parse_fragment(text: str, path: Path | None = None) -> tuple[FrontMatter, str]:
    """Split a fragment document into validated frontmatter and body.

    The document is split on the delimiter into at most three parts. The
    first part (anything before the opening delimiter) is discarded.

    Args:
        text: Raw fragment content
        path: Fragment file, used only in error messages

    Returns:
        Tuple of (frontmatter, trimmed body)

    Raises:
        FragmentParseError: If the frontmatter or body is missing or invalid
    """
    parts = text.split(FRONTMATTER_DELIMITER, 2)

    if len(parts) < 2:
        raise FragmentParseError("Missing frontmatter", path=path)

    try:
        data = yaml.load(parts[1], Loader=_FrontMatterLoader)
    except yaml.YAMLError as e:
        raise FragmentParseError(f"Failed to parse frontmatter: {e}", path=path) from e

    if not isinstance(data, dict):
        raise FragmentParseError("Failed to parse frontmatter: expected a mapping", path=path)

    try:
        frontmatter = FrontMatter.model_validate(data)
    except ValidationError as e:
        raise FragmentParseError(_format_validation_error(e), path=path) from e

    if len(parts) < 3:
        raise FragmentParseError("Missing body", path=path)

    body = parts[2].strip()
    if not body:
        raise FragmentParseError("Missing body", path=path)

    return frontmatter, body


def _format_validation_error(error: ValidationError) -> str:
    details = "; ".join(
        f"{'.'.join(str(loc) for loc in err['loc']) or 'frontmatter'}: {err['msg']}"
        for err in error.errors()
    )
    return f"Invalid frontmatter: {details}"

