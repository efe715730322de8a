"""Core NoteRecord dataclass."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from datetime import date, datetime
from typing import Any, Union

#: Scalar values a frontmatter property may hold once YAML has been parsed
FrontmatterValue = Union[str, int, float, bool, datetime, date, None]


@dataclass(frozen=True)
class NoteRecord:
    """A single note as seen by the filter/sort pipeline.

    Records are immutable; every pipeline step returns new collections and
    leaves the records it was given untouched.
    """

    #: Vault-relative path; the stable identity and the pin key
    path: str
    title: str
    modified_at: datetime
    folder: str = ""
    tags: tuple[str, ...] = ()
    frontmatter: Mapping[str, Any] | None = None
    preview: str = ""

    def __post_init__(self) -> None:
        # Accept any iterable of tags but always store a tuple
        if not isinstance(self.tags, tuple):
            object.__setattr__(self, "tags", tuple(self.tags or ()))

    def get(self, key: str) -> FrontmatterValue:
        """Safe frontmatter lookup; ``None`` when absent or there is no frontmatter."""
        if not self.frontmatter:
            return None
        return self.frontmatter.get(key)

    def to_dict(self) -> dict[str, Any]:
        return {
            "path": self.path,
            "title": self.title,
            "folder": self.folder,
            "tags": list(self.tags),
            "frontmatter": dict(self.frontmatter) if self.frontmatter is not None else None,
            "modified_at": self.modified_at.isoformat(),
            "preview": self.preview,
        }
