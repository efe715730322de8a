"""Nested tag utilities.

Tags can nest with ``/`` (``project/frontend/react`` is three levels deep).
Filtering by a parent tag selects every child tag, which is why the filter
vocabulary is expanded with :func:`expand_tag_paths`.
"""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass, field

from cardview.paths import SEPARATOR, path_matches


@dataclass
class HierarchicalTag:
    """One node of a tag hierarchy."""

    tag: str            # full path, e.g. "project/frontend/react"
    display_name: str   # last segment, e.g. "react"
    level: int          # 0 for top-level tags
    parent_tag: str | None = None
    children: list[str] = field(default_factory=list)


def tag_matches_filter(note_tag: str, filter_tag: str) -> bool:
    """Return ``True`` when *note_tag* is *filter_tag* or one of its children."""
    return path_matches(note_tag, filter_tag)


def expand_tag_paths(tags: Iterable[str]) -> set[str]:
    """Return every tag in *tags* together with all of its parent tags.

    ``["a/b/c"]`` expands to ``{"a", "a/b", "a/b/c"}``.  Empty joins are
    dropped.  Ordering is left to the caller.
    """
    paths: set[str] = set()
    for tag in tags:
        parts = tag.split(SEPARATOR)
        for depth in range(1, len(parts) + 1):
            prefix = SEPARATOR.join(parts[:depth])
            if prefix:
                paths.add(prefix)
    return paths


def parse_hierarchical_tag(tag: str) -> HierarchicalTag:
    parts = tag.split(SEPARATOR)
    level = len(parts) - 1
    return HierarchicalTag(
        tag=tag,
        display_name=parts[-1],
        level=level,
        parent_tag=SEPARATOR.join(parts[:-1]) if level > 0 else None,
    )


def build_tag_hierarchy(tags: Iterable[str]) -> dict[str, HierarchicalTag]:
    """Build a fresh tag → :class:`HierarchicalTag` map with children filled in.

    Only tags present in *tags* become nodes; a child whose parent is absent
    stays unattached.  Run :func:`expand_tag_paths` first for a complete tree.
    """
    hierarchy: dict[str, HierarchicalTag] = {}
    for tag in tags:
        if tag not in hierarchy:
            hierarchy[tag] = parse_hierarchical_tag(tag)

    for tag, node in hierarchy.items():
        parent = hierarchy.get(node.parent_tag) if node.parent_tag else None
        if parent is not None and tag not in parent.children:
            parent.children.append(tag)
    return hierarchy


def tag_descendants(tag: str, hierarchy: dict[str, HierarchicalTag]) -> list[str]:
    """Return *tag* followed by all of its descendants, depth first."""
    result = [tag]
    node = hierarchy.get(tag)
    if node is not None:
        for child in node.children:
            result.extend(tag_descendants(child, hierarchy))
    return result
