"""Filter-option vocabularies derived from the full (unfiltered) note set."""

from __future__ import annotations

from collections.abc import Iterable, Sized

from cardview.note import NoteRecord
from cardview.paths import ancestor_paths, normalize_path
from cardview.tags import expand_tag_paths

# Raw root spellings kept as opaque leaves when not normalising
_ROOT_PATHS = frozenset({"/", "\\"})


def available_folders(notes: Iterable[NoteRecord], *, normalize: bool = False) -> list[str]:
    """Return every folder in use plus all of its parent folders, sorted.

    Selecting ``projects`` in the folder filter then also covers
    ``projects/web``.  With ``normalize=True`` folder paths are canonicalised
    first and folders that normalise to the root are dropped.
    """
    folders: set[str] = set()
    for note in notes:
        folder = note.folder or ""
        if normalize:
            folder = normalize_path(folder)
        if not folder:
            continue
        folders.add(folder)
        if folder not in _ROOT_PATHS:
            folders.update(ancestor_paths(folder))
    return sorted(folders)


def available_tags(notes: Iterable[NoteRecord]) -> list[str]:
    """Return every tag in use plus all of its parent tags, sorted."""
    all_tags: list[str] = []
    for note in notes:
        all_tags.extend(note.tags or ())
    return sorted(expand_tag_paths(all_tags))


def filtered_count(notes: Sized) -> int:
    return len(notes)
