"""Sorting with frontmatter keys, mtime fallback, and pinned notes first.

Sort values come from a frontmatter field or the file modification time.
A note without the requested field sorts by its modification time as if
that were the field's value.  Date-like strings are compared as dates, other
strings case-insensitively.

All sorts are stable: notes with equal sort values keep their input order in
both directions.
"""

from __future__ import annotations

from collections.abc import Callable, Iterable, Set
from dataclasses import dataclass
from datetime import date
from typing import Any

from cardview.constants import DEFAULT_SORT_KEY, DEFAULT_SORT_ORDER, MTIME_SORT_KEY
from cardview.dates import parse_date_safely, to_millis
from cardview.note import NoteRecord

SORT_ORDERS = ("asc", "desc")


@dataclass(frozen=True)
class SortConfig:
    """Frontmatter key (or ``"mtime"``) and direction."""

    key: str = DEFAULT_SORT_KEY
    order: str = DEFAULT_SORT_ORDER

    @property
    def descending(self) -> bool:
        return self.order == "desc"

    def to_dict(self) -> dict[str, str]:
        return {"key": self.key, "order": self.order}

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "SortConfig":
        return cls(key=data.get("key", DEFAULT_SORT_KEY), order=data.get("order", DEFAULT_SORT_ORDER))


# ---------------------------------------------------------------------------
# Value extraction and comparison
# ---------------------------------------------------------------------------


def extract_sort_value(note: NoteRecord, sort_key: str) -> Any:
    """Return the raw value *note* is sorted by.

    ``"mtime"`` and missing/null frontmatter values give ``note.modified_at``.
    Strings that parse as plausible dates come back as ``datetime``; any
    other value is returned unchanged.
    """
    if sort_key == MTIME_SORT_KEY:
        return note.modified_at

    value = note.get(sort_key)
    if value is None:
        return note.modified_at
    if isinstance(value, str):
        parsed = parse_date_safely(value)
        return parsed if parsed is not None else value
    return value


def normalize_for_comparison(value: Any) -> Any:
    """Dates become epoch milliseconds and strings are lowercased."""
    if isinstance(value, date):
        return to_millis(value)
    if isinstance(value, str):
        return value.lower()
    return value


def _ordering_key(value: Any) -> tuple[int, Any]:
    # Mixed types never compare directly: numbers < strings < everything else
    if isinstance(value, (int, float)):
        return (0, value)
    if isinstance(value, str):
        return (1, value)
    return (2, str(value))


def compare_values(a: Any, b: Any) -> int:
    """Three-way comparison of two normalised values (-1, 0 or 1)."""
    key_a, key_b = _ordering_key(a), _ordering_key(b)
    if key_a < key_b:
        return -1
    if key_a > key_b:
        return 1
    return 0


def sort_key_for(note: NoteRecord, sort_key: str) -> tuple[int, Any]:
    return _ordering_key(normalize_for_comparison(extract_sort_value(note, sort_key)))


def create_sort_comparator(config: SortConfig) -> Callable[[NoteRecord, NoteRecord], int]:
    """Return a ``cmp(a, b)`` function for *config* (negated when descending)."""

    def comparator(a: NoteRecord, b: NoteRecord) -> int:
        result = compare_values(
            normalize_for_comparison(extract_sort_value(a, config.key)),
            normalize_for_comparison(extract_sort_value(b, config.key)),
        )
        return -result if config.descending else result

    return comparator


# ---------------------------------------------------------------------------
# Pins
# ---------------------------------------------------------------------------


def separate_notes_by_pin_status(
    notes: Iterable[NoteRecord], pinned: Set[str]
) -> tuple[list[NoteRecord], list[NoteRecord]]:
    """Split *notes* into ``(pinned, unpinned)`` in one pass, keeping order."""
    pinned_notes: list[NoteRecord] = []
    unpinned_notes: list[NoteRecord] = []
    for note in notes:
        (pinned_notes if note.path in pinned else unpinned_notes).append(note)
    return pinned_notes, unpinned_notes


def sort_notes(
    notes: Iterable[NoteRecord],
    config: SortConfig,
    pinned: Set[str] = frozenset(),
) -> list[NoteRecord]:
    """Sort *notes* by *config* and move pinned notes to the front.

    Both groups keep their sorted order.  Returns a new list.
    """
    # reverse=True keeps ties in input order
    ordered = sorted(notes, key=lambda n: sort_key_for(n, config.key), reverse=config.descending)
    pinned_notes, unpinned_notes = separate_notes_by_pin_status(ordered, pinned)
    return pinned_notes + unpinned_notes


def toggle_pin(pinned: Set[str], path: str) -> frozenset[str]:
    """Return a new pin set with *path* added if absent or removed if present."""
    if path in pinned:
        return frozenset(p for p in pinned if p != path)
    return frozenset(pinned) | {path}
