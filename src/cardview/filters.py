"""Filter predicates over :class:`~cardview.note.NoteRecord` collections.

Each criterion is a small pure function; :func:`note_passes_filters` ANDs
them together and :func:`apply_filters` runs the result over a collection.
An empty criterion never excludes anything.

Folder and tag criteria use hierarchical matching (see :mod:`cardview.paths`):
filtering by ``projects`` keeps notes in ``projects/web``, and excluding the
tag ``archive`` drops notes tagged ``archive/2023``.
"""

from __future__ import annotations

from collections.abc import Iterable, Sequence
from dataclasses import dataclass
from datetime import date, datetime, timezone
from typing import Any

from cardview.dates import coerce_datetime, days_between, to_millis
from cardview.note import NoteRecord
from cardview.paths import path_matches
from cardview.tags import tag_matches_filter

DATE_RANGE_WITHIN = "within"
DATE_RANGE_AFTER = "after"
DATE_RANGE_KINDS = (DATE_RANGE_WITHIN, DATE_RANGE_AFTER)


# ---------------------------------------------------------------------------
# Filter state
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class DateRange:
    """Date criterion.

    ``within``: keep notes modified at least as recently as *value*, counted
    in whole days before "now".  ``after``: keep notes modified at or after
    *value*.
    """

    kind: str
    value: datetime | date | str

    def to_dict(self) -> dict[str, str]:
        value = self.value.isoformat() if isinstance(self.value, date) else self.value
        return {"kind": self.kind, "value": value}

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "DateRange":
        raw = data.get("value", "")
        parsed = _parse_range_value(raw) if isinstance(raw, str) else raw
        return cls(kind=data.get("kind", ""), value=parsed if parsed is not None else raw)


def _parse_range_value(raw: str) -> datetime | date | None:
    # A bare calendar date was saved from a ``date`` and reloads as one
    try:
        return date.fromisoformat(raw)
    except ValueError:
        return coerce_datetime(raw)


@dataclass(frozen=True)
class FilterState:
    """Every user-selected filter criterion; empty fields are inactive."""

    folders: tuple[str, ...] = ()
    tags: tuple[str, ...] = ()
    exclude_folders: tuple[str, ...] = ()
    exclude_tags: tuple[str, ...] = ()
    filename: str = ""
    exclude_filenames: tuple[str, ...] = ()
    date_range: DateRange | None = None

    def __post_init__(self) -> None:
        for name in ("folders", "tags", "exclude_folders", "exclude_tags", "exclude_filenames"):
            value = getattr(self, name)
            if not isinstance(value, tuple):
                object.__setattr__(self, name, tuple(value or ()))

    def to_dict(self) -> dict[str, Any]:
        return {
            "folders": list(self.folders),
            "tags": list(self.tags),
            "exclude_folders": list(self.exclude_folders),
            "exclude_tags": list(self.exclude_tags),
            "filename": self.filename,
            "exclude_filenames": list(self.exclude_filenames),
            "date_range": self.date_range.to_dict() if self.date_range else None,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "FilterState":
        date_range = data.get("date_range")
        return cls(
            folders=tuple(data.get("folders") or ()),
            tags=tuple(data.get("tags") or ()),
            exclude_folders=tuple(data.get("exclude_folders") or ()),
            exclude_tags=tuple(data.get("exclude_tags") or ()),
            filename=data.get("filename") or "",
            exclude_filenames=tuple(data.get("exclude_filenames") or ()),
            date_range=DateRange.from_dict(date_range) if date_range else None,
        )


# ---------------------------------------------------------------------------
# Criteria
# ---------------------------------------------------------------------------


def matches_folder_criteria(note: NoteRecord, folders: Sequence[str]) -> bool:
    if not folders:
        return True
    note_folder = note.folder or ""
    return any(path_matches(note_folder, folder) for folder in folders)


def is_excluded_by_folder(note: NoteRecord, exclude_folders: Sequence[str]) -> bool:
    if not exclude_folders:
        return False
    note_folder = note.folder or ""
    return any(path_matches(note_folder, folder) for folder in exclude_folders)


def _has_tag(note: NoteRecord, filter_tags: Sequence[str], exact: bool) -> bool:
    note_tags = note.tags or ()
    if exact:
        return any(tag in note_tags for tag in filter_tags)
    return any(
        tag_matches_filter(note_tag, filter_tag)
        for filter_tag in filter_tags
        for note_tag in note_tags
    )


def matches_tag_criteria(note: NoteRecord, tags: Sequence[str], *, exact: bool = False) -> bool:
    """Note has at least one tag equal to, or nested under, a filter tag.

    ``exact=True`` is the degraded mode that only accepts identical tags.
    """
    if not tags:
        return True
    return _has_tag(note, tags, exact)


def is_excluded_by_tag(note: NoteRecord, exclude_tags: Sequence[str], *, exact: bool = False) -> bool:
    if not exclude_tags:
        return False
    return _has_tag(note, exclude_tags, exact)


def matches_filename_criteria(note: NoteRecord, filename: str) -> bool:
    """Case-insensitive substring search in the title; blank searches pass."""
    term = (filename or "").strip()
    if not term:
        return True
    return term.lower() in note.title.lower()


def is_excluded_by_filename(note: NoteRecord, exclude_filenames: Sequence[str]) -> bool:
    title = note.title.lower()
    return any(pattern and pattern.lower() in title for pattern in exclude_filenames)


def matches_date_range_criteria(
    note: NoteRecord,
    date_range: DateRange | None,
    now: datetime | None = None,
) -> bool:
    """Check the note's modification time against *date_range*.

    Unknown kinds and references that cannot be read as a date impose no
    constraint.
    """
    if date_range is None or date_range.kind not in DATE_RANGE_KINDS:
        return True

    reference = coerce_datetime(date_range.value)
    if reference is None:
        return True

    if date_range.kind == DATE_RANGE_WITHIN:
        now = now or datetime.now(timezone.utc)
        return days_between(now, note.modified_at) <= days_between(now, reference)

    return to_millis(note.modified_at) >= to_millis(reference)


# ---------------------------------------------------------------------------
# Composition
# ---------------------------------------------------------------------------


def note_passes_filters(
    note: NoteRecord,
    filters: FilterState,
    *,
    now: datetime | None = None,
    exact_tags: bool = False,
) -> bool:
    """Return ``True`` when *note* satisfies every active criterion."""
    return (
        matches_folder_criteria(note, filters.folders)
        and not is_excluded_by_folder(note, filters.exclude_folders)
        and matches_tag_criteria(note, filters.tags, exact=exact_tags)
        and not is_excluded_by_tag(note, filters.exclude_tags, exact=exact_tags)
        and matches_filename_criteria(note, filters.filename)
        and not is_excluded_by_filename(note, filters.exclude_filenames)
        and matches_date_range_criteria(note, filters.date_range, now)
    )


def apply_filters(
    notes: Iterable[NoteRecord],
    filters: FilterState,
    *,
    now: datetime | None = None,
    exact_tags: bool = False,
) -> list[NoteRecord]:
    """Return a new list of the notes that pass *filters*, in input order."""
    # One "now" for the whole pass so every note is measured against the same day
    now = now or datetime.now(timezone.utc)
    return [n for n in notes if note_passes_filters(n, filters, now=now, exact_tags=exact_tags)]


def has_active_filter(filters: FilterState) -> bool:
    """``True`` when any criterion is set (drives the "clear filters" control)."""
    return bool(
        filters.folders
        or filters.tags
        or filters.filename.strip()
        or filters.date_range is not None
        or filters.exclude_folders
        or filters.exclude_tags
        or filters.exclude_filenames
    )
