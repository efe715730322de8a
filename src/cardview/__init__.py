"""Card view note explorer: filter, sort, pin and classify vault notes."""

from cardview.explorer import CardExplorer
from cardview.filters import DateRange, FilterState, apply_filters, has_active_filter
from cardview.index import VaultIndex
from cardview.note import NoteRecord
from cardview.paths import path_matches
from cardview.selectors import available_folders, available_tags
from cardview.sorting import SortConfig, sort_notes, toggle_pin
from cardview.tags import expand_tag_paths, tag_matches_filter

__all__ = [
    "CardExplorer",
    "DateRange",
    "FilterState",
    "NoteRecord",
    "SortConfig",
    "VaultIndex",
    "apply_filters",
    "available_folders",
    "available_tags",
    "expand_tag_paths",
    "has_active_filter",
    "path_matches",
    "sort_notes",
    "tag_matches_filter",
    "toggle_pin",
]
