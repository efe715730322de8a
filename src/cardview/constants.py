"""Shared constants for the card view pipeline."""

from __future__ import annotations

#: Reserved sort key meaning "file modification time"
MTIME_SORT_KEY = "mtime"

DEFAULT_SORT_KEY = "updated"
DEFAULT_SORT_ORDER = "desc"

MILLISECONDS_PER_DAY = 1000 * 60 * 60 * 24

#: Number of body lines kept for a card preview
PREVIEW_MAX_LINES = 3

#: Version of the persisted plugin data schema
DATA_VERSION = 1

# Plausible year bounds for dates parsed out of frontmatter strings
MIN_PLAUSIBLE_YEAR = 1900
MAX_PLAUSIBLE_YEAR = 2100
