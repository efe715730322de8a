"""Date coercion, safe parsing and display helpers.

Frontmatter dates arrive in many shapes: YAML already turns ``2024-01-15``
into a :class:`datetime.date`, while quoted values stay strings.  Every
helper here accepts ``datetime``, ``date`` and strings, and none of them
raises on malformed input.
"""

from __future__ import annotations

import math
import re
from datetime import date, datetime
from typing import TYPE_CHECKING, Any

from cardview.constants import MAX_PLAUSIBLE_YEAR, MILLISECONDS_PER_DAY, MIN_PLAUSIBLE_YEAR

if TYPE_CHECKING:
    from cardview.note import NoteRecord

_YEAR_RE = re.compile(r"\d{4}")

# Tried in order after ISO 8601
_FALLBACK_FORMATS = (
    "%Y",
    "%Y-%m",
    "%Y/%m/%d",
    "%Y/%m/%d %H:%M",
    "%Y/%m/%d %H:%M:%S",
    "%Y.%m.%d",
    "%B %d, %Y",
    "%b %d, %Y",
    "%d %B %Y",
    "%d %b %Y",
)

_MS_PER_HOUR = 1000 * 60 * 60


def to_millis(value: datetime | date) -> float:
    """Return epoch milliseconds for *value*.

    Naive datetimes (and plain dates, taken at midnight) are read as local
    time, matching :meth:`datetime.timestamp`.
    """
    if not isinstance(value, datetime):
        value = datetime(value.year, value.month, value.day)
    return value.timestamp() * 1000


def _parse_date_string(text: str) -> datetime | None:
    try:
        return datetime.fromisoformat(text)
    except ValueError:
        pass
    for fmt in _FALLBACK_FORMATS:
        try:
            return datetime.strptime(text, fmt)
        except ValueError:
            continue
    return None


def coerce_datetime(value: Any) -> datetime | None:
    """Turn *value* into a :class:`datetime`, or ``None`` if that is not possible."""
    if isinstance(value, datetime):
        return value
    if isinstance(value, date):
        return datetime(value.year, value.month, value.day)
    if isinstance(value, str) and value.strip():
        return _parse_date_string(value.strip())
    return None


def parse_date_safely(text: str) -> datetime | None:
    """Parse a frontmatter string as a date, rejecting implausible results.

    Strings shorter than four characters, strings without a four-digit year
    and dates outside ``[1900, 2100]`` are rejected, so values such as
    ``"3"`` or ``"high"`` keep sorting as text.
    """
    text = text.strip()
    if len(text) < 4 or not _YEAR_RE.search(text):
        return None
    parsed = _parse_date_string(text)
    if parsed is None or not MIN_PLAUSIBLE_YEAR <= parsed.year <= MAX_PLAUSIBLE_YEAR:
        return None
    return parsed


def days_between(later: datetime | date, earlier: datetime | date) -> int:
    """Whole days from *earlier* to *later* (floored, negative if reversed)."""
    return math.floor((to_millis(later) - to_millis(earlier)) / MILLISECONDS_PER_DAY)


def get_display_date(note: "NoteRecord") -> datetime:
    """Prefer the frontmatter ``updated`` field, else the modification time."""
    updated = coerce_datetime(note.get("updated"))
    return updated if updated is not None else note.modified_at


def format_relative_date(value: Any, reference: Any) -> str:
    """Format *value* for a card footer.

    Under 24 hours before *reference* the time is shown (``14:30``),
    otherwise the full date (``2024/1/15``).
    """
    if not isinstance(value, date) or not isinstance(reference, date):
        return "Invalid date"
    moment = value if isinstance(value, datetime) else datetime(value.year, value.month, value.day)
    hours = (to_millis(reference) - to_millis(moment)) / _MS_PER_HOUR
    if hours < 24:
        return moment.strftime("%H:%M")
    return f"{moment.year}/{moment.month}/{moment.day}"
