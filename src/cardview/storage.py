"""Persisted plugin data: pinned notes plus the last filter and sort choice.

Stored as a small JSON document::

    {
      "version": 1,
      "pinned_notes": ["projects/plan.md"],
      "last_filters": {"folders": [], "tags": [], "filename": "", ...},
      "sort_config": {"key": "updated", "order": "desc"}
    }

Loading never fails: a missing, unreadable or malformed file yields the
defaults and logs a warning.
"""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

from cardview.constants import DATA_VERSION
from cardview.errors import PluginDataError
from cardview.filters import FilterState
from cardview.sorting import SORT_ORDERS, SortConfig

logger = logging.getLogger(__name__)

_FILTER_LIST_FIELDS = ("folders", "tags", "exclude_folders", "exclude_tags", "exclude_filenames")


@dataclass(frozen=True)
class PluginData:
    pinned_notes: frozenset[str] = frozenset()
    last_filters: FilterState = field(default_factory=FilterState)
    sort_config: SortConfig = field(default_factory=SortConfig)
    version: int = DATA_VERSION

    def to_dict(self) -> dict[str, Any]:
        return {
            "version": self.version,
            "pinned_notes": sorted(self.pinned_notes),
            "last_filters": self.last_filters.to_dict(),
            "sort_config": self.sort_config.to_dict(),
        }

    @classmethod
    def from_dict(cls, data: Any) -> "PluginData":
        """Build from a decoded JSON document, raising :class:`PluginDataError` on bad shape.

        A malformed date range only clears that filter; pins and sort survive.
        """
        data = _drop_bad_date_range(data)
        if not validate_plugin_data(data):
            raise PluginDataError("Plugin data does not have the expected shape")
        return cls(
            pinned_notes=frozenset(data["pinned_notes"]),
            last_filters=FilterState.from_dict(data["last_filters"]),
            sort_config=SortConfig.from_dict(data["sort_config"]),
            version=data.get("version", DATA_VERSION),
        )


# ---------------------------------------------------------------------------
# Validation
# ---------------------------------------------------------------------------


def _is_string_list(value: Any) -> bool:
    return isinstance(value, list) and all(isinstance(item, str) for item in value)


def _is_date_range_shape(value: Any) -> bool:
    # Unknown kinds and unparseable values are kept; filtering ignores them
    return isinstance(value, dict) and all(
        value.get(name) is None or isinstance(value.get(name), str) for name in ("kind", "value")
    )


def _drop_bad_date_range(data: Any) -> Any:
    """Return *data* with a malformed ``last_filters.date_range`` cleared."""
    if not isinstance(data, dict) or not isinstance(data.get("last_filters"), dict):
        return data
    filters = data["last_filters"]
    date_range = filters.get("date_range")
    if date_range is None or _is_date_range_shape(date_range):
        return data
    logger.warning("Dropping malformed date range from plugin data: %r", date_range)
    return {**data, "last_filters": {**filters, "date_range": None}}


def validate_filter_state(data: Any) -> bool:
    if not isinstance(data, dict):
        return False
    for name in _FILTER_LIST_FIELDS:
        # Exclusion lists are optional so older files still load
        if name not in data and name.startswith("exclude_"):
            continue
        if not _is_string_list(data.get(name)):
            return False
    if not isinstance(data.get("filename"), str):
        return False

    date_range = data.get("date_range")
    return date_range is None or _is_date_range_shape(date_range)


def validate_sort_config(data: Any) -> bool:
    return (
        isinstance(data, dict)
        and isinstance(data.get("key"), str)
        and data.get("order") in SORT_ORDERS
    )


def validate_plugin_data(data: Any) -> bool:
    """Return ``True`` when *data* has the persisted plugin-data shape."""
    if not isinstance(data, dict):
        return False
    if not _is_string_list(data.get("pinned_notes")):
        return False
    if not validate_filter_state(data.get("last_filters")):
        return False
    if not validate_sort_config(data.get("sort_config")):
        return False
    version = data.get("version")
    if version is not None and (not isinstance(version, int) or isinstance(version, bool)):
        return False
    return True


# ---------------------------------------------------------------------------
# Load / save
# ---------------------------------------------------------------------------


def load_plugin_data(path: Path) -> PluginData:
    """Read plugin data from *path*, falling back to defaults on any problem."""
    path = Path(path)
    if not path.exists():
        return PluginData()
    try:
        raw = json.loads(path.read_text(encoding="utf-8"))
        return PluginData.from_dict(raw)
    except (OSError, json.JSONDecodeError, PluginDataError) as exc:
        logger.warning("Using default plugin data; could not load %s: %s", path, exc)
        return PluginData()


def save_plugin_data(path: Path, data: PluginData) -> None:
    """Write *data* to *path* as indented JSON."""
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(json.dumps(data.to_dict(), indent=2) + "\n", encoding="utf-8")
