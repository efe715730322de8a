"""User settings for the card view, read from a TOML file.

Example ``cardview.toml``::

    [cardview]
    sort_key        = "updated"   # frontmatter key, or "mtime"
    auto_start      = false
    show_in_sidebar = false
"""

from __future__ import annotations

import logging
import tomllib
from dataclasses import dataclass, fields
from pathlib import Path
from typing import Any

from cardview.constants import DEFAULT_SORT_KEY, DEFAULT_SORT_ORDER
from cardview.sorting import SortConfig

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Settings:
    sort_key: str = DEFAULT_SORT_KEY
    auto_start: bool = False
    show_in_sidebar: bool = False

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Settings":
        """Build settings from a mapping; mistyped values fall back to defaults."""
        section = data.get("cardview", data)
        values: dict[str, Any] = {}
        if not isinstance(section, dict):
            logger.warning("Ignoring settings cardview=%r: expected a table", section)
            return cls()
        for f in fields(cls):
            if f.name not in section:
                continue
            value = section[f.name]
            if not isinstance(value, type(f.default)):
                logger.warning(
                    "Ignoring setting %s=%r: expected %s", f.name, value, type(f.default).__name__
                )
                continue
            values[f.name] = value
        return cls(**values)

    def default_sort_config(self) -> SortConfig:
        return SortConfig(key=self.sort_key or DEFAULT_SORT_KEY, order=DEFAULT_SORT_ORDER)


def load_settings(path: Path) -> Settings:
    """Load settings from *path*; a missing file gives the defaults."""
    path = Path(path)
    if not path.exists():
        return Settings()
    with open(path, "rb") as fh:
        data = tomllib.load(fh)
    return Settings.from_dict(data)
