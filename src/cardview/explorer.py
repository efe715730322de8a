"""CardExplorer: the state a card view binds to.

Holds the full note list, the active filters, sort configuration and pins,
and keeps :attr:`CardExplorer.filtered_notes` in sync::

    explorer = CardExplorer(sort_config=settings.default_sort_config())
    explorer.refresh_notes(VaultIndex(vault_dir))
    explorer.update_filters(tags=("project",))
    explorer.toggle_pin("projects/plan.md")
    frame = explorer.card_frame()

Every change replaces values instead of mutating them, so a caller holding
an earlier ``filters`` or ``pinned_notes`` never sees it change.
"""

from __future__ import annotations

import dataclasses
import logging
from collections.abc import Iterable
from datetime import datetime
from typing import TYPE_CHECKING, Any

import polars as pl

from cardview import selectors
from cardview.constants import MTIME_SORT_KEY
from cardview.db import NoteDB, card_frame
from cardview.errors import CardViewError
from cardview.filters import FilterState, apply_filters, has_active_filter
from cardview.note import NoteRecord
from cardview.sorting import SortConfig, sort_notes, toggle_pin
from cardview.storage import PluginData

if TYPE_CHECKING:
    from cardview.index import VaultIndex

logger = logging.getLogger(__name__)


class CardExplorer:
    """Notes, filter/sort/pin state and the derived ordered view."""

    def __init__(
        self,
        notes: Iterable[NoteRecord] = (),
        *,
        filters: FilterState | None = None,
        sort_config: SortConfig | None = None,
        pinned_notes: Iterable[str] = (),
    ) -> None:
        self.notes: list[NoteRecord] = list(notes)
        self.filters = filters or FilterState()
        self.sort_config = sort_config or SortConfig()
        self.pinned_notes: frozenset[str] = frozenset(pinned_notes)
        self.filtered_notes: list[NoteRecord] = []
        self.is_loading = False
        self.error: str | None = None
        self._recompute()

    # ------------------------------------------------------------------
    # Derived state
    # ------------------------------------------------------------------

    def _recompute(self, now: datetime | None = None) -> None:
        filtered = apply_filters(self.notes, self.filters, now=now)
        self.filtered_notes = sort_notes(filtered, self.sort_config, self.pinned_notes)

    @property
    def has_active_filter(self) -> bool:
        return has_active_filter(self.filters)

    @property
    def filtered_count(self) -> int:
        return selectors.filtered_count(self.filtered_notes)

    def available_folders(self) -> list[str]:
        return selectors.available_folders(self.notes)

    def available_tags(self) -> list[str]:
        return selectors.available_tags(self.notes)

    def sort_key_options(self) -> list[str]:
        """``"mtime"`` followed by every frontmatter key used in the vault."""
        with NoteDB(self.notes) as db:
            keys = db.frontmatter_keys()
        return [MTIME_SORT_KEY, *[k for k in keys if k != MTIME_SORT_KEY]]

    def card_frame(self) -> pl.DataFrame:
        return card_frame(self.filtered_notes, self.pinned_notes)

    # ------------------------------------------------------------------
    # Actions
    # ------------------------------------------------------------------

    def set_notes(self, notes: Iterable[NoteRecord]) -> None:
        self.notes = list(notes)
        self._recompute()

    def update_filters(self, *, now: datetime | None = None, **changes: Any) -> None:
        """Merge *changes* (``FilterState`` field names) into the active filters."""
        self.filters = dataclasses.replace(self.filters, **changes)
        self._recompute(now)

    def clear_filters(self) -> None:
        self.filters = FilterState()
        self._recompute()

    def update_sort_config(self, config: SortConfig) -> None:
        self.sort_config = config
        self._recompute()

    def toggle_pin(self, path: str) -> None:
        self.pinned_notes = toggle_pin(self.pinned_notes, path)
        self._recompute()

    def refresh_notes(self, index: "VaultIndex") -> None:
        """Rebuild *index* and load its notes.

        On failure the previous notes stay in place and :attr:`error` holds
        the message for the view to display.
        """
        self.is_loading = True
        self.error = None
        try:
            index.build()
        except (CardViewError, OSError) as exc:
            logger.error("Failed to load notes from %s: %s", index.vault_dir, exc)
            self.error = str(exc)
        else:
            self.set_notes(index.records())
        finally:
            self.is_loading = False

    def reset(self) -> None:
        self.notes = []
        self.filters = FilterState()
        self.sort_config = SortConfig()
        self.pinned_notes = frozenset()
        self.is_loading = False
        self.error = None
        self._recompute()

    # ------------------------------------------------------------------
    # Persistence bridge
    # ------------------------------------------------------------------

    def to_plugin_data(self) -> PluginData:
        return PluginData(
            pinned_notes=self.pinned_notes,
            last_filters=self.filters,
            sort_config=self.sort_config,
        )

    @classmethod
    def from_plugin_data(cls, data: PluginData, notes: Iterable[NoteRecord] = ()) -> "CardExplorer":
        return cls(
            notes,
            filters=data.last_filters,
            sort_config=data.sort_config,
            pinned_notes=data.pinned_notes,
        )
