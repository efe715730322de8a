"""Unit tests for cardview.explorer.CardExplorer."""

from datetime import timedelta
from pathlib import Path

import pytest

from cardview.explorer import CardExplorer
from cardview.filters import DateRange, FilterState
from cardview.index import VaultIndex
from cardview.sorting import SortConfig
from cardview.storage import PluginData


def _paths(notes):
    return [n.path for n in notes]


@pytest.fixture()
def explorer(make_note) -> CardExplorer:
    notes = [
        make_note("projects/a.md", folder="projects", tags=["work"], days_ago=3,
                  frontmatter={"priority": 2}),
        make_note("projects/web/b.md", folder="projects/web", tags=["work/web"], days_ago=1,
                  frontmatter={"priority": 1, "status": "draft"}),
        make_note("personal/c.md", folder="personal", tags=["home"], days_ago=10),
    ]
    return CardExplorer(notes, sort_config=SortConfig("mtime", "desc"))


# ---------------------------------------------------------------------------
# Derived state
# ---------------------------------------------------------------------------


class TestDerivedState:
    def test_initial_order(self, explorer: CardExplorer):
        assert _paths(explorer.filtered_notes) == [
            "projects/web/b.md",
            "projects/a.md",
            "personal/c.md",
        ]
        assert explorer.filtered_count == 3
        assert not explorer.has_active_filter

    def test_available_folders_and_tags(self, explorer: CardExplorer):
        assert explorer.available_folders() == ["personal", "projects", "projects/web"]
        assert explorer.available_tags() == ["home", "work", "work/web"]

    def test_sort_key_options(self, explorer: CardExplorer):
        assert explorer.sort_key_options() == ["mtime", "priority", "status"]

    def test_card_frame_follows_view(self, explorer: CardExplorer):
        explorer.toggle_pin("personal/c.md")
        frame = explorer.card_frame()
        assert frame["path"].to_list() == _paths(explorer.filtered_notes)
        assert frame["pinned"].to_list() == [True, False, False]


# ---------------------------------------------------------------------------
# Actions
# ---------------------------------------------------------------------------


class TestActions:
    def test_update_filters(self, explorer: CardExplorer):
        explorer.update_filters(folders=("projects",))
        assert _paths(explorer.filtered_notes) == ["projects/web/b.md", "projects/a.md"]
        assert explorer.has_active_filter

    def test_update_filters_merges(self, explorer: CardExplorer):
        explorer.update_filters(folders=("projects",))
        explorer.update_filters(exclude_tags=("work/web",))
        assert explorer.filters.folders == ("projects",)
        assert _paths(explorer.filtered_notes) == ["projects/a.md"]

    def test_update_filters_date_range(self, explorer: CardExplorer, now):
        explorer.update_filters(date_range=DateRange("within", now - timedelta(days=5)), now=now)
        assert _paths(explorer.filtered_notes) == ["projects/web/b.md", "projects/a.md"]

    def test_previous_filters_unchanged(self, explorer: CardExplorer):
        before = explorer.filters
        explorer.update_filters(tags=("home",))
        assert before == FilterState()
        assert explorer.filters is not before

    def test_clear_filters(self, explorer: CardExplorer):
        explorer.update_filters(tags=("home",))
        explorer.clear_filters()
        assert explorer.filtered_count == 3
        assert not explorer.has_active_filter

    def test_update_sort_config(self, explorer: CardExplorer):
        explorer.update_sort_config(SortConfig("priority", "asc"))
        assert _paths(explorer.filtered_notes)[:2] == ["projects/web/b.md", "projects/a.md"]

    def test_toggle_pin(self, explorer: CardExplorer):
        explorer.toggle_pin("personal/c.md")
        assert explorer.filtered_notes[0].path == "personal/c.md"
        explorer.toggle_pin("personal/c.md")
        assert explorer.filtered_notes[-1].path == "personal/c.md"
        assert explorer.pinned_notes == frozenset()

    def test_pinned_note_still_filtered(self, explorer: CardExplorer):
        explorer.toggle_pin("personal/c.md")
        explorer.update_filters(folders=("projects",))
        assert "personal/c.md" not in _paths(explorer.filtered_notes)

    def test_reset(self, explorer: CardExplorer):
        explorer.toggle_pin("projects/a.md")
        explorer.update_filters(tags=("work",))
        explorer.reset()
        assert explorer.notes == []
        assert explorer.filtered_notes == []
        assert explorer.pinned_notes == frozenset()
        assert explorer.filters == FilterState()
        assert explorer.sort_config == SortConfig()


# ---------------------------------------------------------------------------
# Loading
# ---------------------------------------------------------------------------


class TestRefreshNotes:
    def test_loads_vault(self, tmp_path: Path):
        (tmp_path / "notes").mkdir()
        (tmp_path / "notes" / "one.md").write_text("First. #idea\n", encoding="utf-8")
        (tmp_path / "two.md").write_text("Second.\n", encoding="utf-8")
        explorer = CardExplorer()
        explorer.refresh_notes(VaultIndex(tmp_path))
        assert explorer.error is None
        assert explorer.is_loading is False
        assert sorted(_paths(explorer.notes)) == ["notes/one.md", "two.md"]
        assert explorer.available_tags() == ["idea"]

    def test_missing_vault_sets_error(self, explorer: CardExplorer, tmp_path: Path):
        explorer.refresh_notes(VaultIndex(tmp_path / "gone"))
        assert explorer.error is not None
        assert "gone" in explorer.error
        assert explorer.is_loading is False
        assert explorer.filtered_count == 3

    def test_success_clears_previous_error(self, explorer: CardExplorer, tmp_path: Path):
        explorer.refresh_notes(VaultIndex(tmp_path / "gone"))
        explorer.refresh_notes(VaultIndex(tmp_path))
        assert explorer.error is None
        assert explorer.notes == []


# ---------------------------------------------------------------------------
# Persistence bridge
# ---------------------------------------------------------------------------


class TestPluginDataBridge:
    def test_round_trip(self, explorer: CardExplorer):
        explorer.toggle_pin("projects/a.md")
        explorer.update_filters(tags=("work",))
        data = explorer.to_plugin_data()
        restored = CardExplorer.from_plugin_data(data, explorer.notes)
        assert restored.filters == explorer.filters
        assert restored.sort_config == explorer.sort_config
        assert restored.pinned_notes == frozenset({"projects/a.md"})
        assert _paths(restored.filtered_notes) == _paths(explorer.filtered_notes)

    def test_from_default_data(self):
        explorer = CardExplorer.from_plugin_data(PluginData())
        assert explorer.sort_config == SortConfig()
        assert explorer.filtered_notes == []
