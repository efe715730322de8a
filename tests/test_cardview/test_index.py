"""Unit tests for cardview.index.VaultIndex."""

import textwrap
from pathlib import Path

import pytest

from cardview.errors import VaultNotFoundError
from cardview.index import VaultIndex


def _write_note(directory: Path, relpath: str, content: str) -> Path:
    path = directory / relpath
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(textwrap.dedent(content), encoding="utf-8")
    return path


@pytest.fixture()
def vault(tmp_path: Path) -> VaultIndex:
    """Small vault with a root note and two nested folders."""
    _write_note(tmp_path, "inbox.md", """\
        Quick capture. #todo
    """)
    _write_note(tmp_path, "projects/plan.md", """\
        ---
        tags: [project]
        priority: 1
        ---
        Ship the card view.
    """)
    _write_note(tmp_path, "projects/web/frontend.md", """\
        ---
        tags: [project/web]
        updated: 2024-05-01
        ---
        Layout work.
    """)
    (tmp_path / "projects" / "notes.txt").write_text("not markdown", encoding="utf-8")
    idx = VaultIndex(tmp_path)
    idx.build()
    return idx


# ---------------------------------------------------------------------------
# Notes
# ---------------------------------------------------------------------------


class TestVaultIndexNotes:
    def test_all_notes_loaded(self, vault: VaultIndex):
        assert set(vault.notes) == {"inbox.md", "projects/plan.md", "projects/web/frontend.md"}

    def test_non_markdown_ignored(self, vault: VaultIndex):
        assert not any(p.endswith(".txt") for p in vault.notes)

    def test_records_sorted_by_path(self, vault: VaultIndex):
        assert [n.path for n in vault.records()] == [
            "inbox.md",
            "projects/plan.md",
            "projects/web/frontend.md",
        ]

    def test_folders(self, vault: VaultIndex):
        assert vault.get("inbox.md").folder == ""
        assert vault.get("projects/web/frontend.md").folder == "projects/web"

    def test_tags_and_frontmatter(self, vault: VaultIndex):
        plan = vault.get("projects/plan.md")
        assert plan.tags == ("project",)
        assert plan.get("priority") == 1
        assert vault.get("inbox.md").tags == ("todo",)

    def test_get_unknown(self, vault: VaultIndex):
        assert vault.get("missing.md") is None


# ---------------------------------------------------------------------------
# Build / refresh
# ---------------------------------------------------------------------------


class TestVaultIndexBuild:
    def test_missing_vault_raises(self, tmp_path: Path):
        with pytest.raises(VaultNotFoundError):
            VaultIndex(tmp_path / "nope").build()

    def test_rebuild_picks_up_new_note(self, vault: VaultIndex):
        _write_note(vault.vault_dir, "later.md", "Added after the first scan.\n")
        vault.build()
        assert "later.md" in vault.notes

    def test_rebuild_drops_deleted_note(self, vault: VaultIndex):
        (vault.vault_dir / "inbox.md").unlink()
        vault.build()
        assert "inbox.md" not in vault.notes

    def test_unreadable_note_skipped(self, tmp_path: Path):
        _write_note(tmp_path, "good.md", "Fine.\n")
        bad = tmp_path / "bad.md"
        bad.write_bytes(b"\xff\xfe\xfa not utf-8")
        idx = VaultIndex(tmp_path)
        idx.build()
        assert list(idx.notes) == ["good.md"]
        assert idx.failed == [bad]

    def test_empty_vault(self, tmp_path: Path):
        idx = VaultIndex(tmp_path)
        idx.build()
        assert idx.records() == []
