"""VaultIndex: loads every markdown note in a vault as a NoteRecord."""

from __future__ import annotations

import logging
from pathlib import Path

from cardview.errors import VaultNotFoundError
from cardview.note import NoteRecord
from cardview.parser import parse_note

logger = logging.getLogger(__name__)


class VaultIndex:
    """Scans a vault directory and keeps its notes keyed by vault-relative path."""

    def __init__(self, vault_dir: Path) -> None:
        self.vault_dir = Path(vault_dir)
        self.notes: dict[str, NoteRecord] = {}
        self.failed: list[Path] = []

    # ------------------------------------------------------------------
    # Build / refresh
    # ------------------------------------------------------------------

    def build(self) -> None:
        """(Re-)scan the vault.

        A note that cannot be read is logged, remembered in :attr:`failed`
        and skipped, so one bad file never hides the rest of the vault.
        """
        if not self.vault_dir.is_dir():
            raise VaultNotFoundError(f"Vault directory not found: {self.vault_dir}")

        notes: dict[str, NoteRecord] = {}
        failed: list[Path] = []
        for path in sorted(self.vault_dir.glob("**/*.md")):
            try:
                note = parse_note(path, self.vault_dir)
            except (OSError, UnicodeDecodeError) as exc:
                logger.warning("Failed to process note %s: %s", path, exc)
                failed.append(path)
                continue
            notes[note.path] = note
        self.notes = notes
        self.failed = failed
        logger.debug("Indexed %d notes from %s", len(notes), self.vault_dir)

    # ------------------------------------------------------------------
    # Query helpers
    # ------------------------------------------------------------------

    def records(self) -> list[NoteRecord]:
        """Return all notes ordered by path."""
        return [self.notes[p] for p in sorted(self.notes)]

    def get(self, path: str) -> NoteRecord | None:
        return self.notes.get(path)
