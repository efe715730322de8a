"""NoteDB: tabular queries over note metadata.

Uses DuckDB (in-memory) as a query engine over each note's folder, tags and
frontmatter, and returns :mod:`polars` DataFrames so the host can feed the
results straight into a table or card grid.

Usage::

    db = NoteDB(index.records())

    # Free-form SQL
    df = db.query("SELECT path FROM notes WHERE 'python' = ANY(tags)")

    # Sort-key options for the sort dropdown
    keys = db.frontmatter_keys()

    # Card rows for an already filtered and sorted view
    frame = card_frame(ordered_notes, pinned)
"""

from __future__ import annotations

import json
from collections.abc import Iterable, Set
from datetime import timezone

import duckdb
import polars as pl

from cardview.dates import get_display_date, to_millis
from cardview.note import NoteRecord


class NoteDB:
    """In-memory DuckDB database over note metadata and frontmatter."""

    def __init__(self, notes: Iterable[NoteRecord]) -> None:
        self.conn: duckdb.DuckDBPyConnection = duckdb.connect(":memory:")
        self.refresh(notes)

    # ------------------------------------------------------------------
    # Build / refresh
    # ------------------------------------------------------------------

    def refresh(self, notes: Iterable[NoteRecord]) -> None:
        """(Re-)populate the database from *notes*."""
        self._create_schema()
        self._load_notes(notes)

    def _create_schema(self) -> None:
        self.conn.execute("""
            CREATE OR REPLACE TABLE notes (
                path        VARCHAR PRIMARY KEY,
                title       VARCHAR,
                folder      VARCHAR,
                tags        VARCHAR[],
                modified_ms BIGINT,
                frontmatter JSON
            )
        """)

    def _load_notes(self, notes: Iterable[NoteRecord]) -> None:
        rows = [
            (
                note.path,
                note.title,
                note.folder,
                list(note.tags),
                int(to_millis(note.modified_at)),
                # YAML dates are not JSON-native
                json.dumps(dict(note.frontmatter or {}), default=str),
            )
            for note in notes
        ]
        if rows:
            self.conn.executemany("INSERT OR REPLACE INTO notes VALUES (?,?,?,?,?,?)", rows)

    # ------------------------------------------------------------------
    # Query
    # ------------------------------------------------------------------

    def query(self, sql: str) -> pl.DataFrame:
        """Run a raw SQL query and return a Polars DataFrame."""
        return self.conn.execute(sql).pl()

    def table_view(self, *, columns: list[str] | None = None, order_by: str = "path") -> pl.DataFrame:
        """Return the notes table, optionally restricted to *columns*."""
        cols = ", ".join(columns) if columns else "path, title, folder, tags"
        safe_order = order_by.replace(";", "").replace("'", "")
        return self.conn.execute(f"SELECT {cols} FROM notes ORDER BY {safe_order}").pl()

    # ------------------------------------------------------------------
    # Introspection
    # ------------------------------------------------------------------

    def frontmatter_keys(self) -> list[str]:
        """Return all frontmatter property names present across all notes."""
        rows = self.conn.execute(
            "SELECT DISTINCT unnest(json_keys(frontmatter)) AS k FROM notes ORDER BY k"
        ).fetchall()
        return [r[0] for r in rows]

    def tag_counts(self) -> pl.DataFrame:
        """Return a tag → count table sorted by frequency."""
        return self.conn.execute(
            """
            SELECT tag, COUNT(*) AS note_count
            FROM (SELECT unnest(tags) AS tag FROM notes)
            GROUP BY tag
            ORDER BY note_count DESC, tag
            """
        ).pl()

    def folder_counts(self) -> pl.DataFrame:
        """Return a folder → count table (``""`` is the vault root)."""
        return self.conn.execute(
            """
            SELECT folder, COUNT(*) AS note_count
            FROM notes
            GROUP BY folder
            ORDER BY note_count DESC, folder
            """
        ).pl()

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------

    def close(self) -> None:
        self.conn.close()

    def __enter__(self) -> "NoteDB":
        return self

    def __exit__(self, *_: object) -> None:
        self.close()


def card_frame(notes: Iterable[NoteRecord], pinned: Set[str] = frozenset()) -> pl.DataFrame:
    """Return one row per card in the order given (no re-sorting)."""
    schema = {
        "path": pl.Utf8,
        "title": pl.Utf8,
        "folder": pl.Utf8,
        "tags": pl.List(pl.Utf8),
        "preview": pl.Utf8,
        "display_date": pl.Datetime("ms", "UTC"),
        "pinned": pl.Boolean,
    }
    rows = [
        {
            "path": note.path,
            "title": note.title,
            "folder": note.folder,
            "tags": list(note.tags),
            "preview": note.preview,
            "display_date": get_display_date(note).astimezone(timezone.utc),
            "pinned": note.path in pinned,
        }
        for note in notes
    ]
    return pl.DataFrame(rows, schema=schema)
