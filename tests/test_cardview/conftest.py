"""Shared fixtures for the cardview tests."""

from __future__ import annotations

from datetime import datetime, timedelta, timezone
from typing import Any

import pytest

from cardview.note import NoteRecord

NOW = datetime(2026, 10, 18, 12, 0, tzinfo=timezone.utc)


@pytest.fixture()
def now() -> datetime:
    return NOW


@pytest.fixture()
def make_note():
    """Factory for NoteRecords; ``days_ago`` sets the modification time."""

    def _make(
        path: str,
        *,
        folder: str = "",
        tags: tuple[str, ...] | list[str] = (),
        frontmatter: dict[str, Any] | None = None,
        days_ago: float = 0,
        title: str | None = None,
    ) -> NoteRecord:
        return NoteRecord(
            path=path,
            title=title if title is not None else path.rsplit("/", 1)[-1].removesuffix(".md"),
            folder=folder,
            tags=tuple(tags),
            frontmatter=frontmatter,
            modified_at=NOW - timedelta(days=days_ago),
        )

    return _make
