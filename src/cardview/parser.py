"""YAML-frontmatter, inline-tag and preview parser for vault notes."""

from __future__ import annotations

import logging
import re
from datetime import datetime, timezone
from pathlib import Path
from typing import Any

import yaml

from cardview.constants import PREVIEW_MAX_LINES
from cardview.note import NoteRecord

logger = logging.getLogger(__name__)

# Inline #tags (not inside code-spans or URLs)
_TAG_RE = re.compile(r"(?<![`\w/#])#([\w/-]+)")
# YAML front-matter block
_FRONTMATTER_RE = re.compile(r"^---[ \t]*\r?\n(?:(.*?)\r?\n)?---[ \t]*(?:\r?\n|$)", re.DOTALL)


def parse_frontmatter(content: str) -> tuple[dict[str, Any] | None, str]:
    """Split YAML front-matter from body text.

    Returns ``(metadata, body)``; ``metadata`` is ``None`` when there is no
    front-matter block or it does not hold a YAML mapping.
    """
    match = _FRONTMATTER_RE.match(content)
    if not match:
        return None, content
    try:
        meta = yaml.safe_load(match.group(1) or "")
    except yaml.YAMLError as exc:
        logger.warning("Ignoring malformed frontmatter: %s", exc)
        meta = None
    if not isinstance(meta, dict):
        meta = None
    return meta, content[match.end() :]


def parse_tags(text: str) -> list[str]:
    """Return all ``#tag`` values found in *text* (de-duped, ordered)."""
    seen: set[str] = set()
    result: list[str] = []
    for m in _TAG_RE.finditer(text):
        tag = m.group(1)
        if tag not in seen:
            seen.add(tag)
            result.append(tag)
    return result


def frontmatter_tags(frontmatter: dict[str, Any] | None) -> list[str]:
    """Read the ``tags`` property as a list of strings (``#`` prefixes dropped)."""
    raw = (frontmatter or {}).get("tags") or []
    if isinstance(raw, str):
        raw = [t.strip() for t in raw.split(",") if t.strip()]
    elif not isinstance(raw, list):
        raw = [raw]
    return [str(t).lstrip("#") for t in raw if t is not None]


def extract_preview(body: str, fallback: str) -> str:
    """First ``PREVIEW_MAX_LINES`` lines of *body*, trimmed; *fallback* when empty."""
    preview = "\n".join(body.splitlines()[:PREVIEW_MAX_LINES]).strip()
    return preview or fallback


def parse_note(path: Path, vault_dir: Path | None = None) -> NoteRecord:
    """Read a ``.md`` file and return a :class:`NoteRecord`.

    The note's identity is its POSIX path relative to *vault_dir* (or the
    path as given when *vault_dir* is ``None``); its folder is that path's
    parent, ``""`` at the vault root.
    """
    path = Path(path)
    relative = path.relative_to(vault_dir) if vault_dir is not None else path
    parent = relative.parent.as_posix()

    content = path.read_text(encoding="utf-8")
    frontmatter, body = parse_frontmatter(content)
    tags = list(dict.fromkeys(frontmatter_tags(frontmatter) + parse_tags(body)))

    return NoteRecord(
        path=relative.as_posix(),
        title=path.stem,
        folder="" if parent == "." else parent,
        tags=tuple(tags),
        frontmatter=frontmatter,
        modified_at=datetime.fromtimestamp(path.stat().st_mtime, tz=timezone.utc),
        preview=extract_preview(body, path.stem),
    )
