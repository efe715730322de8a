"""Hierarchical matching over ``/``-delimited paths.

Folder paths (``projects/web``) and nested tags (``project/frontend``) share
the same hierarchy rules: a path matches a filter when it *is* the filter or
lives underneath it.  The match is asymmetric, so ``projects/web`` matches a
``projects`` filter but ``projects`` does not match a ``projects/web`` filter.
"""

from __future__ import annotations

import re

SEPARATOR = "/"

_SEPARATOR_RUN_RE = re.compile(r"[/\\]+")


def path_matches(candidate: str, filter_path: str) -> bool:
    """Return ``True`` when *candidate* equals *filter_path* or descends from it.

    The separator must follow the shared prefix, so ``"projectile"`` does not
    match ``"project"``.  An empty filter only matches an empty candidate.
    Inputs are compared verbatim; see :func:`normalize_path`.
    """
    if candidate == filter_path:
        return True
    if not filter_path:
        return False
    return candidate.startswith(filter_path + SEPARATOR)


def normalize_path(path: str) -> str:
    """Canonicalise *path*: ``\\`` becomes ``/``, repeats collapse, ends are stripped.

    ``"/"`` and ``"\\"`` normalise to ``""``.
    """
    return _SEPARATOR_RUN_RE.sub(SEPARATOR, path).strip(SEPARATOR)


def ancestor_paths(path: str) -> list[str]:
    """Return the proper ancestors of *path*, shallowest first.

    ``"a/b/c"`` gives ``["a", "a/b"]``; a single segment has no ancestors.
    Empty joins (from leading or doubled separators) are skipped.
    """
    parts = path.split(SEPARATOR)
    result: list[str] = []
    for depth in range(1, len(parts)):
        prefix = SEPARATOR.join(parts[:depth])
        if prefix:
            result.append(prefix)
    return result
