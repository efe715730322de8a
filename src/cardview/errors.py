"""Exception types raised by the card view package."""

from __future__ import annotations


class CardViewError(Exception):
    """Base class for every error raised by :mod:`cardview`."""


class VaultNotFoundError(CardViewError):
    """The vault directory does not exist or is not a directory."""


class PluginDataError(CardViewError):
    """Persisted plugin data does not have the expected shape."""
