"""Error types shared by the store implementations.

Missing keys raise `KeyNotFound`, which subclasses `KeyError` so callers
that already catch `KeyError` for absent keys keep working. Failures
reported by a backing engine are never wrapped: they reach the caller
as whatever exception the engine raised.
"""
from __future__ import annotations


class KeyNotFound(KeyError):
    """Raised by `get` and `delete` when the key is not present."""

    def __init__(self, key: str) -> None:
        super().__init__(key)
        self.key = key

    def __str__(self) -> str:
        return f"key {self.key!r} not found"


class KeyExists(Exception):
    """Raised by `put` with `replace=False` when the key is already present."""

    def __init__(self, key: str) -> None:
        super().__init__(key)
        self.key = key

    def __str__(self) -> str:
        return f"key {self.key!r} already exists"


class StopListing(Exception):
    """Raised by a `list` visitor to end the enumeration early.

    `list` catches it and returns normally; it is not reported as a failure.
    """


class ConfigError(ValueError):
    """Malformed store address or option value."""
