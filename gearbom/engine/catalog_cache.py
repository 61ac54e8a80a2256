"""Caller-owned cache for catalog reads.

A coverage run issues the same (vendor, component type) reads for every
case. The run creates one CatalogCache, hands it to the CatalogRepository,
and drops it afterwards. There is no process-wide cache; callers that edit
the catalog mid-run call invalidate().
"""

from __future__ import annotations

from collections.abc import Hashable
from typing import Any


class CatalogCache:
    """Query-signature keyed store of catalog read results."""

    def __init__(self) -> None:
        self._entries: dict[Hashable, list[Any]] = {}
        self.hits = 0
        self.misses = 0

    def get(self, signature: Hashable) -> list[Any] | None:
        entry = self._entries.get(signature)
        if entry is None:
            self.misses += 1
            return None
        self.hits += 1
        return entry

    def put(self, signature: Hashable, rows: list[Any]) -> None:
        self._entries[signature] = list(rows)

    def invalidate(self, signature: Hashable | None = None) -> None:
        """Drop one signature, or everything when *signature* is None."""
        if signature is None:
            self._entries.clear()
        else:
            self._entries.pop(signature, None)

    def __len__(self) -> int:
        return len(self._entries)
