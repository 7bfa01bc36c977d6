# wget_mirror/crawler/visited.py
"""
Visited registry shared by every download task of one crawl.
"""
from __future__ import annotations

import threading
from typing import FrozenSet, Iterable, Set

__all__ = ("VisitedRegistry",)


class VisitedRegistry:
    """Set of normalized keys with an atomic test-and-insert.

    Entries are never removed. ``claim`` holds the lock only for the
    membership check and the insert, so it never blocks the event loop.
    """

    def __init__(self, keys: Iterable[str] = ()) -> None:
        self._keys: Set[str] = set(keys)
        self._lock = threading.Lock()

    def claim(self, key: str) -> bool:
        """Mark *key* visited and return whether it was already present."""
        with self._lock:
            seen = key in self._keys
            self._keys.add(key)
        return seen

    def add(self, key: str) -> None:
        with self._lock:
            self._keys.add(key)

    def snapshot(self) -> FrozenSet[str]:
        with self._lock:
            return frozenset(self._keys)

    def __contains__(self, key: object) -> bool:
        with self._lock:
            return key in self._keys

    def __len__(self) -> int:
        with self._lock:
            return len(self._keys)

    def __repr__(self) -> str:
        return f"{type(self).__name__}({len(self)} keys)"
