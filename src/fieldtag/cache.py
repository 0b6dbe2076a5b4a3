"""Copy-on-write memoisation cache shared by the tag and rule caches.

Readers look up an immutable snapshot without taking any lock. A writer
that misses takes the single writer lock, re-checks the snapshot,
computes the entry, and publishes ``old | {key: value}`` as the new
snapshot. Entries are write-once and never evicted: the key space is
bounded by the annotations and rules written in source code.
"""

from __future__ import annotations

import threading
from collections.abc import Callable, Hashable, Mapping
from types import MappingProxyType
from typing import Generic, TypeVar

K = TypeVar("K", bound=Hashable)
V = TypeVar("V")

_MISSING = object()


class SnapshotCache(Generic[K, V]):
    """Read-mostly cache with lock-free reads and serialised writes."""

    def __init__(self) -> None:
        self._snapshot: Mapping[K, V] = MappingProxyType({})
        self._lock = threading.Lock()

    def get(self, key: K) -> V | None:
        """Return the cached value for *key*, or None on a miss."""
        return self._snapshot.get(key)

    def get_or_create(self, key: K, factory: Callable[[], V]) -> V:
        """Return the cached value for *key*, building it with *factory* once.

        If *factory* raises, nothing is published and the exception
        propagates; a later call retries.
        """
        value = self._snapshot.get(key, _MISSING)
        if value is not _MISSING:
            return value  # type: ignore[return-value]

        with self._lock:
            value = self._snapshot.get(key, _MISSING)
            if value is not _MISSING:
                return value  # type: ignore[return-value]

            created = factory()
            self._snapshot = MappingProxyType({**self._snapshot, key: created})
            return created

    def snapshot(self) -> Mapping[K, V]:
        """The current immutable snapshot."""
        return self._snapshot

    def __contains__(self, key: object) -> bool:
        return key in self._snapshot

    def __len__(self) -> int:
        return len(self._snapshot)
