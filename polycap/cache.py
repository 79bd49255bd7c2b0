"""Memoization of intermediate reduction states.

A slider that caps the vertex count of the same polygon fires many requests
in a row with neighbouring targets. Every state the driver passes through
below a configurable size is stored under ``(content hash, vertex count)``
so that later requests can start from the closest state instead of from the
full input.
"""

from __future__ import annotations

import threading
from collections import OrderedDict
from typing import Optional, Tuple

from .config import DEFAULT_CONFIG
from .core.errors import ConfigurationError
from .polygon import PolygonSnapshot

CacheKey = Tuple[str, int]


class SimplificationCache:
    """Size-capped LRU map from ``(content hash, length)`` to snapshots.

    Lookups refresh an entry's recency; inserting into a full cache evicts
    the least recently used entry. All operations take an internal lock, so
    one cache may be shared between threads.

    Args:
        maxsize: Maximum number of stored snapshots. 0 disables storage.

    Examples:
        >>> cache = SimplificationCache(maxsize=2)
        >>> len(cache)
        0
    """

    def __init__(self, maxsize: int = 256):
        if maxsize < 0:
            raise ConfigurationError(f"maxsize must be non-negative, got {maxsize}")
        self._maxsize = maxsize
        self._entries: "OrderedDict[CacheKey, PolygonSnapshot]" = OrderedDict()
        self._lock = threading.Lock()
        self.hits = 0
        self.misses = 0

    @property
    def maxsize(self) -> int:
        return self._maxsize

    def __len__(self) -> int:
        with self._lock:
            return len(self._entries)

    def __contains__(self, key: CacheKey) -> bool:
        with self._lock:
            return key in self._entries

    def get(self, digest: str, length: int) -> Optional[PolygonSnapshot]:
        """Snapshot stored for exactly ``length`` vertices, if any."""
        with self._lock:
            snapshot = self._entries.get((digest, length))
            if snapshot is None:
                self.misses += 1
                return None
            self._entries.move_to_end((digest, length))
            self.hits += 1
            return snapshot

    def closest(
        self,
        digest: str,
        target: int,
        below: int,
    ) -> Optional[Tuple[int, PolygonSnapshot]]:
        """Smallest stored state with ``target <= length < below``.

        Returns:
            ``(length, snapshot)`` or None when no stored state qualifies
        """
        with self._lock:
            lengths = [
                length for (key, length) in self._entries
                if key == digest and target <= length < below
            ]
            if not lengths:
                self.misses += 1
                return None
            length = min(lengths)
            self._entries.move_to_end((digest, length))
            self.hits += 1
            return length, self._entries[(digest, length)]

    def put(self, digest: str, length: int, snapshot: PolygonSnapshot) -> None:
        if self._maxsize == 0:
            return
        with self._lock:
            self._entries[(digest, length)] = snapshot
            self._entries.move_to_end((digest, length))
            while len(self._entries) > self._maxsize:
                self._entries.popitem(last=False)

    def resize(self, maxsize: int) -> None:
        """Change the capacity, evicting least recently used entries to fit."""
        if maxsize < 0:
            raise ConfigurationError(f"maxsize must be non-negative, got {maxsize}")
        with self._lock:
            self._maxsize = maxsize
            while len(self._entries) > maxsize:
                self._entries.popitem(last=False)

    def clear(self) -> None:
        with self._lock:
            self._entries.clear()
            self.hits = 0
            self.misses = 0


_default_cache: Optional[SimplificationCache] = None
_default_lock = threading.Lock()


def default_cache(maxsize: Optional[int] = None) -> SimplificationCache:
    """Process-wide cache used when callers do not pass their own.

    Args:
        maxsize: Capacity the cache should have. A positive value that differs
            from the current capacity resizes the shared cache. None or 0
            leaves it as it is.
    """
    global _default_cache
    with _default_lock:
        if _default_cache is None:
            _default_cache = SimplificationCache(maxsize or DEFAULT_CONFIG.cache_size)
        elif maxsize and maxsize != _default_cache.maxsize:
            _default_cache.resize(maxsize)
        return _default_cache


def reset_default_cache(maxsize: Optional[int] = None) -> SimplificationCache:
    """Replace the process-wide cache with an empty one.

    Args:
        maxsize: Capacity of the new cache, defaults to
            ``ReductionConfig.cache_size``
    """
    global _default_cache
    with _default_lock:
        _default_cache = SimplificationCache(
            DEFAULT_CONFIG.cache_size if maxsize is None else maxsize
        )
        return _default_cache


__all__ = [
    'CacheKey',
    'SimplificationCache',
    'default_cache',
    'reset_default_cache',
]
