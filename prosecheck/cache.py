"""
Bounded LRU Cache
=================
Small thread-safe, fixed-capacity cache shared by the validator, the
style processor and the sentence splitter.

Entries are evicted oldest-first once capacity is reached. A miss only
costs a recomputation; callers may clear the cache at any time.
"""

import threading
from collections import OrderedDict
from typing import Any, Callable, Dict, Hashable, Optional

__version__ = "1.0.0"

_MISSING = object()


class LRUCache:
    """Fixed-capacity least-recently-used map guarded by a single lock."""

    def __init__(self, capacity: int = 200):
        if capacity < 1:
            raise ValueError(f"capacity must be positive, got {capacity}")
        self.capacity = capacity
        self._data: "OrderedDict[Hashable, Any]" = OrderedDict()
        self._lock = threading.Lock()
        self._hits = 0
        self._misses = 0

    def get(self, key: Hashable, default: Any = None) -> Any:
        """Return the cached value and mark it most recently used."""
        with self._lock:
            value = self._data.get(key, _MISSING)
            if value is _MISSING:
                self._misses += 1
                return default
            self._data.move_to_end(key)
            self._hits += 1
            return value

    def put(self, key: Hashable, value: Any):
        """Insert a value, evicting the oldest entry when full."""
        with self._lock:
            if key in self._data:
                self._data.move_to_end(key)
            self._data[key] = value
            while len(self._data) > self.capacity:
                self._data.popitem(last=False)

    def get_or_compute(self, key: Hashable, compute: Callable[[], Any]) -> Any:
        """
        Return the cached value for key, computing and storing it on a miss.

        compute() runs outside the lock; two racing callers may both
        compute, and the later result wins.
        """
        value = self.get(key, _MISSING)
        if value is _MISSING:
            value = compute()
            self.put(key, value)
        return value

    def clear(self):
        """Drop every entry and reset hit/miss counters."""
        with self._lock:
            self._data.clear()
            self._hits = 0
            self._misses = 0

    def __len__(self) -> int:
        with self._lock:
            return len(self._data)

    def __contains__(self, key: Hashable) -> bool:
        with self._lock:
            return key in self._data

    def keys(self):
        """Snapshot of keys, oldest first."""
        with self._lock:
            return list(self._data.keys())

    def stats(self) -> Dict[str, Any]:
        """Size and hit-rate statistics."""
        with self._lock:
            lookups = self._hits + self._misses
            return {
                'size': len(self._data),
                'capacity': self.capacity,
                'hits': self._hits,
                'misses': self._misses,
                'hit_rate': (self._hits / lookups) if lookups else 0.0,
            }


def text_digest(text: Optional[str]) -> str:
    """Stable digest used in cache keys."""
    import hashlib
    return hashlib.sha1((text or '').encode('utf-8')).hexdigest()
