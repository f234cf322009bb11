"""
Time-boxed in-memory cache for datasets fetched from the store.

Each service owns its caches; entries expire by age only and are refilled
lazily on the next read.
"""
from __future__ import annotations

import threading
import time
from dataclasses import dataclass
from typing import Any, Callable, Dict, Generic, Hashable, Optional, TypeVar

from ..exceptions import StoreError
from ..logger import get_logger

logger = get_logger(__name__)

V = TypeVar('V')


@dataclass
class CacheEntry(Generic[V]):
    """Cached value and the clock reading it was stored at."""
    value: V
    timestamp: float


class TTLCache(Generic[V]):
    """
    Keyed cache whose entries are valid while ``now - timestamp < ttl``.

    Each key has its own refill lock, so concurrent readers of a stale key
    trigger a single fetch while other keys stay readable.

    A loader that raises StoreError does not replace the stored entry: the
    caller gets ``default`` and the next read retries the fetch.
    """

    def __init__(
        self,
        ttl_seconds: float,
        *,
        name: str = "cache",
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        """
        Args:
            ttl_seconds: Entry lifetime in seconds
            name: Label used in log messages
            clock: Time source returning seconds; injectable for tests
        """
        self.ttl = ttl_seconds
        self.name = name
        self._clock = clock
        self._entries: Dict[Hashable, CacheEntry[V]] = {}
        self._lock = threading.Lock()
        self._key_locks: Dict[Hashable, threading.Lock] = {}
        self._hits = 0
        self._misses = 0

    def _is_fresh(self, entry: CacheEntry[V], now: float) -> bool:
        return (now - entry.timestamp) < self.ttl

    def get(self, key: Hashable = None) -> Optional[V]:
        """Return the fresh value for key, or None."""
        with self._lock:
            entry = self._entries.get(key)
            if entry is not None and self._is_fresh(entry, self._clock()):
                return entry.value
            return None

    def set(self, value: V, key: Hashable = None) -> None:
        with self._lock:
            self._entries[key] = CacheEntry(value=value, timestamp=self._clock())

    def get_or_load(
        self,
        loader: Callable[[], V],
        *,
        key: Hashable = None,
        default: Any = None,
    ) -> V:
        """
        Return the cached value for key, calling loader when missing or stale.

        Args:
            loader: Zero-argument fetch function
            key: Cache key; None for single-value caches
            default: Returned when the loader fails

        Returns:
            Cached or freshly loaded value
        """
        with self._lock:
            entry = self._entries.get(key)
            if entry is not None and self._is_fresh(entry, self._clock()):
                self._hits += 1
                return entry.value
            key_lock = self._key_locks.setdefault(key, threading.Lock())

        with key_lock:
            with self._lock:
                # Another reader may have refilled the key while we waited
                now = self._clock()
                entry = self._entries.get(key)
                if entry is not None and self._is_fresh(entry, now):
                    self._hits += 1
                    return entry.value
                self._misses += 1

            try:
                value = loader()
            except StoreError as e:
                logger.warning(f"{self.name}: refresh of {key!r} failed, serving default: {e}")
                return default

            with self._lock:
                self._entries[key] = CacheEntry(value=value, timestamp=now)
            return value

    def invalidate(self, key: Hashable = ...) -> None:
        """Drop one entry, or every entry when called without a key."""
        with self._lock:
            if key is ...:
                self._entries.clear()
            else:
                self._entries.pop(key, None)

    def __len__(self) -> int:
        return len(self._entries)

    def get_stats(self) -> Dict[str, Any]:
        with self._lock:
            total = self._hits + self._misses
            return {
                "name": self.name,
                "size": len(self._entries),
                "ttl_seconds": self.ttl,
                "hits": self._hits,
                "misses": self._misses,
                "hit_rate": self._hits / total if total > 0 else 0.0,
            }
