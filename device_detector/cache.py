"""
In-memory memoization for classification results.

Two kinds of store exist. Per-user-agent results live in a ``MemoryCache``
owned by the caller (a ``DeviceDetector`` or a single parser), so they are
released with their owner. Compiled rule sets and registries are keyed by
their source files and live in one process-wide store, which stays bounded
by the number of distinct rule configurations.
"""

import threading
from typing import Any, Callable, Dict, Hashable

from .logging_config import get_logger

logger = get_logger('cache')


class MemoryCache:
    """Thread-safe compute-once store with no eviction."""

    def __init__(self):
        self.memory_cache: Dict[Hashable, Any] = {}
        self.lock = threading.Lock()
        self.hits = 0
        self.misses = 0

    def fetch(self, key: Hashable, compute: Callable[[], Any]) -> Any:
        """
        Return the value stored under ``key``, computing it on first use.

        ``compute`` runs outside the lock. If two threads race on the same
        key, the first completed value is kept and returned to both.

        Args:
            key: Namespaced cache key
            compute: Zero-argument callable producing the value

        Returns:
            Cached or freshly computed value
        """
        with self.lock:
            if key in self.memory_cache:
                self.hits += 1
                logger.debug(f"Cache hit for {key[:2] if isinstance(key, tuple) else key}")
                return self.memory_cache[key]
            self.misses += 1

        value = compute()

        with self.lock:
            return self.memory_cache.setdefault(key, value)

    def __contains__(self, key: Hashable) -> bool:
        with self.lock:
            return key in self.memory_cache

    def __len__(self) -> int:
        with self.lock:
            return len(self.memory_cache)

    def clear(self, namespace: str = None):
        """Clear all entries, or only those whose key starts with ``namespace``."""
        with self.lock:
            if namespace:
                self.memory_cache = {
                    k: v for k, v in self.memory_cache.items()
                    if not (isinstance(k, tuple) and k and k[0] == namespace)
                }
            else:
                self.memory_cache.clear()
                self.hits = 0
                self.misses = 0

    def get_cache_stats(self) -> Dict[str, int]:
        """Get cache statistics."""
        with self.lock:
            return {
                'memory_entries': len(self.memory_cache),
                'hits': self.hits,
                'misses': self.misses,
            }


# Process-wide store for compiled rule sets and registries only
_shared_cache = None
_shared_cache_lock = threading.Lock()


def get_shared_cache() -> MemoryCache:
    """Get the process-wide store of compiled rule sets and registries."""
    global _shared_cache
    with _shared_cache_lock:
        if _shared_cache is None:
            _shared_cache = MemoryCache()
        return _shared_cache
