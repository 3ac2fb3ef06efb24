"""
TTL cache service with a pluggable backing store.

The backend is picked by configuration (`cache.backend` in config.yaml).
Only the in-process "memory" backend ships; each worker process keeps its
own copy.
"""

import time
from abc import ABC, abstractmethod
from collections import OrderedDict
from typing import Any, Callable, Optional

from ..config import ConfigurationError


class CacheBackend(ABC):
    """Key-value store with per-entry expiry."""

    @abstractmethod
    def get(self, key: str) -> Optional[Any]:
        ...

    @abstractmethod
    def set(self, key: str, value: Any, ttl_seconds: float) -> None:
        ...

    @abstractmethod
    def delete(self, key: str) -> None:
        ...

    @abstractmethod
    def clear(self) -> None:
        ...


class MemoryCacheBackend(CacheBackend):
    """
    In-memory store bounded by entry count.

    Expired entries are dropped on read; the oldest entries are dropped
    once max_entries is exceeded.
    """

    def __init__(self, max_entries: int = 2000, clock: Callable[[], float] = time.monotonic):
        self.max_entries = max_entries
        self._clock = clock
        self._store: OrderedDict[str, tuple[float, Any]] = OrderedDict()

    def get(self, key: str) -> Optional[Any]:
        item = self._store.get(key)
        if item is None:
            return None
        expires_at, value = item
        if self._clock() >= expires_at:
            del self._store[key]
            return None
        return value

    def set(self, key: str, value: Any, ttl_seconds: float) -> None:
        self._store[key] = (self._clock() + ttl_seconds, value)
        # Move to end (most recent)
        self._store.move_to_end(key)

        while len(self._store) > self.max_entries:
            self._store.popitem(last=False)  # Remove oldest

    def delete(self, key: str) -> None:
        self._store.pop(key, None)

    def clear(self) -> None:
        self._store.clear()

    def __len__(self) -> int:
        return len(self._store)


CACHE_BACKENDS: dict[str, Callable[..., CacheBackend]] = {
    "memory": MemoryCacheBackend,
}


def build_cache_backend(name: str, max_entries: int = 2000) -> CacheBackend:
    """Instantiate a cache backend by its configured name."""
    factory = CACHE_BACKENDS.get(name)
    if factory is None:
        raise ConfigurationError(
            f"Unknown cache backend: {name}. Available: {sorted(CACHE_BACKENDS)}"
        )
    return factory(max_entries=max_entries)


class TTLCache:
    """
    Namespaced cache service.

    Args:
        backend: Backing store
        ttl_seconds: Default entry lifetime
        namespace: Key prefix, so several caches can share one backend
    """

    def __init__(self, backend: CacheBackend, ttl_seconds: float = 600.0, namespace: str = ""):
        self.backend = backend
        self.ttl_seconds = ttl_seconds
        self.namespace = namespace

    def _key(self, key: str) -> str:
        return f"{self.namespace}:{key}" if self.namespace else key

    def get(self, key: str) -> Optional[Any]:
        return self.backend.get(self._key(key))

    def set(self, key: str, value: Any, ttl_seconds: Optional[float] = None) -> None:
        self.backend.set(self._key(key), value, self.ttl_seconds if ttl_seconds is None else ttl_seconds)

    def delete(self, key: str) -> None:
        self.backend.delete(self._key(key))

    def clear(self) -> None:
        """Clear the backing store (useful for testing)."""
        self.backend.clear()
