"""Thread-safe in-memory TTL cache for directory reads."""

from __future__ import annotations

import threading
import time
from typing import Callable, Generic, TypeVar

from appylink_shared.config import settings

V = TypeVar("V")


class TTLCache(Generic[V]):
    """Dict-based cache; each entry expires `ttl` seconds after it was set."""

    def __init__(self, default_ttl: float, *, clock: Callable[[], float] = time.monotonic) -> None:
        self._store: dict[str, tuple[V, float]] = {}
        self._lock = threading.Lock()
        self._default_ttl = default_ttl
        self._clock = clock

    def get(self, key: str) -> V | None:
        with self._lock:
            entry = self._store.get(key)
            if entry is None:
                return None
            value, expires_at = entry
            if self._clock() >= expires_at:
                del self._store[key]
                return None
            return value

    def set(self, key: str, value: V, ttl: float | None = None) -> None:
        """A non-positive ttl disables caching for this entry."""
        ttl = self._default_ttl if ttl is None else ttl
        if ttl <= 0:
            return
        with self._lock:
            self._store[key] = (value, self._clock() + ttl)

    def clear(self) -> None:
        with self._lock:
            self._store.clear()


# Active providers and categories, as one DirectorySnapshot. Every admin
# write clears it.
directory_cache: TTLCache = TTLCache(default_ttl=settings.directory_cache_ttl)
