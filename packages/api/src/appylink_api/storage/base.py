"""Key/value storage backing per-client state (favorites, compare, drafts, throttles)."""

from __future__ import annotations

import threading
import time
from collections import OrderedDict
from typing import Callable, Protocol

Listener = Callable[[str, "str | None"], None]


class KeyValueStorage(Protocol):
    """String-in, string-out storage with change notification."""

    def get(self, key: str) -> str | None: ...

    def set(self, key: str, value: str | None) -> None: ...

    def subscribe(self, listener: Listener) -> Callable[[], None]: ...


class MemoryStorage:
    """
    Thread-safe in-process storage. Setting None removes the key.

    Entries expire `ttl` seconds after their last write, and once more than
    `max_keys` are held the least recently written ones are dropped. Both
    bounds are optional; None means unbounded.
    """

    def __init__(
        self,
        *,
        ttl: float | None = None,
        max_keys: int | None = None,
        clock: Callable[[], float] = time.time,
    ) -> None:
        self._data: OrderedDict[str, tuple[str, float | None]] = OrderedDict()
        self._listeners: list[Listener] = []
        self._lock = threading.Lock()
        self._ttl = ttl
        self._max_keys = max_keys
        self._clock = clock

    def __bool__(self) -> bool:
        return True

    def _expired(self, expires_at: float | None) -> bool:
        return expires_at is not None and self._clock() >= expires_at

    def _prune(self) -> None:
        # Oldest writes sit at the front.
        while self._data:
            key, (_, expires_at) = next(iter(self._data.items()))
            if not self._expired(expires_at):
                break
            del self._data[key]
        if self._max_keys is not None:
            while len(self._data) > self._max_keys:
                self._data.popitem(last=False)

    def get(self, key: str) -> str | None:
        with self._lock:
            entry = self._data.get(key)
            if entry is None:
                return None
            value, expires_at = entry
            if self._expired(expires_at):
                del self._data[key]
                return None
            return value

    def set(self, key: str, value: str | None) -> None:
        with self._lock:
            if value is None:
                self._data.pop(key, None)
            else:
                expires_at = None if self._ttl is None else self._clock() + self._ttl
                self._data[key] = (value, expires_at)
                self._data.move_to_end(key)
                self._prune()
            listeners = list(self._listeners)
        for listener in listeners:
            listener(key, value)

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        with self._lock:
            self._listeners.append(listener)

        def _unsubscribe() -> None:
            with self._lock:
                if listener in self._listeners:
                    self._listeners.remove(listener)

        return _unsubscribe

    def clear(self) -> None:
        with self._lock:
            self._data.clear()

    def __len__(self) -> int:
        with self._lock:
            self._prune()
            return len(self._data)
