from collections.abc import Callable
from threading import Lock
from time import monotonic
from typing import Any, Protocol


class CacheStore(Protocol):
    """Key-value store with per-entry TTL in seconds."""

    def get(self, key: str, default: Any = None) -> Any: ...

    def put(self, key: str, value: Any, ttl: float) -> None: ...

    def has(self, key: str) -> bool: ...

    def forget(self, key: str) -> None: ...


class InMemoryCache:
    """
    Process-wide TTL cache.

    Expired entries are dropped lazily on access. The clock is injectable so
    tests can move time forward without sleeping.
    """

    def __init__(self, clock: Callable[[], float] = monotonic):
        self._clock = clock
        self._entries: dict[str, tuple[Any, float]] = {}
        self._lock = Lock()

    def _live_entry(self, key: str) -> tuple[Any, float] | None:
        entry = self._entries.get(key)
        if entry is None:
            return None
        if self._clock() >= entry[1]:
            del self._entries[key]
            return None
        return entry

    def get(self, key: str, default: Any = None) -> Any:
        with self._lock:
            entry = self._live_entry(key)
        return default if entry is None else entry[0]

    def put(self, key: str, value: Any, ttl: float) -> None:
        if ttl <= 0:
            self.forget(key)
            return
        with self._lock:
            self._entries[key] = (value, self._clock() + ttl)

    def has(self, key: str) -> bool:
        with self._lock:
            return self._live_entry(key) is not None

    def forget(self, key: str) -> None:
        with self._lock:
            self._entries.pop(key, None)

    def clear(self) -> None:
        with self._lock:
            self._entries.clear()

    def __len__(self) -> int:
        with self._lock:
            return sum(1 for key in list(self._entries) if self._live_entry(key) is not None)
