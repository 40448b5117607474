"""Bounded, time-expiring in-memory cache shared by the upstream clients."""

import json
import time
from collections.abc import Callable, Mapping
from dataclasses import dataclass
from threading import Lock
from typing import Any

DEFAULT_MAX_ENTRIES = 100
DEFAULT_TTL_SECONDS = 5 * 60.0


@dataclass
class CacheEntry:
    value: Any
    expires_at: float


class ResponseCache:
    """FIFO-bounded TTL cache.

    Expiry is checked lazily on `get`; there is no background sweep. When a new
    key is stored at capacity, the earliest inserted entry is evicted regardless
    of how recently it was read.
    """

    def __init__(
        self,
        max_entries: int = DEFAULT_MAX_ENTRIES,
        ttl_seconds: float = DEFAULT_TTL_SECONDS,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        if max_entries < 1:
            raise ValueError("max_entries must be at least 1")
        if ttl_seconds <= 0:
            raise ValueError("ttl_seconds must be positive")
        self.max_entries = max_entries
        self.ttl_seconds = ttl_seconds
        self._clock = clock
        self._lock = Lock()
        # dicts keep insertion order, which is the eviction order
        self._entries: dict[str, CacheEntry] = {}

    def get(self, key: str) -> tuple[bool, Any]:
        """Return `(hit, value)`; an expired entry is removed and reported as a miss."""
        with self._lock:
            entry = self._entries.get(key)
            if entry is None:
                return False, None
            if self._clock() > entry.expires_at:
                del self._entries[key]
                return False, None
            return True, entry.value

    def set(self, key: str, value: Any) -> None:
        with self._lock:
            expires_at = self._clock() + self.ttl_seconds
            existing = self._entries.get(key)
            if existing is not None:
                existing.value = value
                existing.expires_at = expires_at
                return
            if len(self._entries) >= self.max_entries:
                oldest_key = next(iter(self._entries))
                del self._entries[oldest_key]
            self._entries[key] = CacheEntry(value=value, expires_at=expires_at)

    def clear(self) -> None:
        with self._lock:
            self._entries.clear()

    def size(self) -> int:
        with self._lock:
            return len(self._entries)

    def __len__(self) -> int:
        return self.size()


def build_cache_key(source: str, operation: str, params: Mapping[str, Any]) -> str:
    """Serialize a request identity into canonical JSON so equal requests share a key."""
    payload = {"source": source, "operation": operation, "params": dict(params)}
    return json.dumps(
        payload,
        sort_keys=True,
        separators=(",", ":"),
        ensure_ascii=True,
        default=str,
    )
