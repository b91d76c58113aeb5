"""
In-memory TTL cache for remote API responses.
"""
from __future__ import annotations

import threading
import time
from dataclasses import dataclass
from typing import Callable, Dict, Generic, Optional, TypeVar

from ..config import Config

T = TypeVar("T")

DEFAULT_TTL_SECONDS = 5 * 60


@dataclass
class CacheEntry(Generic[T]):
    data: T
    timestamp: float


class MemoryCache(Generic[T]):
    """
    Key-value cache whose entries expire a fixed time after insertion.

    Expired entries are dropped lazily on read and on `size()`. Writes are
    last-write-wins; a lock keeps the underlying dict consistent across
    threads.
    """

    def __init__(
        self,
        ttl_seconds: float = DEFAULT_TTL_SECONDS,
        *,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        self.ttl_seconds = ttl_seconds
        self._clock = clock
        self._entries: Dict[str, CacheEntry[T]] = {}
        self._lock = threading.Lock()

    def get(self, key: str) -> Optional[T]:
        with self._lock:
            entry = self._entries.get(key)
            if entry is None:
                return None
            if self._is_expired(entry):
                del self._entries[key]
                return None
            return entry.data

    def set(self, key: str, data: T) -> None:
        with self._lock:
            self._entries[key] = CacheEntry(data=data, timestamp=self._clock())

    def has(self, key: str) -> bool:
        with self._lock:
            entry = self._entries.get(key)
            if entry is None:
                return False
            if self._is_expired(entry):
                del self._entries[key]
                return False
            return True

    def delete(self, key: str) -> bool:
        with self._lock:
            return self._entries.pop(key, None) is not None

    def clear(self) -> None:
        with self._lock:
            self._entries.clear()

    def size(self) -> int:
        with self._lock:
            self._cleanup()
            return len(self._entries)

    def _is_expired(self, entry: CacheEntry[T]) -> bool:
        return self._clock() - entry.timestamp > self.ttl_seconds

    def _cleanup(self) -> None:
        expired = [key for key, entry in self._entries.items() if self._is_expired(entry)]
        for key in expired:
            del self._entries[key]


# Shared cache for Naver Shopping API pages
naver_api_cache: MemoryCache = MemoryCache(ttl_seconds=Config.CACHE_TTL_SECONDS)
