"""
Fixed-window request limiter for the HTTP API.
"""
from __future__ import annotations

import math
import threading
import time
from dataclasses import dataclass
from typing import Callable, Dict

CLEANUP_INTERVAL_S = 5 * 60


@dataclass(slots=True)
class RateLimitStatus:
    allowed: bool
    limit: int
    remaining: int
    reset_time: int  # epoch seconds when the current window ends

    def retry_after(self, now: float) -> int:
        return max(math.ceil(self.reset_time - now), 1)


@dataclass(slots=True)
class _WindowEntry:
    count: int
    reset_time: float


class FixedWindowRateLimiter:
    """
    Per-client fixed-window counter.

    Windows are aligned to multiples of `window_seconds` (a 60 second window
    that is hit at 14:00:30 resets at 14:01:00). Expired entries are swept at
    most once every five minutes.
    """

    def __init__(
        self,
        max_requests: int = 10,
        window_seconds: int = 60,
        *,
        clock: Callable[[], float] = time.time,
    ) -> None:
        self.max_requests = max_requests
        self.window_seconds = window_seconds
        self._clock = clock
        self._entries: Dict[str, _WindowEntry] = {}
        self._last_cleanup = clock()
        self._lock = threading.Lock()

    def check(self, client_id: str) -> RateLimitStatus:
        """Count one request for `client_id` and report whether it is allowed."""
        now = self._clock()
        window_start = math.floor(now / self.window_seconds) * self.window_seconds
        reset_time = window_start + self.window_seconds

        with self._lock:
            self._cleanup(now)
            entry = self._entries.get(client_id)

            if entry is None or now >= entry.reset_time:
                self._entries[client_id] = _WindowEntry(count=1, reset_time=reset_time)
                return RateLimitStatus(
                    allowed=True,
                    limit=self.max_requests,
                    remaining=self.max_requests - 1,
                    reset_time=math.ceil(reset_time),
                )

            if entry.count < self.max_requests:
                entry.count += 1
                return RateLimitStatus(
                    allowed=True,
                    limit=self.max_requests,
                    remaining=self.max_requests - entry.count,
                    reset_time=math.ceil(entry.reset_time),
                )

            return RateLimitStatus(
                allowed=False,
                limit=self.max_requests,
                remaining=0,
                reset_time=math.ceil(entry.reset_time),
            )

    def now(self) -> float:
        return self._clock()

    def reset(self) -> None:
        with self._lock:
            self._entries.clear()

    def _cleanup(self, now: float) -> None:
        if now - self._last_cleanup < CLEANUP_INTERVAL_S:
            return
        expired = [key for key, entry in self._entries.items() if now > entry.reset_time]
        for key in expired:
            del self._entries[key]
        self._last_cleanup = now
