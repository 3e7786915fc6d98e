"""In-memory sliding window rate limiter.

State lives in the process and resets on restart.
"""

from __future__ import annotations

import threading
import time
from collections import defaultdict
from collections.abc import Callable


class SlidingWindowRateLimiter:
    """Allow at most ``limit`` hits per key within a rolling window."""

    def __init__(
        self,
        limit: int,
        window_seconds: float,
        *,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        self.limit = limit
        self.window_seconds = window_seconds
        self._clock = clock
        self._hits: dict[str, list[float]] = defaultdict(list)
        self._lock = threading.Lock()

    def hit(self, key: str) -> bool:
        """Record one hit for ``key``; return True if the key is over its limit."""

        if self.limit <= 0:
            return False
        now = self._clock()
        cutoff = now - self.window_seconds
        with self._lock:
            recent = [stamp for stamp in self._hits[key] if stamp > cutoff]
            if len(recent) >= self.limit:
                self._hits[key] = recent
                return True
            recent.append(now)
            self._hits[key] = recent
            return False

    def reset(self) -> None:
        """Clear all rate limit state."""

        with self._lock:
            self._hits.clear()
