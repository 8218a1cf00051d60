"""
In-memory fixed-window rate limiting, partitioned by client.
"""

import math
import threading
import time
from typing import Callable, Dict, Tuple

# Expired windows are pruned once this many clients are tracked.
_PRUNE_THRESHOLD = 1024


class FixedWindowRateLimiter:
    """Allows ``limit`` hits per client in each ``window_seconds`` window."""

    def __init__(self, limit: int, window_seconds: float = 60.0, clock: Callable[[], float] = time.monotonic):
        """
        Initialize the limiter.

        Args:
            limit: Hits allowed per window, 0 or less disables limiting
            window_seconds: Window length in seconds
            clock: Monotonic time source
        """
        self.limit = limit
        self.window_seconds = window_seconds
        self._clock = clock
        self._windows: Dict[str, Tuple[float, int]] = {}
        self._lock = threading.Lock()

    @property
    def enabled(self) -> bool:
        return self.limit > 0

    def hit(self, key: str) -> bool:
        """
        Record a hit for ``key``.

        Returns:
            True if the hit is allowed, False if the window is used up
        """
        if not self.enabled:
            return True

        now = self._clock()
        with self._lock:
            if len(self._windows) >= _PRUNE_THRESHOLD:
                self._prune(now)

            start, count = self._windows.get(key, (now, 0))
            if now - start >= self.window_seconds:
                start, count = now, 0
            if count >= self.limit:
                return False
            self._windows[key] = (start, count + 1)
            return True

    def retry_after(self, key: str) -> int:
        """Seconds until ``key`` gets a fresh window."""
        with self._lock:
            window = self._windows.get(key)
        if window is None:
            return 0
        remaining = window[0] + self.window_seconds - self._clock()
        return max(0, math.ceil(remaining))

    def reset(self) -> None:
        with self._lock:
            self._windows.clear()

    def _prune(self, now: float) -> None:
        expired = [key for key, (start, _) in self._windows.items() if now - start >= self.window_seconds]
        for key in expired:
            del self._windows[key]
