"""Fixed-window request limiter keyed by caller identity."""

import math
import time
from dataclasses import dataclass
from typing import Callable, Dict

import config


@dataclass
class _Window:
    started_at: float
    count: int = 0


class FixedWindowRateLimiter:
    """Allow at most ``max_requests`` per caller in each ``window_seconds`` window.

    A caller's window starts with its first request and resets once
    ``window_seconds`` have elapsed since then.
    """

    def __init__(
        self,
        max_requests: int = config.RATE_LIMIT_MAX_REQUESTS,
        window_seconds: float = config.RATE_LIMIT_WINDOW_SECONDS,
        clock: Callable[[], float] = time.monotonic,
    ):
        self.max_requests = max_requests
        self.window_seconds = window_seconds
        self._clock = clock
        self._windows: Dict[str, _Window] = {}

    def hit(self, key: str) -> float:
        """
        Record a request for ``key``.

        Returns:
            0 if the request is allowed, otherwise the seconds until the
            caller's window resets (rounded up, at least 1)
        """
        now = self._clock()
        self._evict_expired(now)

        window = self._windows.get(key)
        if window is None:
            window = self._windows[key] = _Window(started_at=now)

        if window.count >= self.max_requests:
            remaining = self.window_seconds - (now - window.started_at)
            return max(1, math.ceil(remaining))

        window.count += 1
        return 0

    def _evict_expired(self, now: float) -> None:
        expired = [
            key for key, window in self._windows.items()
            if now - window.started_at >= self.window_seconds
        ]
        for key in expired:
            del self._windows[key]
