"""Where: src/vaultify/platform/catalog/rate_limit.py
What: Thread-safe throttle enforcing spacing between catalog requests.
Why: Providers throttle bursts; archive members query them concurrently.
"""

from __future__ import annotations

import threading
import time
from typing import Final


class RateLimiter:
    """Provide a minimal monotonic sleep guard for outgoing requests.

    An interval of zero disables waiting.
    """

    def __init__(self, min_interval_seconds: float) -> None:
        self._min_interval: float = max(0.0, min_interval_seconds)
        self._lock: Final[threading.Lock] = threading.Lock()
        self._last_start: float = 0.0

    @property
    def min_interval(self) -> float:
        return self._min_interval

    def respect(self) -> None:
        """Delay the caller until the minimum spacing constraint is met."""

        if self._min_interval <= 0:
            return
        with self._lock:
            now = time.monotonic()
            elapsed = now - self._last_start
            wait = self._min_interval - elapsed
            if wait > 0:
                time.sleep(wait)
            self._last_start = time.monotonic()


__all__ = ["RateLimiter"]
