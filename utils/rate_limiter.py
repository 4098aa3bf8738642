"""
Rate limiter for fetching JSON documents from URLs.
"""
import time
from collections import deque
from threading import Lock


class RateLimiter:
    """Thread-safe sliding-window rate limiter."""

    def __init__(self, max_calls: int, period: float = 1.0):
        """
        Initialize rate limiter.

        Args:
            max_calls: Maximum number of calls allowed in the period
            period: Time period in seconds
        """
        if max_calls <= 0:
            raise ValueError(f"max_calls must be > 0, got {max_calls}")
        self.max_calls = max_calls
        self.period = period
        self.calls = deque()
        self.lock = Lock()

    def _expire(self, now: float):
        while self.calls and self.calls[0] <= now - self.period:
            self.calls.popleft()

    def wait_if_needed(self) -> float:
        """
        Block until another call is allowed, then record it.

        Returns:
            Seconds spent waiting
        """
        waited = 0.0
        with self.lock:
            now = time.monotonic()
            self._expire(now)

            if len(self.calls) >= self.max_calls:
                waited = self.calls[0] + self.period - now
                if waited > 0:
                    time.sleep(waited)
                    self._expire(time.monotonic())
                else:
                    waited = 0.0

            self.calls.append(time.monotonic())
        return waited
