import threading
import time


class FixedWindowRateLimiter:
    """Counts hits per key inside fixed windows of ``window_seconds``."""

    def __init__(self, limit, window_seconds, clock=time.monotonic):
        self.limit = limit
        self.window_seconds = window_seconds
        self._clock = clock
        self._lock = threading.Lock()
        self._windows = {}
        self._last_sweep = clock()

    def hit(self, key):
        """Record one request for ``key``; False once the window's limit is exceeded."""
        now = self._clock()
        with self._lock:
            if now - self._last_sweep >= self.window_seconds:
                self._sweep(now)
            window_start, count = self._windows.get(key, (now, 0))
            if now - window_start >= self.window_seconds:
                window_start, count = now, 0
            count += 1
            self._windows[key] = (window_start, count)
            return count <= self.limit

    def _sweep(self, now):
        # Caller holds the lock
        self._windows = {
            key: window for key, window in self._windows.items()
            if now - window[0] < self.window_seconds
        }
        self._last_sweep = now
