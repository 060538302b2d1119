"""Sliding-window log rate limiter."""

import threading
import time
from typing import Callable, List, Mapping, Optional

from cachetools import TTLCache

FORWARDED_FOR_HEADER = "x-forwarded-for"
UNKNOWN_CLIENT = "unknown"


def client_key_from_headers(
    headers: Mapping[str, str],
    peer_address: Optional[str] = None,
) -> str:
    """Derive the rate-limiting key for a request.

    Uses the first address in ``X-Forwarded-For``. Without that header the
    connection's peer address is used, and only when neither is known do
    clients share the ``"unknown"`` bucket.
    """
    forwarded = None
    for name, value in headers.items():
        if name.lower() == FORWARDED_FOR_HEADER:
            forwarded = value
            break

    if forwarded:
        first = forwarded.split(",")[0].strip()
        if first:
            return first

    return peer_address or UNKNOWN_CLIENT


class SlidingWindowRateLimiter:
    """Per-client sliding-window log held in process memory.

    Each client maps to the timestamps of its accepted requests inside the
    trailing window. Entries are pruned on every check, and the backing
    TTL cache evicts clients that have been idle for a full window.
    """

    def __init__(
        self,
        window_seconds: float = 60.0,
        max_requests: int = 10,
        clock: Callable[[], float] = time.monotonic,
        max_clients: int = 100_000,
    ):
        """Initialize the limiter.

        Args:
            window_seconds: Length of the trailing window
            max_requests: Requests allowed per client inside the window
            clock: Monotonic time source, in seconds
            max_clients: Maximum number of tracked clients
        """
        if window_seconds <= 0:
            raise ValueError("Window must be positive")
        if max_requests < 1:
            raise ValueError("At least one request per window must be allowed")

        self.window_seconds = window_seconds
        self.max_requests = max_requests
        self._clock = clock
        self._windows: TTLCache = TTLCache(
            maxsize=max_clients,
            ttl=window_seconds,
            timer=clock,
        )
        self._lock = threading.Lock()

    def allow(self, client_key: str, now: Optional[float] = None) -> bool:
        """Record a request attempt and return whether it is permitted."""
        if now is None:
            now = self._clock()
        cutoff = now - self.window_seconds

        with self._lock:
            recent: List[float] = [
                t for t in self._windows.get(client_key, ()) if t > cutoff
            ]
            if len(recent) >= self.max_requests:
                self._windows[client_key] = recent
                return False

            recent.append(now)
            self._windows[client_key] = recent
            return True

    def tracked_clients(self) -> int:
        """Number of clients currently held in the window store."""
        with self._lock:
            return len(self._windows)
