"""Protocol for per-client request rate limiting."""

from typing import Optional, Protocol


class RateLimiter(Protocol):
    """Decides whether a client may issue another request.

    The default implementation keeps its state in process memory. A shared
    store can be plugged in behind the same interface when several
    instances must agree on one budget.
    """

    def allow(self, client_key: str, now: Optional[float] = None) -> bool:
        """Record a request attempt and return whether it is permitted."""
        ...
