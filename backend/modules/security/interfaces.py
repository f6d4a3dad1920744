"""
Security module interface.

The rate limiter depends on IRateLimitStore rather than a concrete backend
so the process-local store can be swapped for a shared one without
touching the middleware.
"""

from typing import Protocol, runtime_checkable

from .models import RateLimitConfig, RateLimitWindow


@runtime_checkable
class IRateLimitStore(Protocol):
    """
    Storage for fixed-window rate-limit counters.

    Implementations must make ``hit`` atomic per key: two concurrent
    requests for the same key must never both be counted as the same
    request.
    """

    def hit(self, key: str, config: RateLimitConfig) -> bool:
        """
        Count one request for a key.

        Opens a new window of ``config.window_seconds`` when there is none
        or the current one has expired.

        Returns:
            True while the window's count is within ``config.requests``
        """
        ...

    def window(self, key: str, config: RateLimitConfig) -> RateLimitWindow:
        """Remaining requests and reset time of the key's current window."""
        ...

    def reset(self, key: str, config: RateLimitConfig) -> None:
        """Forget the key's window."""
        ...
