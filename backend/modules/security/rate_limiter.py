"""
Fixed-window rate limiting.

Each (client, limit class) pair gets a counter that starts on the first
request and expires ``window_seconds`` later. Counting is done by the
``limits`` package's FixedWindowRateLimiter; the default storage is its
in-process MemoryStorage, so every API instance enforces its own
independent limit unless a shared storage URI is configured.
"""

import logging
import math
import time
from typing import Mapping, Optional

from limits import RateLimitItem, RateLimitItemPerSecond
from limits.storage import MemoryStorage, Storage, storage_from_string
from limits.strategies import FixedWindowRateLimiter

from .interfaces import IRateLimitStore
from .models import DEFAULT_RATE_LIMITS, RateLimitConfig, RateLimitResult, RateLimitWindow

logger = logging.getLogger(__name__)

UNKNOWN_CLIENT = "unknown"


class LimitsRateLimitStore:
    """
    Rate-limit store backed by a ``limits`` storage.

    MemoryStorage locks per key, so concurrent hits on one key are all
    counted. Expired windows are dropped by the storage itself.

    Args:
        storage: A limits storage (defaults to a new MemoryStorage)
    """

    def __init__(self, storage: Optional[Storage] = None) -> None:
        self._storage = storage if storage is not None else MemoryStorage()
        self._strategy = FixedWindowRateLimiter(self._storage)
        self._items: dict[RateLimitConfig, RateLimitItem] = {}

    @classmethod
    def from_uri(cls, uri: str) -> "LimitsRateLimitStore":
        """Build a store from a limits storage URI such as ``memory://``."""
        return cls(storage_from_string(uri))

    def _item(self, config: RateLimitConfig) -> RateLimitItem:
        item = self._items.get(config)
        if item is None:
            item = RateLimitItemPerSecond(config.requests, config.window_seconds)
            self._items[config] = item
        return item

    def hit(self, key: str, config: RateLimitConfig) -> bool:
        return self._strategy.hit(self._item(config), key)

    def window(self, key: str, config: RateLimitConfig) -> RateLimitWindow:
        reset_at, remaining = self._strategy.get_window_stats(self._item(config), key)
        return RateLimitWindow(remaining=max(0, remaining), reset_at=reset_at)

    def reset(self, key: str, config: RateLimitConfig) -> None:
        self._strategy.clear(self._item(config), key)


def client_id_for(headers: Mapping[str, str], user_id: Optional[str] = None) -> str:
    """
    Derive the rate-limit identity for a request.

    Authenticated callers are keyed by user ID so the budget follows them
    across networks. Anonymous callers are keyed by the first address in
    X-Forwarded-For, then X-Real-IP, then a shared "unknown" bucket.
    """
    if user_id:
        return f"user:{user_id}"

    forwarded = headers.get("x-forwarded-for", "")
    ip = forwarded.split(",")[0].strip() if forwarded else ""
    if not ip:
        ip = headers.get("x-real-ip", "").strip()
    return f"ip:{ip or UNKNOWN_CLIENT}"


class RateLimiter:
    """
    Fixed-window rate limiter over an injected store.

    Args:
        store: Counter storage (defaults to a new in-memory LimitsRateLimitStore)
        limits: Limit class name -> RateLimitConfig
    """

    def __init__(
        self,
        store: Optional[IRateLimitStore] = None,
        limits: Optional[Mapping[str, RateLimitConfig]] = None,
    ) -> None:
        self._store = store if store is not None else LimitsRateLimitStore()
        self._limits = dict(limits if limits is not None else DEFAULT_RATE_LIMITS)

    @staticmethod
    def _key(client_id: str, limit_class: str) -> str:
        return f"{client_id}:{getattr(limit_class, 'value', limit_class)}"

    def get_limit(self, limit_class: str) -> Optional[RateLimitConfig]:
        """Configuration for a class, or None if the class is unlimited."""
        return self._limits.get(str(getattr(limit_class, "value", limit_class)))

    def check(self, client_id: str, limit_class: str) -> RateLimitResult:
        """
        Count a request and decide whether it may proceed.

        Returns:
            RateLimitResult; when denied, ``retry_after`` is the number of
            whole seconds until the window resets (at least 1)
        """
        limit = self.get_limit(limit_class)
        if limit is None:
            return RateLimitResult(allowed=True)

        key = self._key(client_id, limit_class)
        allowed = self._store.hit(key, limit)
        window = self._store.window(key, limit)

        if not allowed:
            retry_after = max(1, math.ceil(window.reset_at - time.time()))
            logger.info(
                "Rate limit exceeded for %s on %s (retry in %ds)",
                client_id, limit_class, retry_after,
            )
            return RateLimitResult(
                allowed=False,
                limit=limit.requests,
                remaining=0,
                reset_at=window.reset_at,
                retry_after=retry_after,
            )

        return RateLimitResult(
            allowed=True,
            limit=limit.requests,
            remaining=window.remaining,
            reset_at=window.reset_at,
        )

    def headers(self, client_id: str, limit_class: str) -> dict[str, str]:
        """
        X-RateLimit-* headers describing the client's current window.

        Returns an empty dict for unlimited classes.
        """
        limit = self.get_limit(limit_class)
        if limit is None:
            return {}

        now = time.time()
        window = self._store.window(self._key(client_id, limit_class), limit)
        if window.reset_at <= now:
            # No open window: the next request starts a fresh one
            remaining = limit.requests
            reset_at = now + limit.window_seconds
        else:
            remaining = window.remaining
            reset_at = window.reset_at

        return {
            "X-RateLimit-Limit": str(limit.requests),
            "X-RateLimit-Remaining": str(remaining),
            "X-RateLimit-Reset": str(math.ceil(reset_at)),
        }

    def reset(self, client_id: str, limit_class: str) -> None:
        """Clear a client's counter for a class (admin/testing)."""
        limit = self.get_limit(limit_class)
        if limit is not None:
            self._store.reset(self._key(client_id, limit_class), limit)
