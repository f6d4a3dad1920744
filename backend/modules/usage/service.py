"""
Usage tracking service implementation.

Provides both in-memory (for testing) and Supabase-backed (for production)
implementations of usage metering.
"""

import logging
import time
import uuid
from typing import Any, Callable, Optional

from starlette.concurrency import run_in_threadpool

from modules.billing.interfaces import ISubscriptionRepository
from shared.config import get_settings

from .exceptions import UsageLookupError
from .interfaces import IUsageService
from .models import ContentType, Entitlement, UsageRecord

logger = logging.getLogger(__name__)


class UsageService(IUsageService):
    """
    Usage metering with in-memory storage.

    For testing and development. Use SupabaseUsageService for production.

    Args:
        subscriptions: Subscription storage used for the entitlement check
        free_limit: Lifetime free-tier cap (defaults to settings)
        clock: Returns the current time in epoch seconds
    """

    def __init__(
        self,
        subscriptions: ISubscriptionRepository,
        free_limit: Optional[int] = None,
        clock: Callable[[], float] = time.time,
    ):
        self._subscriptions = subscriptions
        self._free_limit = (
            free_limit if free_limit is not None else get_settings().free_generation_limit
        )
        self._clock = clock
        # In-memory storage for testing
        self._records: dict[str, list[UsageRecord]] = {}

    @property
    def free_limit(self) -> int:
        return self._free_limit

    # -------------------------------------------------------------------------
    # Storage hooks (synchronous; overridden by the Supabase implementation)
    # -------------------------------------------------------------------------

    def _count_records(self, user_id: str) -> int:
        return len(self._records.get(user_id, []))

    def _insert_record(self, record: UsageRecord) -> UsageRecord:
        stored = record.model_copy(update={"id": str(uuid.uuid4())})
        self._records.setdefault(record.user_id, []).insert(0, stored)
        return stored

    # -------------------------------------------------------------------------
    # IUsageService
    # -------------------------------------------------------------------------

    async def has_active_subscription(self, user_id: str) -> bool:
        """
        Whether the user's subscription entitles them right now.

        A failed subscription read is treated as "no subscription"; the
        free-tier check still applies.
        """
        try:
            subscription = await run_in_threadpool(self._subscriptions.get_by_user, user_id)
        except Exception as e:
            logger.warning("Subscription lookup failed for %s: %s", user_id, e)
            return False
        return subscription is not None and subscription.is_active(self._clock())

    async def count_usage(self, user_id: str) -> int:
        try:
            return await run_in_threadpool(self._count_records, user_id)
        except Exception as e:
            logger.error("Usage lookup failed for %s: %s", user_id, e)
            raise UsageLookupError(user_id) from e

    async def get_entitlement(self, user_id: str) -> Entitlement:
        if await self.has_active_subscription(user_id):
            return Entitlement(unlimited=True, limit=self._free_limit)

        return Entitlement(
            unlimited=False,
            usage_count=await self.count_usage(user_id),
            limit=self._free_limit,
        )

    async def record_usage(self, user_id: str, content_type: ContentType) -> bool:
        record = UsageRecord(user_id=user_id, content_type=content_type)
        try:
            await run_in_threadpool(self._insert_record, record)
        except Exception as e:
            # The user already has their content; a lost record only under-counts
            logger.error("Failed to record usage for %s: %s", user_id, e)
            return False
        return True


class SupabaseUsageService(UsageService):
    """
    Usage service with Supabase persistence.

    Extends the base UsageService to store records in the ``user_usage``
    table while maintaining the same interface.
    """

    TABLE = "user_usage"

    def __init__(
        self,
        supabase_client: Any,
        subscriptions: ISubscriptionRepository,
        free_limit: Optional[int] = None,
        clock: Callable[[], float] = time.time,
    ):
        """
        Initialize with Supabase client.

        Args:
            supabase_client: Supabase client instance
            subscriptions: Subscription storage
            free_limit: Lifetime free-tier cap (defaults to settings)
            clock: Returns the current time in epoch seconds
        """
        super().__init__(subscriptions, free_limit, clock)
        self._db = supabase_client

    def _count_records(self, user_id: str) -> int:
        result = (
            self._db.table(self.TABLE)
            .select("id", count="exact")
            .eq("user_id", user_id)
            .execute()
        )
        if result.count is not None:
            return result.count
        return len(result.data or [])

    def _insert_record(self, record: UsageRecord) -> UsageRecord:
        result = self._db.table(self.TABLE).insert({
            "user_id": record.user_id,
            "content_type": record.content_type.value,
            "created_at": record.created_at.isoformat(),
        }).execute()
        if result.data:
            return record.model_copy(update={"id": result.data[0].get("id")})
        return record
