"""
Subscription repository for database access.

Encapsulates all queries against the ``user_subscriptions`` table, which
holds at most one row per user.
"""

from typing import Any, Optional

from shared.repository import BaseRepository

from .models import Subscription, SubscriptionStatus


class InMemorySubscriptionRepository:
    """
    Subscription storage backed by a dict.

    For testing and development. Use SupabaseSubscriptionRepository for
    production.
    """

    def __init__(self) -> None:
        self._rows: dict[str, Subscription] = {}

    def get_by_user(self, user_id: str) -> Optional[Subscription]:
        return self._rows.get(user_id)

    def upsert(self, subscription: Subscription) -> Subscription:
        self._rows[subscription.user_id] = subscription
        return subscription

    def update_by_stripe_id(
        self,
        stripe_subscription_id: str,
        status: SubscriptionStatus,
        current_period_start: Optional[int] = None,
        current_period_end: Optional[int] = None,
    ) -> Optional[Subscription]:
        for user_id, row in self._rows.items():
            if row.stripe_subscription_id != stripe_subscription_id:
                continue
            changes: dict[str, Any] = {"status": status}
            if current_period_start is not None:
                changes["current_period_start"] = current_period_start
            if current_period_end is not None:
                changes["current_period_end"] = current_period_end
            updated = row.model_copy(update=changes)
            self._rows[user_id] = updated
            return updated
        return None


class SupabaseSubscriptionRepository(BaseRepository[Subscription]):
    """
    Repository for subscription data access.

    Note: This repository does NOT perform authorization checks.
    Rows are only written from verified Stripe webhook events.
    """

    TABLE = "user_subscriptions"

    def get_by_user(self, user_id: str) -> Optional[Subscription]:
        result = (
            self._db.table(self.TABLE)
            .select("*")
            .eq("user_id", user_id)
            .limit(1)
            .execute()
        )
        if not result.data:
            return None
        return self._map_to_subscription(result.data[0])

    def upsert(self, subscription: Subscription) -> Subscription:
        now = self._now_iso()
        row = {
            "user_id": subscription.user_id,
            "stripe_customer_id": subscription.stripe_customer_id,
            "stripe_subscription_id": subscription.stripe_subscription_id,
            "status": subscription.status.value,
            "current_period_start": subscription.current_period_start,
            "current_period_end": subscription.current_period_end,
            "updated_at": now,
        }
        result = (
            self._db.table(self.TABLE)
            .upsert(row, on_conflict="user_id")
            .execute()
        )
        return self._map_to_subscription(result.data[0]) if result.data else subscription

    def update_by_stripe_id(
        self,
        stripe_subscription_id: str,
        status: SubscriptionStatus,
        current_period_start: Optional[int] = None,
        current_period_end: Optional[int] = None,
    ) -> Optional[Subscription]:
        changes: dict[str, Any] = {
            "status": status.value,
            "updated_at": self._now_iso(),
        }
        if current_period_start is not None:
            changes["current_period_start"] = current_period_start
        if current_period_end is not None:
            changes["current_period_end"] = current_period_end

        result = (
            self._db.table(self.TABLE)
            .update(changes)
            .eq("stripe_subscription_id", stripe_subscription_id)
            .execute()
        )
        if not result.data:
            return None
        return self._map_to_subscription(result.data[0])

    # -------------------------------------------------------------------------
    # Mapping helpers
    # -------------------------------------------------------------------------

    def _map_to_subscription(self, row: dict[str, Any]) -> Subscription:
        return Subscription(
            user_id=row["user_id"],
            stripe_customer_id=row.get("stripe_customer_id"),
            stripe_subscription_id=row.get("stripe_subscription_id"),
            status=SubscriptionStatus.from_stripe(row.get("status")),
            current_period_start=row.get("current_period_start"),
            current_period_end=row.get("current_period_end"),
        )
