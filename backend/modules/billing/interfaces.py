"""
Billing module interface.

Other modules should depend on these protocols, not the concrete
implementations. The usage module reads subscriptions through
ISubscriptionRepository to decide entitlement without knowing about Stripe.
"""

from typing import Protocol, Optional, runtime_checkable

from shared.models import AuthenticatedUser

from .models import (
    CheckoutSession,
    PortalSession,
    Subscription,
    SubscriptionStatus,
    WebhookResult,
)


@runtime_checkable
class ISubscriptionRepository(Protocol):
    """
    Storage for user subscriptions.

    Methods are synchronous; async callers run them on the threadpool.
    """

    def get_by_user(self, user_id: str) -> Optional[Subscription]:
        """Get a user's subscription, or None if they never subscribed."""
        ...

    def upsert(self, subscription: Subscription) -> Subscription:
        """Insert or replace the subscription row for ``subscription.user_id``."""
        ...

    def update_by_stripe_id(
        self,
        stripe_subscription_id: str,
        status: SubscriptionStatus,
        current_period_start: Optional[int] = None,
        current_period_end: Optional[int] = None,
    ) -> Optional[Subscription]:
        """
        Update the row matching a Stripe subscription ID.

        Period fields left as None are not changed.

        Returns:
            The updated subscription, or None if no row matched
        """
        ...


@runtime_checkable
class IBillingService(Protocol):
    """
    Interface for subscription billing operations.
    """

    async def get_subscription(self, user_id: str) -> Optional[Subscription]:
        """Get a user's subscription, if any."""
        ...

    async def create_checkout_session(
        self,
        user: AuthenticatedUser,
        price_id: str,
    ) -> CheckoutSession:
        """
        Create a Stripe checkout session for a subscription.

        Raises:
            PaymentProviderError: If Stripe rejects the request
        """
        ...

    async def create_portal_session(self, user: AuthenticatedUser) -> PortalSession:
        """
        Create a Stripe billing portal session.

        Raises:
            SubscriptionNotFoundError: If the user has no active subscription
            PaymentProviderError: If Stripe rejects the request
        """
        ...

    async def handle_webhook(self, payload: bytes, signature: str) -> WebhookResult:
        """
        Verify and apply a Stripe webhook event.

        Raises:
            WebhookVerificationError: If the signature does not verify
        """
        ...
