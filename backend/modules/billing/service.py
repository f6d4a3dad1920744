"""
Billing service implementation.

Creates Stripe checkout and portal sessions and keeps the
``user_subscriptions`` table in step with Stripe through webhook events.
The Stripe SDK is synchronous, so every call runs on the threadpool.
"""

import json
import logging
import time
from typing import Any, Callable, Optional

import stripe
from starlette.concurrency import run_in_threadpool

from shared.config import Settings, get_settings
from shared.models import AuthenticatedUser

from .exceptions import (
    BillingNotConfiguredError,
    PaymentProviderError,
    SubscriptionNotFoundError,
    WebhookVerificationError,
)
from .interfaces import IBillingService, ISubscriptionRepository
from .models import (
    PROVISIONAL_PERIOD_SECONDS,
    CheckoutSession,
    PortalSession,
    Subscription,
    SubscriptionStatus,
    WebhookResult,
)

logger = logging.getLogger(__name__)


class StripeBillingService(IBillingService):
    """
    Subscription billing through Stripe.

    Args:
        subscriptions: Subscription storage
        settings: Application settings (Stripe keys, frontend URL)
        clock: Returns the current time in epoch seconds
    """

    def __init__(
        self,
        subscriptions: ISubscriptionRepository,
        settings: Optional[Settings] = None,
        clock: Callable[[], float] = time.time,
    ):
        self._subscriptions = subscriptions
        self._settings = settings or get_settings()
        self._clock = clock
        if self._settings.stripe_secret_key:
            stripe.api_key = self._settings.stripe_secret_key

    async def get_subscription(self, user_id: str) -> Optional[Subscription]:
        return await run_in_threadpool(self._subscriptions.get_by_user, user_id)

    # -------------------------------------------------------------------------
    # Sessions
    # -------------------------------------------------------------------------

    async def create_checkout_session(
        self,
        user: AuthenticatedUser,
        price_id: str,
    ) -> CheckoutSession:
        if not self._settings.stripe_secret_key:
            raise BillingNotConfiguredError("stripe_secret_key")

        metadata = {"userId": user.id, "userEmail": user.email}
        frontend = self._settings.frontend_url.rstrip("/")

        try:
            session = await run_in_threadpool(
                stripe.checkout.Session.create,
                payment_method_types=["card"],
                line_items=[{"price": price_id, "quantity": 1}],
                mode="subscription",
                success_url=f"{frontend}/dashboard?success=true",
                cancel_url=f"{frontend}/pricing?canceled=true",
                customer_email=user.email,
                metadata=metadata,
                subscription_data={"metadata": metadata},
            )
        except stripe.StripeError as e:
            logger.error("Checkout session creation failed for %s: %s", user.id, e)
            raise PaymentProviderError("Failed to create checkout session") from e

        logger.info("Checkout session %s created for user %s", session.id, user.id)
        return CheckoutSession(session_id=session.id, url=session.url or "")

    async def create_portal_session(self, user: AuthenticatedUser) -> PortalSession:
        if not self._settings.stripe_secret_key:
            raise BillingNotConfiguredError("stripe_secret_key")

        subscription = await self.get_subscription(user.id)
        if (
            subscription is None
            or subscription.status != SubscriptionStatus.ACTIVE
            or not subscription.stripe_customer_id
        ):
            raise SubscriptionNotFoundError(user.id)

        try:
            portal = await run_in_threadpool(
                stripe.billing_portal.Session.create,
                customer=subscription.stripe_customer_id,
                return_url=f"{self._settings.frontend_url.rstrip('/')}/dashboard",
            )
        except stripe.StripeError as e:
            logger.error("Portal session creation failed for %s: %s", user.id, e)
            raise PaymentProviderError("Failed to create portal session") from e

        return PortalSession(url=portal.url)

    # -------------------------------------------------------------------------
    # Webhooks
    # -------------------------------------------------------------------------

    async def handle_webhook(self, payload: bytes, signature: str) -> WebhookResult:
        secret = self._settings.stripe_webhook_secret
        if not secret:
            raise BillingNotConfiguredError("stripe_webhook_secret")

        try:
            stripe.Webhook.construct_event(payload, signature, secret)
        except (ValueError, stripe.SignatureVerificationError) as e:
            logger.warning("Webhook signature verification failed: %s", e)
            raise WebhookVerificationError() from e

        # The signature covers the raw body, so the decoded JSON is trusted
        event = json.loads(payload)
        event_type = event.get("type", "")
        data = event.get("data", {}).get("object", {})
        logger.info("Received Stripe webhook event: %s", event_type)

        handler = self._EVENT_HANDLERS.get(event_type)
        if handler is None:
            logger.info("Unhandled Stripe event: %s", event_type)
            return WebhookResult(event_type=event_type, handled=False)

        handled = await run_in_threadpool(handler, self, data)
        return WebhookResult(event_type=event_type, handled=handled)

    def _on_checkout_completed(self, session: dict[str, Any]) -> bool:
        user_id = (session.get("metadata") or {}).get("userId")
        if not user_id:
            logger.error("Checkout session %s has no userId metadata", session.get("id"))
            return False

        now = int(self._clock())
        self._subscriptions.upsert(Subscription(
            user_id=user_id,
            stripe_customer_id=session.get("customer"),
            stripe_subscription_id=session.get("subscription"),
            status=SubscriptionStatus.ACTIVE,
            current_period_start=now,
            current_period_end=now + PROVISIONAL_PERIOD_SECONDS,
        ))
        logger.info("Subscription activated for user %s", user_id)
        return True

    def _on_subscription_created(self, subscription: dict[str, Any]) -> bool:
        user_id = (subscription.get("metadata") or {}).get("userId")
        if not user_id:
            logger.error("Subscription %s has no userId metadata", subscription.get("id"))
            return False

        self._subscriptions.upsert(Subscription(
            user_id=user_id,
            stripe_customer_id=subscription.get("customer"),
            stripe_subscription_id=subscription.get("id"),
            status=SubscriptionStatus.from_stripe(subscription.get("status")),
            current_period_start=_period_field(subscription, "current_period_start"),
            current_period_end=_period_field(subscription, "current_period_end"),
        ))
        return True

    def _on_subscription_updated(self, subscription: dict[str, Any]) -> bool:
        updated = self._subscriptions.update_by_stripe_id(
            subscription.get("id", ""),
            SubscriptionStatus.from_stripe(subscription.get("status")),
            current_period_start=_period_field(subscription, "current_period_start"),
            current_period_end=_period_field(subscription, "current_period_end"),
        )
        return self._log_update(updated, subscription.get("id"))

    def _on_subscription_deleted(self, subscription: dict[str, Any]) -> bool:
        updated = self._subscriptions.update_by_stripe_id(
            subscription.get("id", ""),
            SubscriptionStatus.CANCELED,
        )
        return self._log_update(updated, subscription.get("id"))

    def _on_payment_succeeded(self, invoice: dict[str, Any]) -> bool:
        subscription_id = _invoice_subscription(invoice)
        if not subscription_id:
            return False
        updated = self._subscriptions.update_by_stripe_id(
            subscription_id,
            SubscriptionStatus.ACTIVE,
        )
        return self._log_update(updated, subscription_id)

    def _on_payment_failed(self, invoice: dict[str, Any]) -> bool:
        subscription_id = _invoice_subscription(invoice)
        if not subscription_id:
            return False
        updated = self._subscriptions.update_by_stripe_id(
            subscription_id,
            SubscriptionStatus.PAST_DUE,
        )
        return self._log_update(updated, subscription_id)

    @staticmethod
    def _log_update(updated: Optional[Subscription], stripe_subscription_id: Optional[str]) -> bool:
        if updated is None:
            logger.warning("No subscription row for Stripe subscription %s", stripe_subscription_id)
            return False
        logger.info(
            "Subscription %s is now %s",
            stripe_subscription_id, updated.status.value,
        )
        return True

    _EVENT_HANDLERS: dict[str, Callable[["StripeBillingService", dict[str, Any]], bool]] = {
        "checkout.session.completed": _on_checkout_completed,
        "customer.subscription.created": _on_subscription_created,
        "customer.subscription.updated": _on_subscription_updated,
        "customer.subscription.deleted": _on_subscription_deleted,
        "invoice.payment_succeeded": _on_payment_succeeded,
        "invoice.payment_failed": _on_payment_failed,
    }


def _period_field(subscription: dict[str, Any], name: str) -> Optional[int]:
    """
    Read a billing-period timestamp from a subscription object.

    Newer Stripe API versions moved the period onto the subscription items.
    """
    value = subscription.get(name)
    if value is None:
        items = (subscription.get("items") or {}).get("data") or []
        if items:
            value = items[0].get(name)
    return int(value) if value is not None else None


def _invoice_subscription(invoice: dict[str, Any]) -> Optional[str]:
    subscription_id = invoice.get("subscription")
    if subscription_id is None:
        parent = (invoice.get("parent") or {}).get("subscription_details") or {}
        subscription_id = parent.get("subscription")
    return subscription_id
