"""
Billing module data models.

These models define the data structures used by the billing module
and exposed to other modules through the interface.
"""

import time
from enum import Enum
from typing import Optional

from pydantic import BaseModel, Field


class SubscriptionStatus(str, Enum):
    """Subscription states mirrored from Stripe."""

    ACTIVE = "active"
    TRIALING = "trialing"
    PAST_DUE = "past_due"
    CANCELED = "canceled"
    UNPAID = "unpaid"
    INCOMPLETE = "incomplete"
    INCOMPLETE_EXPIRED = "incomplete_expired"
    PAUSED = "paused"

    @classmethod
    def from_stripe(cls, value: Optional[str]) -> "SubscriptionStatus":
        """Map a Stripe status string, treating unknown values as incomplete."""
        try:
            return cls(value)
        except ValueError:
            return cls.INCOMPLETE


# Provisional period granted on checkout completion, before Stripe reports
# the real billing period through a subscription event
PROVISIONAL_PERIOD_SECONDS = 30 * 24 * 60 * 60


class Subscription(BaseModel):
    """
    A user's subscription, one row per user in ``user_subscriptions``.

    Written only by the Stripe webhook handler.
    """

    user_id: str = Field(..., description="User ID")
    stripe_customer_id: Optional[str] = Field(None, description="Stripe customer ID")
    stripe_subscription_id: Optional[str] = Field(None, description="Stripe subscription ID")
    status: SubscriptionStatus = Field(..., description="Subscription status")
    current_period_start: Optional[int] = Field(None, description="Period start (epoch seconds)")
    current_period_end: Optional[int] = Field(None, description="Period end (epoch seconds)")

    def is_active(self, now: Optional[float] = None) -> bool:
        """
        Whether the subscription entitles the user right now.

        A subscription still flagged ``active`` whose period has ended does
        not count; renewal is only trusted once Stripe reports a new period.
        """
        if self.status != SubscriptionStatus.ACTIVE or self.current_period_end is None:
            return False
        if now is None:
            now = time.time()
        return self.current_period_end > now


class CheckoutSession(BaseModel):
    """
    Stripe checkout session info.

    Returned when starting a subscription purchase.
    """

    session_id: str = Field(..., description="Stripe checkout session ID")
    url: str = Field(..., description="Checkout URL to redirect user to")

    def to_response(self) -> dict:
        return {"sessionId": self.session_id, "url": self.url}


class PortalSession(BaseModel):
    """Stripe billing portal session info."""

    url: str = Field(..., description="Portal URL to redirect user to")

    def to_response(self) -> dict:
        return {"url": self.url}


class WebhookResult(BaseModel):
    """Outcome of processing one Stripe webhook event."""

    event_type: str = Field(..., description="Stripe event type")
    handled: bool = Field(..., description="Whether the event changed any state")
