"""
Billing module.

Handles Stripe checkout, the customer billing portal, and subscription
state kept in step with Stripe through webhooks.

Public API:
- IBillingService: Interface for billing operations
- ISubscriptionRepository: Interface for subscription storage
- Subscription: A user's subscription
- SubscriptionStatus: Stripe subscription states
- Billing exceptions: SubscriptionNotFoundError, PaymentProviderError, etc.
"""

from .interfaces import IBillingService, ISubscriptionRepository
from .models import (
    PROVISIONAL_PERIOD_SECONDS,
    CheckoutSession,
    PortalSession,
    Subscription,
    SubscriptionStatus,
    WebhookResult,
)
from .exceptions import (
    BillingError,
    BillingNotConfiguredError,
    PaymentProviderError,
    SubscriptionNotFoundError,
    WebhookVerificationError,
)
from .repository import InMemorySubscriptionRepository, SupabaseSubscriptionRepository
from .service import StripeBillingService

__all__ = [
    # Interfaces
    "IBillingService",
    "ISubscriptionRepository",
    # Models
    "Subscription",
    "SubscriptionStatus",
    "CheckoutSession",
    "PortalSession",
    "WebhookResult",
    "PROVISIONAL_PERIOD_SECONDS",
    # Implementations
    "StripeBillingService",
    "InMemorySubscriptionRepository",
    "SupabaseSubscriptionRepository",
    # Exceptions
    "BillingError",
    "BillingNotConfiguredError",
    "PaymentProviderError",
    "SubscriptionNotFoundError",
    "WebhookVerificationError",
]
