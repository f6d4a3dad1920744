"""
Billing module exceptions.

These exceptions are raised by the billing module and can be caught
by API error handlers to return appropriate HTTP responses.
"""

from shared.exceptions import AppError, ExternalServiceError, NotFoundError, ValidationError


class BillingError(AppError):
    """Base exception for billing-related errors."""

    pass


class SubscriptionNotFoundError(NotFoundError):
    """Raised when a user has no subscription to manage."""

    def __init__(self, user_id: str):
        super().__init__(
            "No active subscription found",
            code="SUBSCRIPTION_NOT_FOUND",
        )
        self.user_id = user_id


class PaymentProviderError(ExternalServiceError):
    """Raised when a Stripe API call fails."""

    def __init__(self, message: str = "Payment provider error. Please try again."):
        super().__init__(message, service="stripe", code="PAYMENT_PROVIDER_ERROR")


class WebhookVerificationError(ValidationError):
    """Raised when Stripe webhook signature verification fails."""

    def __init__(self):
        super().__init__(
            "Webhook signature verification failed",
            code="WEBHOOK_VERIFICATION_FAILED",
        )


class BillingNotConfiguredError(BillingError):
    """Raised when a billing operation is attempted without Stripe settings."""

    def __init__(self, setting: str):
        super().__init__(
            "Billing is not configured",
            code="BILLING_NOT_CONFIGURED",
        )
        self.setting = setting
