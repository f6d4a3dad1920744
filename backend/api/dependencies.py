"""
Dependency injection setup for FastAPI.

This module provides the "container" that wires together all module
implementations. Each module exposes its service through an interface,
and this file creates the concrete implementations.

Tests swap implementations with ``app.dependency_overrides`` on the
dependency functions at the bottom of this file.
"""

from typing import TYPE_CHECKING

# Type checking imports for interfaces (avoids circular imports)
if TYPE_CHECKING:
    from modules.auth.interfaces import IAuthService
    from modules.billing.interfaces import IBillingService, ISubscriptionRepository
    from modules.content.interfaces import IContentService
    from modules.feedback.interfaces import IFeedbackService
    from modules.generation.llm import LLMGenerator
    from modules.generation.orchestrator import GenerationOrchestrator
    from modules.security.rate_limiter import RateLimiter
    from modules.usage.interfaces import IUsageService


class ServiceContainer:
    """
    Container for all service instances.

    This class manages the lifecycle of service instances and their
    dependencies. Services are created lazily on first access.

    All services are cached as singletons within the container.
    Use reset() to clear all cached services for testing.
    """

    def __init__(self) -> None:
        self._auth_service: "IAuthService | None" = None
        self._rate_limiter: "RateLimiter | None" = None
        self._subscriptions: "ISubscriptionRepository | None" = None
        self._billing_service: "IBillingService | None" = None
        self._usage_service: "IUsageService | None" = None
        self._content_service: "IContentService | None" = None
        self._feedback_service: "IFeedbackService | None" = None
        self._generator: "LLMGenerator | None" = None
        self._orchestrator: "GenerationOrchestrator | None" = None

    @property
    def auth(self) -> "IAuthService":
        """Get the auth service instance."""
        if self._auth_service is None:
            from modules.auth.service import get_auth_service as get_supabase_auth
            self._auth_service = get_supabase_auth()
        return self._auth_service

    @property
    def rate_limiter(self) -> "RateLimiter":
        """Get the rate limiter over the configured counter storage."""
        if self._rate_limiter is None:
            from modules.security.rate_limiter import LimitsRateLimitStore, RateLimiter
            from shared.config import get_settings
            store = LimitsRateLimitStore.from_uri(get_settings().rate_limit_storage_uri)
            self._rate_limiter = RateLimiter(store=store)
        return self._rate_limiter

    @property
    def subscriptions(self) -> "ISubscriptionRepository":
        """Get the subscription repository instance."""
        if self._subscriptions is None:
            from modules.billing.repository import SupabaseSubscriptionRepository
            from shared.database import get_supabase_client
            self._subscriptions = SupabaseSubscriptionRepository(get_supabase_client())
        return self._subscriptions

    @property
    def billing(self) -> "IBillingService":
        """Get the billing service instance."""
        if self._billing_service is None:
            from modules.billing.service import StripeBillingService
            self._billing_service = StripeBillingService(self.subscriptions)
        return self._billing_service

    @property
    def usage(self) -> "IUsageService":
        """Get the usage service instance."""
        if self._usage_service is None:
            from modules.usage.service import SupabaseUsageService
            from shared.database import get_supabase_client
            self._usage_service = SupabaseUsageService(
                get_supabase_client(),
                self.subscriptions,
            )
        return self._usage_service

    @property
    def content(self) -> "IContentService":
        """Get the saved-content service instance."""
        if self._content_service is None:
            from modules.content.repository import SupabaseContentRepository
            from modules.content.service import ContentService
            from shared.database import get_supabase_client
            self._content_service = ContentService(
                SupabaseContentRepository(get_supabase_client()),
            )
        return self._content_service

    @property
    def feedback(self) -> "IFeedbackService":
        """Get the feedback service instance."""
        if self._feedback_service is None:
            from modules.feedback.service import FeedbackService
            self._feedback_service = FeedbackService()
        return self._feedback_service

    @property
    def generator(self) -> "LLMGenerator":
        """Get the LLM generator instance."""
        if self._generator is None:
            from modules.generation.llm import LLMGenerator
            self._generator = LLMGenerator()
        return self._generator

    @property
    def orchestrator(self) -> "GenerationOrchestrator":
        """Get the generation orchestrator instance."""
        if self._orchestrator is None:
            from modules.generation.orchestrator import GenerationOrchestrator
            self._orchestrator = GenerationOrchestrator(
                usage=self.usage,
                generator=self.generator,
            )
        return self._orchestrator

    def reset(self) -> None:
        """
        Reset all cached services.

        This is primarily for testing - allows tests to get fresh
        service instances with different mock dependencies.
        """
        self._auth_service = None
        self._rate_limiter = None
        self._subscriptions = None
        self._billing_service = None
        self._usage_service = None
        self._content_service = None
        self._feedback_service = None
        self._generator = None
        self._orchestrator = None


# Module-level container singleton
_container: ServiceContainer | None = None


def get_container() -> ServiceContainer:
    """Get the singleton service container."""
    global _container
    if _container is None:
        _container = ServiceContainer()
    return _container


def reset_container() -> None:
    """
    Reset the service container.

    This clears the cached container, so the next call to get_container()
    will create a fresh container with new service instances.

    Primarily used for testing.
    """
    global _container
    _container = None


# FastAPI dependency functions
# These are the functions that should be used in route Depends() calls


def get_auth_service() -> "IAuthService":
    """FastAPI dependency for auth service."""
    return get_container().auth


def get_rate_limiter() -> "RateLimiter":
    """FastAPI dependency for the rate limiter."""
    return get_container().rate_limiter


def get_billing_service() -> "IBillingService":
    """FastAPI dependency for billing service."""
    return get_container().billing


def get_usage_service() -> "IUsageService":
    """FastAPI dependency for usage service."""
    return get_container().usage


def get_content_service() -> "IContentService":
    """FastAPI dependency for saved-content service."""
    return get_container().content


def get_feedback_service() -> "IFeedbackService":
    """FastAPI dependency for the feedback service."""
    return get_container().feedback


def get_orchestrator() -> "GenerationOrchestrator":
    """FastAPI dependency for the generation orchestrator."""
    return get_container().orchestrator
