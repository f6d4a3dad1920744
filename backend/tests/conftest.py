"""
Shared test fixtures and utilities.

This module provides common test infrastructure used across all test modules:
an auth service that resolves fixed tokens, in-memory storage for every
module, and an app whose dependencies are wired to them.
"""

from typing import Optional
from unittest.mock import AsyncMock, MagicMock

import pytest
from fastapi.testclient import TestClient

from api.app import create_app
from api.dependencies import (
    get_auth_service,
    get_billing_service,
    get_content_service,
    get_feedback_service,
    get_orchestrator,
    get_rate_limiter,
    get_usage_service,
    reset_container,
)
from modules.auth.service import reset_auth_service
from modules.billing.repository import InMemorySubscriptionRepository
from modules.billing.service import StripeBillingService
from modules.content.repository import InMemoryContentRepository
from modules.content.service import ContentService
from modules.feedback.service import FeedbackService
from modules.generation.models import GenerationResult, TokenUsage
from modules.generation.orchestrator import GenerationOrchestrator
from modules.security.rate_limiter import RateLimiter
from modules.usage.service import UsageService
from shared.config import Settings
from shared.models import AuthenticatedUser

TEST_USER_ID = "0b6f3a1e-6a3c-4c4f-9d43-2d5b3f0b9a11"
TEST_USER_EMAIL = "pastor@example.com"
TEST_TOKEN = "valid-test-token"
OTHER_USER_ID = "7d1c2e9a-1f4b-4b8e-a6f0-5c3d2b1a0e99"
OTHER_TOKEN = "other-test-token"

SAMPLE_SERMON = """# Walking in Grace

## PRIMARY SCRIPTURE
Ephesians 2:8-9

## INTRODUCTION
Grace meets us where we are.

## BIBLICAL CONTEXT
Paul writes to a church in Ephesus.

## EXEGETICAL INSIGHTS
The Greek word charis means unearned favor.

## SERMON POINTS
### Point 1: Grace Is a Gift
We cannot earn it.

### Point 2: Grace Transforms
It changes how we live.

## PRACTICAL APPLICATION
Extend grace to someone this week.

## CONCLUSION
Grace is the beginning and the end.

## CLOSING PRAYER
Lord, teach us to live by your grace. Amen."""


class FakeAuthService:
    """Resolves a fixed set of bearer tokens to users."""

    def __init__(self, users: Optional[dict[str, AuthenticatedUser]] = None):
        self.users = users or {}

    async def get_user(self, token: str) -> Optional[AuthenticatedUser]:
        return self.users.get(token)


def make_generator(content: str = "# Generated\n\nSome content") -> MagicMock:
    """A stand-in LLMGenerator whose completions succeed with ``content``."""
    generator = MagicMock()
    generator.complete = AsyncMock(return_value=GenerationResult(
        content=content,
        usage=TokenUsage(prompt_tokens=10, completion_tokens=20, total_tokens=30),
    ))
    return generator


@pytest.fixture(autouse=True)
def reset_singletons():
    """Reset module singletons and the service container around each test."""
    reset_auth_service()
    reset_container()
    yield
    reset_auth_service()
    reset_container()


@pytest.fixture
def test_user() -> AuthenticatedUser:
    return AuthenticatedUser(id=TEST_USER_ID, email=TEST_USER_EMAIL, email_verified=True)


@pytest.fixture
def other_user() -> AuthenticatedUser:
    return AuthenticatedUser(id=OTHER_USER_ID, email="other@example.com")


@pytest.fixture
def auth_service(test_user, other_user) -> FakeAuthService:
    return FakeAuthService({TEST_TOKEN: test_user, OTHER_TOKEN: other_user})


@pytest.fixture
def auth_headers() -> dict[str, str]:
    """Authorization headers for the test user."""
    return {"Authorization": f"Bearer {TEST_TOKEN}"}


@pytest.fixture
def other_headers() -> dict[str, str]:
    return {"Authorization": f"Bearer {OTHER_TOKEN}"}


@pytest.fixture
def test_settings() -> Settings:
    return Settings(
        stripe_secret_key="sk_test_123",
        stripe_webhook_secret="whsec_test_123",
        stripe_price_id="price_test_123",
        frontend_url="https://app.example.com",
        free_generation_limit=3,
    )


@pytest.fixture
def subscriptions() -> InMemorySubscriptionRepository:
    return InMemorySubscriptionRepository()


@pytest.fixture
def usage_service(subscriptions) -> UsageService:
    return UsageService(subscriptions, free_limit=3)


@pytest.fixture
def content_service() -> ContentService:
    return ContentService(InMemoryContentRepository())


@pytest.fixture
def feedback_service() -> FeedbackService:
    return FeedbackService()


@pytest.fixture
def billing_service(subscriptions, test_settings) -> StripeBillingService:
    return StripeBillingService(subscriptions, settings=test_settings)


@pytest.fixture
def generator() -> MagicMock:
    return make_generator()


@pytest.fixture
def orchestrator(usage_service, generator) -> GenerationOrchestrator:
    return GenerationOrchestrator(usage=usage_service, generator=generator)


@pytest.fixture
def rate_limiter() -> RateLimiter:
    return RateLimiter()


@pytest.fixture
def app(
    auth_service,
    rate_limiter,
    usage_service,
    content_service,
    billing_service,
    feedback_service,
    orchestrator,
):
    """Create a fresh app wired to in-memory services."""
    app = create_app()
    app.dependency_overrides[get_auth_service] = lambda: auth_service
    app.dependency_overrides[get_rate_limiter] = lambda: rate_limiter
    app.dependency_overrides[get_usage_service] = lambda: usage_service
    app.dependency_overrides[get_content_service] = lambda: content_service
    app.dependency_overrides[get_billing_service] = lambda: billing_service
    app.dependency_overrides[get_feedback_service] = lambda: feedback_service
    app.dependency_overrides[get_orchestrator] = lambda: orchestrator
    return app


@pytest.fixture
def client(app) -> TestClient:
    return TestClient(app)
