"""
Tests for the request-security pipeline.

Uses a small app with stub endpoints so each stage can be observed
independently of the real routes.
"""

from unittest.mock import AsyncMock

import pytest
from fastapi import APIRouter, FastAPI
from fastapi.testclient import TestClient

from api.dependencies import get_auth_service, get_rate_limiter
from api.middleware.auth import extract_bearer_token
from api.middleware.security import ROUTE_METHODS, SECURITY_HEADERS, SecurityContext, with_security
from modules.security.models import RateLimitConfig
from modules.security.rate_limiter import RateLimiter
from modules.security.validation import FieldRule, FieldType, SanitizeMode, define_schema
from modules.usage.exceptions import UsageLimitReachedError
from tests.conftest import TEST_TOKEN, TEST_USER_ID

GUARDED_SCHEMA = define_schema(
    name=FieldRule(FieldType.STRING, required=True, max_length=50, sanitize=SanitizeMode.TEXT),
)


@pytest.fixture
def handler_calls() -> list:
    return []


@pytest.fixture
def guarded_limiter() -> RateLimiter:
    return RateLimiter(limits={"guarded": RateLimitConfig(requests=2, window_seconds=60)})


@pytest.fixture
def guarded_client(auth_service, guarded_limiter, handler_calls) -> TestClient:
    router = APIRouter()

    @router.api_route("/guarded", methods=ROUTE_METHODS)
    @with_security(limit_class="guarded", schema=GUARDED_SCHEMA)
    async def guarded(ctx: SecurityContext):
        handler_calls.append(ctx)
        return {"hello": ctx.data["name"], "user": ctx.require_user().id}

    @router.api_route("/public", methods=ROUTE_METHODS)
    @with_security(require_auth=False, limit_class="guarded", allowed_methods=("GET",))
    async def public(ctx: SecurityContext):
        return {"client": ctx.client_id, "user": ctx.user.id if ctx.user else None}

    @router.api_route("/boom", methods=ROUTE_METHODS)
    @with_security(limit_class=None)
    async def boom(ctx: SecurityContext):
        raise RuntimeError("secret internal detail")

    @router.api_route("/quota", methods=ROUTE_METHODS)
    @with_security(limit_class=None)
    async def quota(ctx: SecurityContext):
        raise UsageLimitReachedError(total_usage=3, limit=3)

    app = FastAPI()
    app.include_router(router)
    app.dependency_overrides[get_auth_service] = lambda: auth_service
    app.dependency_overrides[get_rate_limiter] = lambda: guarded_limiter
    return TestClient(app)


def assert_security_headers(response) -> None:
    for name, value in SECURITY_HEADERS.items():
        assert response.headers[name] == value


class TestBearerToken:
    @pytest.mark.parametrize(
        "header, expected",
        [
            ("Bearer abc", "abc"),
            ("bearer abc", "abc"),
            ("Bearer   abc  ", "abc"),
            ("Basic abc", None),
            ("Bearer ", None),
            (None, None),
        ],
    )
    def test_extract(self, header, expected):
        assert extract_bearer_token(header) == expected


class TestPipeline:
    def test_success(self, guarded_client, auth_headers):
        response = guarded_client.post("/guarded", json={"name": "  Ada  "}, headers=auth_headers)

        assert response.status_code == 200
        assert response.json() == {"hello": "Ada", "user": TEST_USER_ID}
        assert_security_headers(response)
        assert response.headers["X-RateLimit-Limit"] == "2"
        assert response.headers["X-RateLimit-Remaining"] == "1"
        assert "X-RateLimit-Reset" in response.headers

    def test_method_not_allowed(self, guarded_client, auth_headers, handler_calls):
        response = guarded_client.get("/guarded", headers=auth_headers)

        assert response.status_code == 405
        assert response.json() == {"error": "Method GET not allowed"}
        assert response.headers["Allow"] == "POST"
        assert_security_headers(response)
        assert handler_calls == []

    def test_method_check_runs_before_auth(self, guarded_client):
        assert guarded_client.delete("/guarded").status_code == 405

    def test_missing_token(self, guarded_client, handler_calls):
        response = guarded_client.post("/guarded", json={"name": "Ada"})

        assert response.status_code == 401
        assert response.json()["error"] == "Authentication required"
        assert_security_headers(response)
        assert handler_calls == []

    def test_invalid_token(self, guarded_client):
        response = guarded_client.post(
            "/guarded", json={"name": "Ada"}, headers={"Authorization": "Bearer nope"},
        )
        assert response.status_code == 401

    def test_rejected_auth_consumes_no_budget(self, guarded_client, guarded_limiter, auth_headers):
        for _ in range(5):
            guarded_client.post("/guarded", json={"name": "Ada"})

        assert guarded_limiter.headers(f"user:{TEST_USER_ID}", "guarded")["X-RateLimit-Remaining"] == "2"
        assert guarded_client.post("/guarded", json={"name": "Ada"}, headers=auth_headers).status_code == 200

    def test_rate_limited(self, guarded_client, auth_headers, handler_calls):
        for _ in range(2):
            guarded_client.post("/guarded", json={"name": "Ada"}, headers=auth_headers)

        response = guarded_client.post("/guarded", json={"name": "Ada"}, headers=auth_headers)

        assert response.status_code == 429
        body = response.json()
        assert body["code"] == "RATE_LIMITED"
        assert body["retryAfter"] >= 1
        assert response.headers["Retry-After"] == str(body["retryAfter"])
        assert response.headers["X-RateLimit-Remaining"] == "0"
        assert_security_headers(response)
        assert len(handler_calls) == 2

    def test_rate_limit_runs_before_validation(self, guarded_client, auth_headers):
        for _ in range(2):
            guarded_client.post("/guarded", json={"bad": True}, headers=auth_headers)
        response = guarded_client.post("/guarded", json={"bad": True}, headers=auth_headers)
        assert response.status_code == 429

    def test_validation_error(self, guarded_client, auth_headers, handler_calls):
        response = guarded_client.post(
            "/guarded", json={"name": "Ada", "isAdmin": True}, headers=auth_headers,
        )

        assert response.status_code == 400
        body = response.json()
        assert body["error"] == "Invalid request data"
        assert body["details"] == ["Unexpected fields: isAdmin"]
        assert_security_headers(response)
        assert handler_calls == []

    def test_malformed_json(self, guarded_client, auth_headers):
        response = guarded_client.post(
            "/guarded",
            content=b"{not json",
            headers={**auth_headers, "Content-Type": "application/json"},
        )
        assert response.status_code == 400
        assert response.json()["details"] == ["Request body must be a valid JSON object"]

    def test_unexpected_error_is_generic(self, guarded_client, auth_headers):
        response = guarded_client.post("/boom", headers=auth_headers)

        assert response.status_code == 500
        assert response.json() == {"error": "An unexpected error occurred"}
        assert "secret" not in response.text
        assert_security_headers(response)

    def test_app_error_maps_to_status(self, guarded_client, auth_headers):
        response = guarded_client.post("/quota", headers=auth_headers)

        assert response.status_code == 403
        assert response.json()["limitReached"] is True
        assert response.json()["totalUsage"] == 3

    def test_unlimited_class_has_no_rate_limit_headers(self, guarded_client, auth_headers):
        response = guarded_client.post("/quota", headers=auth_headers)
        assert "X-RateLimit-Limit" not in response.headers


class TestOptionalAuth:
    def test_anonymous_keyed_by_forwarded_ip(self, guarded_client):
        response = guarded_client.get("/public", headers={"X-Forwarded-For": "203.0.113.9, 10.0.0.1"})
        assert response.json() == {"client": "ip:203.0.113.9", "user": None}

    def test_token_resolved_when_present(self, guarded_client, auth_headers):
        response = guarded_client.get("/public", headers=auth_headers)
        assert response.json() == {"client": f"user:{TEST_USER_ID}", "user": TEST_USER_ID}

    def test_auth_service_failure_is_unauthenticated(self, guarded_client, auth_service):
        auth_service.get_user = AsyncMock(return_value=None)
        response = guarded_client.get("/public", headers={"Authorization": f"Bearer {TEST_TOKEN}"})
        assert response.status_code == 200
        assert response.json()["user"] is None
