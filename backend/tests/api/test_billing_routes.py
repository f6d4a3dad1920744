"""Tests for the checkout, portal and webhook endpoints."""

import json
from unittest.mock import MagicMock, patch

import pytest
import stripe

from modules.billing.models import Subscription, SubscriptionStatus
from tests.conftest import OTHER_USER_ID, TEST_USER_EMAIL, TEST_USER_ID


def checkout_payload(**overrides):
    return {
        "priceId": "price_test_123",
        "userId": TEST_USER_ID,
        "userEmail": TEST_USER_EMAIL,
        **overrides,
    }


@pytest.fixture
def stripe_checkout():
    session = MagicMock(id="cs_test_1", url="https://checkout.stripe.com/c/cs_test_1")
    with patch("stripe.checkout.Session.create", return_value=session) as create:
        yield create


class TestCheckoutSession:
    def test_creates_session(self, client, auth_headers, stripe_checkout):
        response = client.post(
            "/api/create-checkout-session", json=checkout_payload(), headers=auth_headers,
        )

        assert response.status_code == 200
        assert response.json() == {
            "sessionId": "cs_test_1",
            "url": "https://checkout.stripe.com/c/cs_test_1",
        }
        kwargs = stripe_checkout.call_args.kwargs
        assert kwargs["metadata"] == {"userId": TEST_USER_ID, "userEmail": TEST_USER_EMAIL}
        assert kwargs["success_url"] == "https://app.example.com/dashboard?success=true"

    def test_email_comparison_ignores_case(self, client, auth_headers, stripe_checkout):
        response = client.post(
            "/api/create-checkout-session",
            json=checkout_payload(userEmail="Pastor@Example.com"),
            headers=auth_headers,
        )
        assert response.status_code == 200

    def test_other_user_id(self, client, auth_headers, stripe_checkout):
        response = client.post(
            "/api/create-checkout-session",
            json=checkout_payload(userId=OTHER_USER_ID),
            headers=auth_headers,
        )

        assert response.status_code == 403
        assert response.json()["code"] == "IDENTITY_MISMATCH"
        stripe_checkout.assert_not_called()

    def test_other_email(self, client, auth_headers, stripe_checkout):
        response = client.post(
            "/api/create-checkout-session",
            json=checkout_payload(userEmail="someone@example.com"),
            headers=auth_headers,
        )
        assert response.status_code == 403

    def test_price_id_format(self, client, auth_headers, stripe_checkout):
        response = client.post(
            "/api/create-checkout-session",
            json=checkout_payload(priceId="prod_123"),
            headers=auth_headers,
        )
        assert response.status_code == 400
        assert "priceId failed validation" in response.json()["details"]

    def test_stripe_failure(self, client, auth_headers):
        with patch("stripe.checkout.Session.create", side_effect=stripe.StripeError("card declined")):
            response = client.post(
                "/api/create-checkout-session", json=checkout_payload(), headers=auth_headers,
            )

        assert response.status_code == 500
        assert "card declined" not in response.text

    def test_checkout_rate_limit(self, client, auth_headers, stripe_checkout):
        statuses = [
            client.post(
                "/api/create-checkout-session", json=checkout_payload(), headers=auth_headers,
            ).status_code
            for _ in range(6)
        ]
        assert statuses == [200] * 5 + [429]


class TestPortalSession:
    def test_no_subscription(self, client, auth_headers):
        response = client.post(
            "/api/create-portal-session", json={"userId": TEST_USER_ID}, headers=auth_headers,
        )

        assert response.status_code == 404
        assert response.json()["error"] == "No active subscription found"

    def test_active_subscription(self, client, auth_headers, subscriptions):
        subscriptions.upsert(Subscription(
            user_id=TEST_USER_ID,
            stripe_customer_id="cus_1",
            stripe_subscription_id="sub_1",
            status=SubscriptionStatus.ACTIVE,
        ))
        portal = MagicMock(url="https://billing.stripe.com/p/session_1")

        with patch("stripe.billing_portal.Session.create", return_value=portal) as create:
            response = client.post(
                "/api/create-portal-session", json={"userId": TEST_USER_ID}, headers=auth_headers,
            )

        assert response.status_code == 200
        assert response.json() == {"url": "https://billing.stripe.com/p/session_1"}
        assert create.call_args.kwargs["customer"] == "cus_1"

    def test_other_user_id(self, client, auth_headers):
        response = client.post(
            "/api/create-portal-session", json={"userId": OTHER_USER_ID}, headers=auth_headers,
        )
        assert response.status_code == 403


class TestWebhook:
    def test_bad_signature(self, client, subscriptions):
        error = stripe.SignatureVerificationError("bad signature", "t=1,v1=abc")
        with patch("stripe.Webhook.construct_event", side_effect=error):
            response = client.post(
                "/api/webhook", content=b"{}", headers={"stripe-signature": "t=1,v1=abc"},
            )

        assert response.status_code == 400
        assert response.json()["code"] == "WEBHOOK_VERIFICATION_FAILED"

    def test_checkout_completed_activates_subscription(self, client, subscriptions):
        body = json.dumps({
            "id": "evt_1",
            "type": "checkout.session.completed",
            "data": {"object": {
                "id": "cs_1",
                "customer": "cus_1",
                "subscription": "sub_1",
                "metadata": {"userId": TEST_USER_ID},
            }},
        }).encode()

        with patch("stripe.Webhook.construct_event") as construct:
            response = client.post(
                "/api/webhook", content=body, headers={"stripe-signature": "t=1,v1=ok"},
            )

        assert response.status_code == 200
        assert response.json() == {"received": True}
        assert construct.call_args.args == (body, "t=1,v1=ok", "whsec_test_123")
        assert subscriptions.get_by_user(TEST_USER_ID).is_active()

    def test_unhandled_event_is_acknowledged(self, client):
        body = json.dumps({"type": "customer.created", "data": {"object": {}}}).encode()
        with patch("stripe.Webhook.construct_event"):
            response = client.post("/api/webhook", content=body, headers={"stripe-signature": "sig"})

        assert response.status_code == 200
        assert response.json() == {"received": True}

    def test_webhook_needs_no_token(self, client):
        with patch("stripe.Webhook.construct_event", side_effect=ValueError("bad payload")):
            response = client.post("/api/webhook", content=b"not json")
        assert response.status_code == 400
