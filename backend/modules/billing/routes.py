"""
Billing endpoints.

Checkout and portal sessions for the signed-in user, and the Stripe
webhook receiver. The session endpoints repeat the caller's identity in
the body; it must match the bearer token.
"""

from typing import Any

from fastapi import APIRouter, Depends

from api.dependencies import get_billing_service
from api.middleware.security import ROUTE_METHODS, SecurityContext, with_security
from modules.auth.exceptions import IdentityMismatchError
from modules.security.models import LimitClass
from modules.security.schemas import CHECKOUT_SCHEMA, PORTAL_SCHEMA

from .interfaces import IBillingService

router = APIRouter()


@router.api_route("/create-checkout-session", methods=ROUTE_METHODS)
@with_security(limit_class=LimitClass.CHECKOUT, schema=CHECKOUT_SCHEMA)
async def create_checkout_session(
    ctx: SecurityContext,
    service: IBillingService = Depends(get_billing_service),
) -> dict[str, Any]:
    """Start a Stripe checkout for a subscription."""
    user = ctx.require_user()
    if ctx.data["userId"] != user.id or ctx.data["userEmail"].strip().lower() != user.email.lower():
        raise IdentityMismatchError()

    session = await service.create_checkout_session(user, ctx.data["priceId"])
    return session.to_response()


@router.api_route("/create-portal-session", methods=ROUTE_METHODS)
@with_security(limit_class=LimitClass.CHECKOUT, schema=PORTAL_SCHEMA)
async def create_portal_session(
    ctx: SecurityContext,
    service: IBillingService = Depends(get_billing_service),
) -> dict[str, Any]:
    """Open the Stripe customer portal for an active subscriber."""
    user = ctx.require_user()
    if ctx.data["userId"] != user.id:
        raise IdentityMismatchError()

    portal = await service.create_portal_session(user)
    return portal.to_response()


@router.api_route("/webhook", methods=ROUTE_METHODS)
@with_security(require_auth=False, limit_class=None)
async def stripe_webhook(
    ctx: SecurityContext,
    service: IBillingService = Depends(get_billing_service),
) -> dict[str, Any]:
    """
    Receive Stripe events.

    The raw body is verified against the Stripe-Signature header before
    anything is read from it. Events without a handler are acknowledged.
    """
    payload = await ctx.request.body()
    signature = ctx.request.headers.get("stripe-signature", "")
    await service.handle_webhook(payload, signature)
    return {"received": True}
