"""
Bearer-token authentication.

Extracts the access token from the Authorization header and resolves it
through the auth service. Failures of any kind resolve to "no user"; the
caller decides whether that means 401.
"""

import logging
from typing import Optional

from fastapi import Request

from modules.auth.interfaces import IAuthService
from shared.models import AuthenticatedUser

logger = logging.getLogger(__name__)

BEARER_PREFIX = "bearer "


def extract_bearer_token(authorization: Optional[str]) -> Optional[str]:
    """
    Return the token from an ``Authorization: Bearer <token>`` header value.

    Returns None for a missing header, another scheme, or an empty token.
    """
    if not authorization or not authorization.lower().startswith(BEARER_PREFIX):
        return None
    token = authorization[len(BEARER_PREFIX):].strip()
    return token or None


async def authenticate_request(
    request: Request,
    auth_service: IAuthService,
) -> Optional[AuthenticatedUser]:
    """
    Resolve the request's bearer token to a user.

    Returns:
        AuthenticatedUser, or None if there is no valid token
    """
    token = extract_bearer_token(request.headers.get("authorization"))
    if token is None:
        return None

    user = await auth_service.get_user(token)
    if user is None:
        logger.info("Rejected bearer token on %s %s", request.method, request.url.path)
    return user
