"""
Authentication service implementation.

Tokens are verified by asking Supabase Auth for the user on every call. No
result is cached, so a session revoked at the provider stops working on the
next request.
"""

import logging
from typing import Any, Optional

from pydantic import ValidationError
from starlette.concurrency import run_in_threadpool

from shared.database import get_supabase_client
from shared.models import AuthenticatedUser

from .interfaces import IAuthService
from .models import ProviderUser

logger = logging.getLogger(__name__)


class SupabaseAuthService(IAuthService):
    """
    Authentication backed by Supabase Auth.

    Args:
        client: Supabase client (defaults to the shared service-role client)
    """

    def __init__(self, client: Optional[Any] = None):
        self._client = client

    @property
    def client(self) -> Any:
        if self._client is None:
            self._client = get_supabase_client()
        return self._client

    async def get_user(self, token: str) -> Optional[AuthenticatedUser]:
        if not token:
            return None

        try:
            # supabase-py is synchronous; keep it off the event loop
            response = await run_in_threadpool(self.client.auth.get_user, token)
        except Exception as e:
            logger.warning("Token verification failed: %s", e)
            return None

        provider_user = getattr(response, "user", None) if response else None
        if provider_user is None:
            logger.warning("Token verification returned no user")
            return None

        try:
            if not isinstance(provider_user, dict):
                provider_user = provider_user.model_dump()
            return ProviderUser.model_validate(provider_user).to_authenticated_user()
        except ValidationError as e:
            logger.warning("Unusable user record from auth provider: %s", e)
            return None


# Module-level instance getter
_service_instance: Optional[SupabaseAuthService] = None


def get_auth_service() -> SupabaseAuthService:
    """Get the auth service singleton."""
    global _service_instance
    if _service_instance is None:
        _service_instance = SupabaseAuthService()
    return _service_instance


def reset_auth_service() -> None:
    """Reset the auth service singleton (for testing)."""
    global _service_instance
    _service_instance = None
