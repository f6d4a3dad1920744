"""
Authentication module interface.

Other modules should depend on IAuthService, not the concrete implementation.
This enables testing with fakes and swapping the identity provider.
"""

from typing import Protocol, Optional, runtime_checkable

from shared.models import AuthenticatedUser


@runtime_checkable
class IAuthService(Protocol):
    """
    Interface for authentication operations.

    This protocol defines the contract that the auth module exposes
    to other modules. Implementations must provide all these methods.
    """

    async def get_user(self, token: str) -> Optional[AuthenticatedUser]:
        """
        Resolve a bearer token to a user.

        Args:
            token: Access token issued by the auth provider

        Returns:
            AuthenticatedUser, or None if the token is missing, invalid,
            expired, revoked, the provider could not be reached, or its user
            record could not be read
        """
        ...
