"""
Authentication module.

Resolves bearer tokens to users through the Supabase Auth provider.

Public API:
- IAuthService: Interface for auth operations
- SupabaseAuthService: Provider-backed implementation
- AuthenticatedUser: Minimal user info for the request
- Auth exceptions: MissingTokenError, IdentityMismatchError
"""

from shared.models import AuthenticatedUser

from .interfaces import IAuthService
from .models import ProviderUser, UserInfoResponse
from .service import SupabaseAuthService, get_auth_service, reset_auth_service
from .exceptions import (
    MissingTokenError,
    IdentityMismatchError,
)

__all__ = [
    # Interface
    "IAuthService",
    "SupabaseAuthService",
    "get_auth_service",
    "reset_auth_service",
    # Models
    "AuthenticatedUser",
    "ProviderUser",
    "UserInfoResponse",
    # Exceptions
    "MissingTokenError",
    "IdentityMismatchError",
]
