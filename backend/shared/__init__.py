"""
Shared infrastructure for the ChurchContent backend.

This package contains cross-cutting concerns that are used by multiple modules:
- config: Centralized settings management
- database: Supabase client factory
- exceptions: Base exception classes
- logging_config: Root logging setup

Note: Business logic should NOT go here. This is for infrastructure only.
"""

from .config import Settings, get_settings, validate_environment
from .database import get_supabase_client, reset_client_cache
from .exceptions import (
    AppError,
    NotFoundError,
    ValidationError,
    AuthenticationError,
    AuthorizationError,
    QuotaExceededError,
    RateLimitError,
    ExternalServiceError,
)
from .models import AuthenticatedUser

__all__ = [
    "Settings",
    "get_settings",
    "validate_environment",
    "get_supabase_client",
    "reset_client_cache",
    "AppError",
    "NotFoundError",
    "ValidationError",
    "AuthenticationError",
    "AuthorizationError",
    "QuotaExceededError",
    "RateLimitError",
    "ExternalServiceError",
    "AuthenticatedUser",
]
