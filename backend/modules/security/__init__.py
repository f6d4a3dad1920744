"""
Security module.

Provides the building blocks of the request-security pipeline: the
fixed-window rate limiter and the declarative request validator.

Public API:
    - RateLimiter: Fixed-window limiter over an IRateLimitStore
    - LimitsRateLimitStore: Store backed by a `limits` storage backend
    - client_id_for: Rate-limit identity for a request
    - validate / validate_request: Schema validation and sanitization
    - LimitClass, DEFAULT_RATE_LIMITS: Limit classes and their budgets
"""

from .exceptions import RateLimitExceededError, RequestValidationError
from .interfaces import IRateLimitStore
from .models import (
    DEFAULT_RATE_LIMITS,
    LimitClass,
    RateLimitConfig,
    RateLimitResult,
    RateLimitWindow,
    ValidationResult,
)
from .rate_limiter import LimitsRateLimitStore, RateLimiter, client_id_for
from .validation import (
    Check,
    FieldRule,
    FieldType,
    SanitizeMode,
    define_schema,
    is_uuid,
    sanitize_html,
    sanitize_string,
    validate,
    validate_email,
    validate_request,
)

__all__ = [
    # Rate limiting
    "RateLimiter",
    "LimitsRateLimitStore",
    "IRateLimitStore",
    "client_id_for",
    "LimitClass",
    "RateLimitConfig",
    "RateLimitWindow",
    "RateLimitResult",
    "DEFAULT_RATE_LIMITS",
    # Validation
    "validate",
    "validate_request",
    "define_schema",
    "FieldRule",
    "FieldType",
    "SanitizeMode",
    "Check",
    "ValidationResult",
    "sanitize_string",
    "sanitize_html",
    "validate_email",
    "is_uuid",
    # Exceptions
    "RateLimitExceededError",
    "RequestValidationError",
]
