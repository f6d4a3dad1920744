"""
Usage tracking module.

Meters successful generations and decides entitlement: an active
subscription is unlimited, everyone else gets a lifetime free-tier cap.

Public API:
- IUsageService: Interface for usage operations
- Entitlement: Result of the entitlement check
- UsageRecord: Single usage record
- ContentType: Kinds of metered content
"""

from .interfaces import IUsageService
from .models import UNLIMITED, ContentType, Entitlement, UsageRecord
from .exceptions import UsageLimitReachedError, UsageLookupError
from .service import (
    UsageService,
    SupabaseUsageService,
)

__all__ = [
    # Interfaces
    "IUsageService",
    # Models
    "ContentType",
    "Entitlement",
    "UsageRecord",
    "UNLIMITED",
    # Exceptions
    "UsageLimitReachedError",
    "UsageLookupError",
    # Service
    "UsageService",
    "SupabaseUsageService",
]
