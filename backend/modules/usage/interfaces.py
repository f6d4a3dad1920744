"""
Usage tracking module interface.

Other modules should depend on IUsageService, not the concrete implementation.
The generation orchestrator only needs an entitlement read before the LLM
call and a usage write after it.
"""

from typing import Protocol, runtime_checkable

from .models import ContentType, Entitlement


@runtime_checkable
class IUsageService(Protocol):
    """
    Interface for usage metering and entitlement.
    """

    async def get_entitlement(self, user_id: str) -> Entitlement:
        """
        Decide whether a user may generate.

        An active, unexpired subscription wins; otherwise the lifetime
        usage count is compared with the free-tier limit.

        Raises:
            UsageLookupError: If the usage count cannot be read
        """
        ...

    async def count_usage(self, user_id: str) -> int:
        """
        Count a user's lifetime generations.

        Raises:
            UsageLookupError: If the count cannot be read
        """
        ...

    async def record_usage(self, user_id: str, content_type: ContentType) -> bool:
        """
        Record one successful generation.

        Best effort: storage failures are logged, never raised.

        Returns:
            True if the record was written
        """
        ...
