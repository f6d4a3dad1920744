"""
Content library interface.

Every method takes the caller's ``user_id``; implementations must scope
each query to it.
"""

from typing import Protocol, Optional, runtime_checkable

from modules.usage.models import ContentType

from .models import ContentCreate, ContentUpdate, SavedContent


@runtime_checkable
class IContentRepository(Protocol):
    """Synchronous storage for saved content."""

    def insert(self, user_id: str, data: ContentCreate) -> SavedContent:
        ...

    def get(self, content_id: str, user_id: str) -> Optional[SavedContent]:
        ...

    def update(self, content_id: str, user_id: str, changes: dict) -> Optional[SavedContent]:
        """Returns None if no row owned by ``user_id`` matched."""
        ...

    def delete(self, content_id: str, user_id: str) -> bool:
        """Returns False if no row owned by ``user_id`` matched."""
        ...

    def list(self, user_id: str, content_type: Optional[ContentType] = None) -> list[SavedContent]:
        """Newest first."""
        ...


@runtime_checkable
class IContentService(Protocol):
    """Ownership-scoped CRUD over a user's content library."""

    async def save(self, user_id: str, data: ContentCreate) -> SavedContent:
        ...

    async def update(self, user_id: str, content_id: str, data: ContentUpdate) -> SavedContent:
        """
        Raises:
            ContentNotFoundError: If the content is missing or not owned
        """
        ...

    async def delete(self, user_id: str, content_id: str) -> None:
        """
        Raises:
            ContentNotFoundError: If the content is missing or not owned
        """
        ...

    async def list(self, user_id: str, content_type: Optional[ContentType] = None) -> list[SavedContent]:
        ...
