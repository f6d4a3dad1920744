"""
Content library module.

Ownership-scoped storage for a user's saved sermons and studies.
"""

from .exceptions import ContentNotFoundError, ContentStorageError
from .interfaces import IContentRepository, IContentService
from .models import ContentCreate, ContentUpdate, SavedContent
from .repository import InMemoryContentRepository, SupabaseContentRepository
from .service import ContentService

__all__ = [
    "ContentCreate",
    "ContentNotFoundError",
    "ContentService",
    "ContentStorageError",
    "ContentUpdate",
    "IContentRepository",
    "IContentService",
    "InMemoryContentRepository",
    "SavedContent",
    "SupabaseContentRepository",
]
