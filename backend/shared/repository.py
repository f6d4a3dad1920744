"""
Base repository class for database access.

Provides a common abstraction layer for all repositories, encapsulating
Supabase client access and providing shared utilities for data operations.
"""

from datetime import datetime, timezone
from typing import TypeVar, Generic
from supabase import Client


T = TypeVar("T")


class BaseRepository(Generic[T]):
    """
    Base class for all repositories.

    Subclasses implement table-specific queries and map rows to Pydantic
    models internally. Repositories do not check ownership; services pass
    the caller's ``user_id`` into every query.

    Example:
        class ContentRepository(BaseRepository[SavedContent]):
            def get(self, content_id: str, user_id: str) -> Optional[SavedContent]:
                result = (
                    self._db.table("user_content").select("*")
                    .eq("id", content_id).eq("user_id", user_id).execute()
                )
                return self._map(result.data[0]) if result.data else None
    """

    def __init__(self, db: Client) -> None:
        """
        Initialize the repository with a Supabase client.

        Args:
            db: Supabase client instance for database operations.
        """
        self._db = db

    @staticmethod
    def _now_iso() -> str:
        """Current UTC time as an ISO 8601 string for timestamp columns."""
        return datetime.now(timezone.utc).isoformat()
