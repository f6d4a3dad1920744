"""
Content repository for database access.

Encapsulates all Supabase queries against the ``user_content`` table.
"""

import uuid
from datetime import datetime, timezone
from typing import Any, Optional

from shared.repository import BaseRepository
from modules.usage.models import ContentType

from .models import ContentCreate, SavedContent


class InMemoryContentRepository:
    """
    Content storage backed by a dict.

    For testing and development. Use SupabaseContentRepository for production.
    """

    def __init__(self) -> None:
        self._rows: dict[str, SavedContent] = {}

    def insert(self, user_id: str, data: ContentCreate) -> SavedContent:
        now = datetime.now(timezone.utc)
        row = SavedContent(
            id=str(uuid.uuid4()),
            user_id=user_id,
            created_at=now,
            updated_at=now,
            **data.model_dump(),
        )
        self._rows[row.id] = row
        return row

    def get(self, content_id: str, user_id: str) -> Optional[SavedContent]:
        row = self._rows.get(content_id)
        return row if row is not None and row.user_id == user_id else None

    def update(self, content_id: str, user_id: str, changes: dict) -> Optional[SavedContent]:
        row = self.get(content_id, user_id)
        if row is None:
            return None
        updated = row.model_copy(update={**changes, "updated_at": datetime.now(timezone.utc)})
        self._rows[content_id] = updated
        return updated

    def delete(self, content_id: str, user_id: str) -> bool:
        if self.get(content_id, user_id) is None:
            return False
        del self._rows[content_id]
        return True

    def list(self, user_id: str, content_type: Optional[ContentType] = None) -> list[SavedContent]:
        rows = [
            row for row in self._rows.values()
            if row.user_id == user_id and (content_type is None or row.content_type == content_type)
        ]
        return sorted(rows, key=lambda row: row.created_at, reverse=True)


class SupabaseContentRepository(BaseRepository[SavedContent]):
    """
    Repository for saved content.

    Every query filters on ``user_id`` as well as the row ID, so a row
    owned by someone else behaves exactly like a missing one.
    """

    TABLE = "user_content"

    def insert(self, user_id: str, data: ContentCreate) -> SavedContent:
        now = self._now_iso()
        row = {
            "user_id": user_id,
            **data.model_dump(mode="json"),
            "created_at": now,
            "updated_at": now,
        }
        result = self._db.table(self.TABLE).insert(row).execute()
        return self._map_to_content(result.data[0])

    def get(self, content_id: str, user_id: str) -> Optional[SavedContent]:
        result = (
            self._db.table(self.TABLE)
            .select("*")
            .eq("id", content_id)
            .eq("user_id", user_id)
            .execute()
        )
        return self._map_to_content(result.data[0]) if result.data else None

    def update(self, content_id: str, user_id: str, changes: dict) -> Optional[SavedContent]:
        result = (
            self._db.table(self.TABLE)
            .update({**changes, "updated_at": self._now_iso()})
            .eq("id", content_id)
            .eq("user_id", user_id)
            .execute()
        )
        return self._map_to_content(result.data[0]) if result.data else None

    def delete(self, content_id: str, user_id: str) -> bool:
        result = (
            self._db.table(self.TABLE)
            .delete()
            .eq("id", content_id)
            .eq("user_id", user_id)
            .execute()
        )
        return bool(result.data)

    def list(self, user_id: str, content_type: Optional[ContentType] = None) -> list[SavedContent]:
        query = self._db.table(self.TABLE).select("*").eq("user_id", user_id)
        if content_type is not None:
            query = query.eq("content_type", content_type.value)
        result = query.order("created_at", desc=True).execute()
        return [self._map_to_content(row) for row in result.data]

    # -------------------------------------------------------------------------
    # Mapping helpers
    # -------------------------------------------------------------------------

    def _map_to_content(self, row: dict[str, Any]) -> SavedContent:
        return SavedContent(
            id=row["id"],
            user_id=row["user_id"],
            title=row.get("title") or "",
            content=row.get("content") or "",
            content_type=ContentType(row["content_type"]),
            topic=row.get("topic") or "",
            bible_verse=row.get("bible_verse") or "",
            style=row.get("style") or "",
            structured_data=row.get("structured_data"),
            created_at=row.get("created_at"),
            updated_at=row.get("updated_at"),
        )
