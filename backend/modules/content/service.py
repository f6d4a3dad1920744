"""
Content library service.

Thin ownership-enforcing layer over the content repository. Repository
calls are synchronous and run on the threadpool.
"""

import logging
from typing import Optional

from starlette.concurrency import run_in_threadpool

from modules.usage.models import ContentType

from .exceptions import ContentNotFoundError, ContentStorageError
from .interfaces import IContentRepository, IContentService
from .models import ContentCreate, ContentUpdate, SavedContent

logger = logging.getLogger(__name__)


class ContentService(IContentService):
    """Saved sermons and studies, scoped to their owner."""

    def __init__(self, repository: IContentRepository):
        self._repository = repository

    async def save(self, user_id: str, data: ContentCreate) -> SavedContent:
        try:
            saved = await run_in_threadpool(self._repository.insert, user_id, data)
        except Exception as e:
            logger.error("Save content failed for %s: %s", user_id, e)
            raise ContentStorageError("save") from e
        logger.info("User %s saved %s %s", user_id, saved.content_type.value, saved.id)
        return saved

    async def update(self, user_id: str, content_id: str, data: ContentUpdate) -> SavedContent:
        changes = data.changes()
        if not changes:
            existing = await run_in_threadpool(self._repository.get, content_id, user_id)
            if existing is None:
                raise ContentNotFoundError(content_id)
            return existing

        updated = await run_in_threadpool(self._repository.update, content_id, user_id, changes)
        if updated is None:
            raise ContentNotFoundError(content_id)
        return updated

    async def delete(self, user_id: str, content_id: str) -> None:
        deleted = await run_in_threadpool(self._repository.delete, content_id, user_id)
        if not deleted:
            raise ContentNotFoundError(content_id)
        logger.info("User %s deleted content %s", user_id, content_id)

    async def list(self, user_id: str, content_type: Optional[ContentType] = None) -> list[SavedContent]:
        return await run_in_threadpool(self._repository.list, user_id, content_type)
