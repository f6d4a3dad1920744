"""
Content library exceptions.
"""

from shared.exceptions import AppError, NotFoundError


class ContentNotFoundError(NotFoundError):
    """
    Raised when content does not exist or belongs to another user.

    Both cases share one error so callers cannot discover other users' IDs.
    """

    def __init__(self, content_id: str):
        super().__init__(
            "Content not found",
            code="CONTENT_NOT_FOUND",
        )
        self.content_id = content_id


class ContentStorageError(AppError):
    """Raised when the datastore rejects a library operation."""

    def __init__(self, operation: str):
        super().__init__(
            f"Failed to {operation} content",
            code="CONTENT_STORAGE_FAILED",
        )
        self.operation = operation
