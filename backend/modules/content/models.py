"""
Content library data models.

A user's saved sermons and studies, one row of ``user_content`` each.
"""

from datetime import datetime
from typing import Any, Optional

from pydantic import BaseModel, Field

from modules.usage.models import ContentType


class SavedContent(BaseModel):
    """A saved sermon or study."""

    id: str = Field(..., description="Content ID (UUID)")
    user_id: str = Field(..., description="Owner")
    title: str = Field(..., description="Title")
    content: str = Field(..., description="Markdown body")
    content_type: ContentType = Field(..., description="Sermon or study")
    topic: str = Field(default="", description="Topic it was generated from")
    bible_verse: str = Field(default="", description="Primary verse")
    style: str = Field(default="", description="Style label")
    structured_data: Optional[Any] = Field(None, description="Client-defined JSON")
    created_at: Optional[datetime] = Field(None, description="Creation time")
    updated_at: Optional[datetime] = Field(None, description="Last update time")


class ContentCreate(BaseModel):
    """Fields for a new library entry."""

    title: str
    content: str
    content_type: ContentType
    topic: str = ""
    bible_verse: str = ""
    style: str = ""
    structured_data: Optional[Any] = None


class ContentUpdate(BaseModel):
    """Partial update; fields left as None are unchanged."""

    title: Optional[str] = None
    content: Optional[str] = None
    topic: Optional[str] = None
    bible_verse: Optional[str] = None
    style: Optional[str] = None
    structured_data: Optional[Any] = None

    def changes(self) -> dict[str, Any]:
        return self.model_dump(exclude_none=True)
