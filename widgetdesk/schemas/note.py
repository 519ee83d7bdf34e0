from datetime import datetime
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field


class NoteUpdate(BaseModel):
    """Note update request model; unset fields are left alone.

    ``content`` is a rich-text document; the plain-text projection and the
    word statistics are derived from it server-side.
    """

    title: Optional[str] = None
    content: Optional[Dict[str, Any]] = None
    is_favorite: Optional[bool] = None


class Note(BaseModel):
    """Note response model."""

    model_config = ConfigDict(from_attributes=True)

    id: str
    user_id: str
    title: str
    content: Dict[str, Any]
    plain_text: str = ""
    ai_summary: Optional[str] = None
    ai_tags: List[str] = Field(default_factory=list)
    ai_insights: Optional[Dict[str, Any]] = None
    is_favorite: bool = False
    word_count: int = 0
    reading_time: int = 0
    created_at: datetime
    updated_at: datetime
    last_accessed_at: Optional[datetime] = None


class NoteHtml(BaseModel):
    id: str
    html: str


class DraftAccepted(BaseModel):
    note_id: str
    pending: Dict[str, Any]
    delay: float
