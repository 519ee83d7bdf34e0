"""Service for managing a user's rich-text notes."""

from typing import Any, Dict, List, Mapping, Optional

from loguru import logger
from sqlalchemy.ext.asyncio import AsyncSession

from ..database import Note, utcnow
from ..dependencies import register_service
from ..repository.note_repository import NoteRepository
from ..richtext import (
    count_words,
    empty_document,
    parse_document,
    reading_time,
    to_html,
    to_plain_text,
)
from ..suggestions import NoteInsights, suggest_for_note, summarize_note
from .base import BaseService
from .errors import NotFoundError, ValidationError

DEFAULT_NOTE_TITLE = "New Note"
EDITABLE_FIELDS = frozenset({"title", "content", "is_favorite"})


def derive_content_fields(raw_content: Any) -> Dict[str, Any]:
    """Normalized body plus everything computed from it."""
    document = parse_document(raw_content)
    plain_text = to_plain_text(document)
    words = count_words(plain_text)
    return {
        "content": document.model_dump(exclude_none=True),
        "plain_text": plain_text,
        "word_count": words,
        "reading_time": reading_time(words),
    }


@register_service
class NoteService(BaseService[Note]):
    """Note store scoped to the owning user."""

    def __init__(self, db: AsyncSession):
        super().__init__(db)
        self.repo = NoteRepository(db)

    async def list_notes(self, user_id: str, query: Optional[str] = None) -> List[Note]:
        """Notes of the user, most recently edited first, optionally filtered."""
        query = (query or "").strip() or None
        return await self.repo.get_by_user_id(user_id, query)

    async def require_note(self, user_id: str, note_id: str) -> Note:
        note = await self.repo.get_owned(note_id, user_id)
        if note is None:
            raise NotFoundError("Note", note_id)
        return note

    async def _save(self, note: Note, values: Mapping[str, Any], action: str) -> Note:
        async with self.write(f"{action} note"):
            return await self.repo.update(note, dict(values))

    async def get_note(self, user_id: str, note_id: str) -> Note:
        """Fetch a note and record the access. Does not change its edit time."""
        note = await self.require_note(user_id, note_id)
        return await self._save(note, {"last_accessed_at": utcnow()}, "open")

    async def create_note(self, user_id: str) -> Note:
        now = utcnow()
        values = {
            "user_id": user_id,
            "title": DEFAULT_NOTE_TITLE,
            **derive_content_fields(empty_document()),
            "created_at": now,
            "updated_at": now,
            "last_accessed_at": now,
        }
        async with self.write("create note"):
            note = await self.repo.create(values)
        logger.debug(f"Created note {note.id} for user {user_id}")
        return note

    async def update_note(
        self, user_id: str, note_id: str, fields: Mapping[str, Any]
    ) -> Note:
        """Apply an edit.

        A new ``content`` re-derives the plain text, word count and reading
        time; callers never supply those directly.
        """
        unknown = set(fields) - EDITABLE_FIELDS
        if unknown:
            raise ValidationError(f"Cannot update note fields: {', '.join(sorted(unknown))}")

        note = await self.require_note(user_id, note_id)
        values: Dict[str, Any] = {}
        if fields.get("title") is not None:
            values["title"] = fields["title"].strip() or DEFAULT_NOTE_TITLE
        if fields.get("is_favorite") is not None:
            values["is_favorite"] = bool(fields["is_favorite"])
        if fields.get("content") is not None:
            values.update(derive_content_fields(fields["content"]))

        if not values:
            return note
        values["updated_at"] = utcnow()
        return await self._save(note, values, "update")

    async def toggle_favorite(self, user_id: str, note_id: str) -> Note:
        note = await self.require_note(user_id, note_id)
        return await self._save(note, {"is_favorite": not note.is_favorite}, "update")

    async def delete_note(self, user_id: str, note_id: str) -> None:
        note = await self.require_note(user_id, note_id)
        async with self.write("delete note"):
            await self.repo.delete(note)

    async def render_html(self, user_id: str, note_id: str) -> str:
        note = await self.require_note(user_id, note_id)
        return to_html(parse_document(note.content))

    async def assist(self, user_id: str, note_id: str) -> NoteInsights:
        """Run the note suggestions and summary and store them on the note.

        A note without text gets empty insights and is left untouched.
        """
        note = await self.require_note(user_id, note_id)
        if not note.plain_text.strip():
            return NoteInsights()

        insights = await suggest_for_note(note.plain_text)
        summary = await summarize_note(note.plain_text)
        await self._save(
            note,
            {
                "ai_insights": insights.model_dump(),
                "ai_tags": insights.suggested_tags,
                "ai_summary": summary,
            },
            "annotate",
        )
        return insights
