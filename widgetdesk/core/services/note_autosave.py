"""Debounced persistence of note edits."""

from functools import lru_cache
from typing import Any, Dict, Hashable, Mapping, Optional, Tuple

from loguru import logger
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from ..config import get_server_settings
from ..database import async_session_maker
from ..debounce import Debouncer
from .errors import ValidationError
from .note_service import EDITABLE_FIELDS, NoteService

DraftKey = Tuple[str, str]


class NoteAutosaver:
    """Collect note drafts and write each note once its edits go quiet.

    Drafts are keyed by (user id, note id). Each commit opens its own session,
    since the request that scheduled it has long finished by then.
    """

    def __init__(
        self,
        session_factory: async_sessionmaker[AsyncSession] = async_session_maker,
        delay: Optional[float] = None,
    ):
        if delay is None:
            delay = get_server_settings().note_autosave_delay
        self.session_factory = session_factory
        self.debouncer = Debouncer(delay, self._commit)

    @property
    def delay(self) -> float:
        return self.debouncer.delay

    def schedule(self, user_id: str, note_id: str, fields: Mapping[str, Any]) -> Dict[str, Any]:
        """Queue a draft; returns the fields the pending save now carries."""
        draft = {key: value for key, value in fields.items() if value is not None}
        unknown = set(draft) - EDITABLE_FIELDS
        if unknown:
            raise ValidationError(f"Cannot update note fields: {', '.join(sorted(unknown))}")
        if not draft:
            raise ValidationError("Draft has no changes")

        key = (user_id, note_id)
        self.debouncer.schedule(key, draft)
        return self.debouncer.pending(key) or {}

    def pending(self, user_id: str, note_id: str) -> Optional[Dict[str, Any]]:
        return self.debouncer.pending((user_id, note_id))

    def take(self, user_id: str, note_id: str) -> Dict[str, Any]:
        """Cancel the pending draft and return its fields, for a direct save to carry."""
        key = (user_id, note_id)
        draft = self.debouncer.pending(key) or {}
        self.debouncer.cancel(key)
        return draft

    def cancel(self, user_id: str, note_id: str) -> bool:
        return self.debouncer.cancel((user_id, note_id))

    def cancel_all(self) -> int:
        return self.debouncer.cancel_all()

    async def flush(self, user_id: str, note_id: str) -> bool:
        return await self.debouncer.flush((user_id, note_id))

    async def flush_all(self) -> int:
        count = await self.debouncer.flush_all()
        if count:
            logger.info(f"Flushed {count} pending note draft(s)")
        return count

    async def _commit(self, key: Hashable, fields: Dict[str, Any]) -> None:
        user_id, note_id = key
        async with self.session_factory() as session:
            try:
                await NoteService(session).update_note(user_id, note_id, fields)
                await session.commit()
            except Exception:
                await session.rollback()
                raise
        logger.debug(f"Autosaved note {note_id} ({', '.join(sorted(fields))})")


@lru_cache
def get_note_autosaver() -> NoteAutosaver:
    """Process-wide autosaver dependency."""
    return NoteAutosaver()
