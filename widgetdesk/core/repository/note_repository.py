from typing import List, Optional

from sqlalchemy import func, or_, select
from sqlalchemy.ext.asyncio import AsyncSession

from ..database import Note
from .base_repository import BaseRepository


class NoteRepository(BaseRepository[Note]):
    def __init__(self, db: AsyncSession):
        super().__init__(Note, db)

    async def get_by_user_id(self, user_id: str, query: Optional[str] = None) -> List[Note]:
        """Notes of a user, most recently updated first.

        ``query`` filters case-insensitively on title and plain text.
        """
        stmt = select(Note).filter(Note.user_id == user_id)
        if query:
            pattern = f"%{query.lower()}%"
            stmt = stmt.filter(
                or_(
                    func.lower(Note.title).like(pattern),
                    func.lower(Note.plain_text).like(pattern),
                )
            )
        stmt = stmt.order_by(Note.updated_at.desc())
        return list((await self.db.execute(stmt)).scalars().all())
