from typing import List

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from ..database import Todo
from .base_repository import BaseRepository


class TodoRepository(BaseRepository[Todo]):
    def __init__(self, db: AsyncSession):
        super().__init__(Todo, db)

    async def get_by_user_id(self, user_id: str) -> List[Todo]:
        """Todos of a user, newest first."""
        newest_first = (
            select(Todo)
            .filter(Todo.user_id == user_id)
            .order_by(Todo.created_at.desc())
        )
        return list((await self.db.execute(newest_first)).scalars().all())
