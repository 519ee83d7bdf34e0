from typing import Optional

from sqlalchemy.ext.asyncio import AsyncSession

from ..database import User, utcnow
from .base_repository import BaseRepository


class UserRepository(BaseRepository[User]):
    def __init__(self, db: AsyncSession):
        super().__init__(User, db)

    async def get_by_email(self, email: str) -> Optional[User]:
        # Emails are stored normalized (trimmed, lower case)
        return await self._first(User.email == email)

    async def update_last_sign_in(self, user: User) -> User:
        return await self.update(user, {"last_sign_in_at": utcnow()})
