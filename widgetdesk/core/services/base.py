from contextlib import asynccontextmanager
from typing import Generic, TypeVar

from loguru import logger
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from ..repository.base_repository import BaseRepository
from .errors import DatabaseError

T = TypeVar("T")


class BaseService(Generic[T]):
    """Base class for services backed by one repository.

    Subclasses set ``self.repo`` in their constructor.
    """

    repo: BaseRepository[T]

    def __init__(self, db: AsyncSession):
        self.db = db

    @classmethod
    def create(cls, db: AsyncSession) -> "BaseService[T]":
        """Factory used by the service registry."""
        return cls(db)

    @asynccontextmanager
    async def write(self, action: str):
        """Guard a write: on a database failure roll back and raise ``DatabaseError``.

        Nothing of the failed write stays in the session.
        """
        try:
            yield
        except SQLAlchemyError as e:
            logger.error(f"Failed to {action}: {e}")
            await self.db.rollback()
            raise DatabaseError(f"Failed to {action}")

    async def health_check(self) -> bool:
        try:
            await self.repo.get_all(limit=1)
            return True
        except SQLAlchemyError as e:
            logger.error(f"{type(self).__name__} health check failed: {e}")
            await self.db.rollback()
            return False
