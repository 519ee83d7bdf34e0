from typing import Any, Dict, Generic, List, Optional, Type, TypeVar

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

T = TypeVar("T")


class BaseRepository(Generic[T]):
    """Single-model data access. Writes flush but never commit; the caller owns the transaction."""

    def __init__(self, model: Type[T], db: AsyncSession):
        self.model = model
        self.db = db

    async def _first(self, *criteria) -> Optional[T]:
        stmt = select(self.model).filter(*criteria)
        return (await self.db.execute(stmt)).scalars().first()

    async def get_by_id(self, id: str) -> Optional[T]:
        return await self._first(self.model.id == id)

    async def get_owned(self, id: str, user_id: str) -> Optional[T]:
        """Row ``id`` if it belongs to ``user_id``; models must have a ``user_id`` column."""
        return await self._first(self.model.id == id, self.model.user_id == user_id)

    async def get_all(self, skip: int = 0, limit: Optional[int] = None) -> List[T]:
        stmt = select(self.model).offset(skip).limit(limit)
        return list((await self.db.execute(stmt)).scalars().all())

    async def create(self, values: Dict[str, Any]) -> T:
        instance = self.model(**values)
        self.db.add(instance)
        await self.db.flush()
        await self.db.refresh(instance)
        return instance

    async def update(self, instance: T, values: Dict[str, Any]) -> T:
        """Assign known columns from ``values``; unknown keys are ignored."""
        for key, value in values.items():
            if hasattr(instance, key):
                setattr(instance, key, value)
        await self.db.flush()
        await self.db.refresh(instance)
        return instance

    async def delete(self, instance: T) -> None:
        await self.db.delete(instance)
        await self.db.flush()
