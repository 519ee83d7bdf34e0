"""Request-scoped dependencies: database sessions and service construction."""

from contextlib import asynccontextmanager
from functools import lru_cache
from typing import AsyncIterator, Callable, Dict, Type, TypeVar

from fastapi import Depends
from loguru import logger
from sqlalchemy.ext.asyncio import AsyncSession

from .database import async_session_maker

S = TypeVar("S")

_service_registry: Dict[type, Callable[[AsyncSession], object]] = {}


@asynccontextmanager
async def get_db() -> AsyncIterator[AsyncSession]:
    """Session that commits when the block succeeds and rolls back otherwise."""
    async with async_session_maker() as session:
        try:
            yield session
            await session.commit()
        except Exception:
            await session.rollback()
            raise


async def get_db_session() -> AsyncIterator[AsyncSession]:
    """``get_db`` as a FastAPI dependency, one session per request."""
    async with get_db() as session:
        yield session


def register_service(cls: Type[S]) -> Type[S]:
    """Class decorator that makes ``cls`` available through ``get_service``.

    Services are built from a session with their ``create`` classmethod when
    they define one, otherwise with the constructor.
    """
    _service_registry[cls] = getattr(cls, "create", cls)
    return cls


@lru_cache
def get_service(service_class: Type[S]) -> Callable[..., S]:
    """Dependency that builds ``service_class`` on the request's session.

    Returns the same callable for a given class, so FastAPI resolves it once
    per request no matter how many dependants ask for it.
    """
    if service_class not in _service_registry:
        raise ValueError(f"Service {service_class.__name__} not registered")
    factory = _service_registry[service_class]

    def dependency(db: AsyncSession = Depends(get_db_session)) -> S:
        logger.debug(f"Creating {service_class.__name__} for request")
        return factory(db)

    return dependency
