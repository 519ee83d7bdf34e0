"""Test configuration and fixtures."""

import os
from datetime import timedelta
from typing import AsyncGenerator

# Settings are cached on first use, so the environment is set before any
# widgetdesk import.
os.environ["WIDGETDESK_ENV_FILE"] = os.path.join(os.path.dirname(__file__), ".env.test")
os.environ["WIDGETDESK_DATABASE_URL"] = "sqlite+aiosqlite:///:memory:"
os.environ["WIDGETDESK_JWT_SECRET_KEY"] = "test_secret_key_123456789"
os.environ["WIDGETDESK_TASK_SUGGESTION_LATENCY"] = "0"
os.environ["WIDGETDESK_NOTE_SUGGESTION_LATENCY"] = "0"
os.environ["WIDGETDESK_NOTE_SUMMARY_LATENCY"] = "0"
os.environ["WIDGETDESK_NOTE_AUTOSAVE_DELAY"] = "0.05"

import pytest
import pytest_asyncio
from faker import Faker
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool

from widgetdesk.core.database import Base, User
from widgetdesk.core.dependencies import get_db_session
from widgetdesk.core.security import create_jwt_token, get_password_hash
from widgetdesk.core.services import (
    CanvasStore,
    NoteAutosaver,
    get_canvas_store,
    get_note_autosaver,
)
from widgetdesk.main import app

# Initialize Faker
fake = Faker()

# Test database URL
TEST_DATABASE_URL = "sqlite+aiosqlite:///:memory:"
TEST_PASSWORD = "testpassword"


@pytest_asyncio.fixture
async def test_engine():
    """Create a fresh in-memory database per test."""
    engine = create_async_engine(
        TEST_DATABASE_URL,
        echo=False,
        poolclass=StaticPool,
        connect_args={"check_same_thread": False},
    )

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    yield engine

    await engine.dispose()


@pytest.fixture
def session_maker(test_engine) -> async_sessionmaker[AsyncSession]:
    return async_sessionmaker(bind=test_engine, expire_on_commit=False)


@pytest_asyncio.fixture
async def test_session(session_maker) -> AsyncGenerator[AsyncSession, None]:
    """Create test database session."""
    async with session_maker() as session:
        yield session


@pytest.fixture
def canvas_store() -> CanvasStore:
    return CanvasStore(jitter=200)


@pytest_asyncio.fixture
async def autosaver(session_maker) -> AsyncGenerator[NoteAutosaver, None]:
    saver = NoteAutosaver(session_factory=session_maker, delay=0.05)
    yield saver
    saver.cancel_all()


@pytest.fixture
def override_dependencies(session_maker, canvas_store, autosaver):
    """Point the app at the test database and fresh in-memory stores."""

    async def _get_test_db():
        async with session_maker() as session:
            try:
                yield session
                await session.commit()
            except Exception:
                await session.rollback()
                raise

    app.dependency_overrides[get_db_session] = _get_test_db
    app.dependency_overrides[get_canvas_store] = lambda: canvas_store
    app.dependency_overrides[get_note_autosaver] = lambda: autosaver

    yield

    # Clean up
    app.dependency_overrides = {}


@pytest_asyncio.fixture
async def async_client(override_dependencies) -> AsyncGenerator[AsyncClient, None]:
    """Create async test client."""
    async with AsyncClient(
        transport=ASGITransport(app=app), base_url="http://test"
    ) as test_client:
        yield test_client


async def _create_user(session: AsyncSession, email: str) -> User:
    user = User(
        email=email,
        password_hash=get_password_hash(TEST_PASSWORD),
        is_active=True,
    )
    session.add(user)
    await session.commit()
    await session.refresh(user)
    return user


@pytest_asyncio.fixture
async def test_user(test_session: AsyncSession) -> User:
    """Create a test user."""
    return await _create_user(test_session, "test@example.com")


@pytest_asyncio.fixture
async def other_user(test_session: AsyncSession) -> User:
    """A second user, for ownership checks."""
    return await _create_user(test_session, fake.unique.email())


def _headers_for(user: User) -> dict:
    token = create_jwt_token(subject=user.id, expires_delta=timedelta(minutes=30))
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture
def auth_headers(test_user) -> dict:
    """Create authentication headers for the test user."""
    return _headers_for(test_user)


@pytest.fixture
def other_auth_headers(other_user) -> dict:
    return _headers_for(other_user)
