"""Database configuration and models."""

import uuid
from datetime import datetime, timezone

from sqlalchemy import (
    JSON,
    Boolean,
    Column,
    DateTime,
    Float,
    ForeignKey,
    Integer,
    String,
    Text,
)
from sqlalchemy.ext.asyncio import async_sessionmaker, create_async_engine
from sqlalchemy.orm import declarative_base, relationship

from widgetdesk.core.config import get_server_settings

settings = get_server_settings()

engine = create_async_engine(
    settings.database_url,
    echo=settings.database_echo,
    connect_args={"check_same_thread": False} if settings.is_sqlite else {},
)

# Create async session factory
async_session_maker = async_sessionmaker(bind=engine, expire_on_commit=False)

# Create base class for models
Base = declarative_base()


def utcnow() -> datetime:
    return datetime.now(timezone.utc).replace(tzinfo=None)


def new_id() -> str:
    return str(uuid.uuid4())


class User(Base):
    """User model."""

    __tablename__ = "users"

    id = Column(String(36), primary_key=True, default=new_id)
    email = Column(String, unique=True, index=True, nullable=False)
    password_hash = Column(String, nullable=False)
    is_active = Column(Boolean, default=True)
    created_at = Column(DateTime, default=utcnow)
    last_sign_in_at = Column(DateTime, nullable=True)

    # Relationships
    todos = relationship("Todo", back_populates="user", cascade="all, delete-orphan")
    notes = relationship("Note", back_populates="user", cascade="all, delete-orphan")


class Todo(Base):
    """A task owned by a user."""

    __tablename__ = "todos"

    id = Column(String(36), primary_key=True, default=new_id)
    user_id = Column(String(36), ForeignKey("users.id"), index=True, nullable=False)
    title = Column(String, nullable=False)
    description = Column(Text, nullable=True)
    completed = Column(Boolean, default=False, nullable=False)
    priority = Column(Integer, default=2, nullable=False)  # 1=High, 2=Medium, 3=Low
    ai_priority_score = Column(Float, default=0.5, nullable=False)
    ai_suggestions = Column(JSON, nullable=True)
    due_date = Column(DateTime, nullable=True)
    tags = Column(JSON, default=list, nullable=False)
    estimated_duration = Column(Integer, nullable=True)  # minutes
    actual_duration = Column(Integer, nullable=True)  # minutes
    created_at = Column(DateTime, default=utcnow, index=True)
    updated_at = Column(DateTime, default=utcnow, onupdate=utcnow)

    user = relationship("User", back_populates="todos")


class Note(Base):
    """A rich-text note owned by a user."""

    __tablename__ = "notes"

    id = Column(String(36), primary_key=True, default=new_id)
    user_id = Column(String(36), ForeignKey("users.id"), index=True, nullable=False)
    title = Column(String, nullable=False, default="New Note")
    content = Column(JSON, nullable=False)
    plain_text = Column(Text, default="", nullable=False)
    ai_summary = Column(Text, nullable=True)
    ai_tags = Column(JSON, default=list, nullable=False)
    ai_insights = Column(JSON, nullable=True)
    is_favorite = Column(Boolean, default=False, nullable=False)
    word_count = Column(Integer, default=0, nullable=False)
    reading_time = Column(Integer, default=0, nullable=False)
    created_at = Column(DateTime, default=utcnow)
    # Bumped by NoteService on edits only, not on reads
    updated_at = Column(DateTime, default=utcnow, index=True)
    last_accessed_at = Column(DateTime, default=utcnow)

    user = relationship("User", back_populates="notes")


async def init_models() -> None:
    """Create any missing tables."""
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
