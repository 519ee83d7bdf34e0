"""Service layer initialization."""

from .base import BaseService
from .canvas_service import CanvasStore, get_canvas_store
from .errors import (
    AuthenticationError,
    AuthorizationError,
    ConflictError,
    DatabaseError,
    NotFoundError,
    ServiceError,
    ValidationError,
)
from .note_autosave import NoteAutosaver, get_note_autosaver
from .note_service import NoteService
from .todo_service import TodoService
from .user_service import UserService

__all__ = [
    # Base classes
    "BaseService",
    # Error classes
    "ServiceError",
    "NotFoundError",
    "ValidationError",
    "AuthenticationError",
    "AuthorizationError",
    "ConflictError",
    "DatabaseError",
    # Service implementations
    "UserService",
    "TodoService",
    "NoteService",
    "CanvasStore",
    "NoteAutosaver",
    "get_canvas_store",
    "get_note_autosaver",
]
