from .base_repository import BaseRepository
from .note_repository import NoteRepository
from .todo_repository import TodoRepository
from .user_repository import UserRepository

__all__ = [
    "BaseRepository",
    "NoteRepository",
    "TodoRepository",
    "UserRepository",
]
