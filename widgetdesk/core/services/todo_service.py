"""Service for managing a user's tasks."""

from typing import List

from loguru import logger
from sqlalchemy.ext.asyncio import AsyncSession

from ...schemas.todo import TodoCreate, TodoUpdate
from ..database import Todo
from ..dependencies import register_service
from ..repository.todo_repository import TodoRepository
from ..suggestions import suggest_for_task
from .base import BaseService
from .errors import NotFoundError, ValidationError


@register_service
class TodoService(BaseService[Todo]):
    """Task store scoped to the owning user."""

    def __init__(self, db: AsyncSession):
        super().__init__(db)
        self.repo = TodoRepository(db)

    async def list_todos(self, user_id: str) -> List[Todo]:
        """Get the user's todos, newest first."""
        return await self.repo.get_by_user_id(user_id)

    async def get_todo(self, user_id: str, todo_id: str) -> Todo:
        todo = await self.repo.get_owned(todo_id, user_id)
        if todo is None:
            raise NotFoundError("Todo", todo_id)
        return todo

    async def create_todo(self, user_id: str, data: TodoCreate) -> Todo:
        """Create a todo, filling priority, duration and tags from the suggestion engine."""
        title = data.title.strip()
        if not title:
            raise ValidationError("Task title is required")

        existing = await self.repo.get_by_user_id(user_id)
        suggestion = await suggest_for_task(title, existing)

        values = {
            "user_id": user_id,
            "title": title,
            "description": data.description,
            "due_date": data.due_date,
            "priority": suggestion.priority,
            "ai_priority_score": suggestion.score,
            "ai_suggestions": {
                "insights": suggestion.insights,
                "recommendations": suggestion.recommendations,
            },
            "estimated_duration": suggestion.estimated_duration,
            "tags": suggestion.tags,
        }
        async with self.write("create todo"):
            todo = await self.repo.create(values)

        logger.debug(f"Created todo {todo.id} with priority {todo.priority}")
        return todo

    async def update_todo(self, user_id: str, todo_id: str, data: TodoUpdate) -> Todo:
        todo = await self.get_todo(user_id, todo_id)
        values = data.model_dump(exclude_unset=True)
        if "title" in values:
            if values["title"] is None or not values["title"].strip():
                raise ValidationError("Task title is required")
            values["title"] = values["title"].strip()
        for field in ("completed", "priority", "tags"):
            if field in values and values[field] is None:
                raise ValidationError(f"{field} cannot be null")

        async with self.write("update todo"):
            return await self.repo.update(todo, values)

    async def delete_todo(self, user_id: str, todo_id: str) -> None:
        todo = await self.get_todo(user_id, todo_id)
        async with self.write("delete todo"):
            await self.repo.delete(todo)

    @staticmethod
    def active_count(todos: List[Todo]) -> int:
        return sum(1 for todo in todos if not todo.completed)
