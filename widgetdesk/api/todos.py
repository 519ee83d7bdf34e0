"""Routes for the current user's todos."""

from fastapi import APIRouter, Depends, status
from loguru import logger

from ..core.auth import get_current_user
from ..core.database import User
from ..core.dependencies import get_service
from ..core.services import TodoService
from ..schemas.todo import Todo, TodoCreate, TodoList, TodoUpdate
from .errors import http_errors

router = APIRouter()


@router.get("", response_model=TodoList)
async def list_todos(
    current_user: User = Depends(get_current_user),
    todo_service: TodoService = Depends(get_service(TodoService)),
):
    """Todos newest first, with the number still open."""
    with http_errors("list todos"):
        todos = await todo_service.list_todos(current_user.id)
        return TodoList(
            todos=[Todo.model_validate(todo) for todo in todos],
            active_count=TodoService.active_count(todos),
        )


@router.post("", response_model=Todo, status_code=status.HTTP_201_CREATED)
async def create_todo(
    request: TodoCreate,
    current_user: User = Depends(get_current_user),
    todo_service: TodoService = Depends(get_service(TodoService)),
):
    with http_errors("create todo"):
        todo = await todo_service.create_todo(current_user.id, request)
        logger.info(f"Created todo {todo.id} for user {current_user.id}")
        return todo


@router.get("/{todo_id}", response_model=Todo)
async def get_todo(
    todo_id: str,
    current_user: User = Depends(get_current_user),
    todo_service: TodoService = Depends(get_service(TodoService)),
):
    with http_errors("get todo"):
        return await todo_service.get_todo(current_user.id, todo_id)


@router.patch("/{todo_id}", response_model=Todo)
async def update_todo(
    todo_id: str,
    request: TodoUpdate,
    current_user: User = Depends(get_current_user),
    todo_service: TodoService = Depends(get_service(TodoService)),
):
    with http_errors("update todo"):
        return await todo_service.update_todo(current_user.id, todo_id, request)


@router.delete("/{todo_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_todo(
    todo_id: str,
    current_user: User = Depends(get_current_user),
    todo_service: TodoService = Depends(get_service(TodoService)),
):
    with http_errors("delete todo"):
        await todo_service.delete_todo(current_user.id, todo_id)
