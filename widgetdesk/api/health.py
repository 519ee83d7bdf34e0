"""Liveness and readiness endpoints."""

from datetime import datetime, timezone
from typing import Any, Dict

from fastapi import APIRouter, Depends

from ..core.config import get_server_settings
from ..core.dependencies import get_service
from ..core.services import (
    CanvasStore,
    NoteAutosaver,
    NoteService,
    TodoService,
    UserService,
    get_canvas_store,
    get_note_autosaver,
)

router = APIRouter()


def _status(status: str = "healthy") -> Dict[str, Any]:
    return {
        "status": status,
        "timestamp": datetime.now(timezone.utc).isoformat(),
        "service": get_server_settings().service_name,
    }


@router.get("")
async def health():
    return _status()


@router.get("/detailed")
async def detailed_health_check(
    user_service: UserService = Depends(get_service(UserService)),
    todo_service: TodoService = Depends(get_service(TodoService)),
    note_service: NoteService = Depends(get_service(NoteService)),
    canvas_store: CanvasStore = Depends(get_canvas_store),
    autosaver: NoteAutosaver = Depends(get_note_autosaver),
):
    """Table reachability plus in-memory canvas and autosave state."""
    failing = [
        name
        for name, service in (
            ("users", user_service),
            ("todos", todo_service),
            ("notes", note_service),
        )
        if not await service.health_check()
    ]
    if failing:
        database = {"status": "unhealthy", "message": f"Query failed for: {', '.join(failing)}"}
    else:
        database = {"status": "healthy", "message": "Database connection successful"}

    report = _status("degraded" if failing else "healthy")
    report["checks"] = {
        "database": database,
        "canvas": {"status": "healthy", **canvas_store.stats()},
        "autosave": {
            "status": "healthy",
            "pending_drafts": len(autosaver.debouncer),
        },
    }
    return report
