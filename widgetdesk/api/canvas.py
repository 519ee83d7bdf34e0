"""Routes for the widget canvas of the current user."""

from typing import List, Optional

from fastapi import APIRouter, Depends, Query, status
from loguru import logger

from ..core.auth import get_current_user
from ..core.canvas import Widget
from ..core.canvas.registry import WidgetCatalogEntry
from ..core.database import User
from ..core.services import CanvasStore, get_canvas_store
from ..schemas.canvas import (
    AddWidgetRequest,
    CanvasView,
    PointerEventRequest,
    PointerEventResult,
    WidgetUpdateRequest,
)
from .errors import http_errors

router = APIRouter()


@router.get("", response_model=CanvasView)
async def get_canvas(
    width: Optional[int] = Query(None, gt=0),
    height: Optional[int] = Query(None, gt=0),
    current_user: User = Depends(get_current_user),
    canvas_store: CanvasStore = Depends(get_canvas_store),
):
    """Render the canvas; ``width``/``height`` size full-screen frames."""
    return canvas_store.render(current_user.id, width, height)


@router.get("/widget-types", response_model=List[WidgetCatalogEntry])
async def list_widget_types(current_user: User = Depends(get_current_user)):
    """Widget types offered by the side panel."""
    return CanvasStore.catalog()


@router.get("/widgets", response_model=List[Widget])
async def list_widgets(
    current_user: User = Depends(get_current_user),
    canvas_store: CanvasStore = Depends(get_canvas_store),
):
    return canvas_store.list_widgets(current_user.id)


@router.post("/widgets", response_model=Widget, status_code=status.HTTP_201_CREATED)
async def add_widget(
    request: AddWidgetRequest,
    current_user: User = Depends(get_current_user),
    canvas_store: CanvasStore = Depends(get_canvas_store),
):
    with http_errors("add widget"):
        return canvas_store.add_widget(current_user.id, request.type)


@router.patch("/widgets/{widget_id}", response_model=Widget)
async def update_widget(
    widget_id: str,
    request: WidgetUpdateRequest,
    current_user: User = Depends(get_current_user),
    canvas_store: CanvasStore = Depends(get_canvas_store),
):
    with http_errors("update widget"):
        return canvas_store.update_widget(current_user.id, widget_id, request.fields())


@router.delete("/widgets/{widget_id}", response_model=Widget)
async def remove_widget(
    widget_id: str,
    current_user: User = Depends(get_current_user),
    canvas_store: CanvasStore = Depends(get_canvas_store),
):
    with http_errors("remove widget"):
        return canvas_store.remove_widget(current_user.id, widget_id)


@router.post("/widgets/{widget_id}/minimize", response_model=Widget)
async def toggle_minimized(
    widget_id: str,
    current_user: User = Depends(get_current_user),
    canvas_store: CanvasStore = Depends(get_canvas_store),
):
    with http_errors("toggle minimized"):
        return canvas_store.toggle_minimized(current_user.id, widget_id)


@router.post("/widgets/{widget_id}/full-screen", response_model=Widget)
async def toggle_full_screen(
    widget_id: str,
    current_user: User = Depends(get_current_user),
    canvas_store: CanvasStore = Depends(get_canvas_store),
):
    with http_errors("toggle full-screen"):
        return canvas_store.toggle_full_screen(current_user.id, widget_id)


@router.post("/widgets/{widget_id}/activate", response_model=Widget)
async def activate_widget(
    widget_id: str,
    current_user: User = Depends(get_current_user),
    canvas_store: CanvasStore = Depends(get_canvas_store),
):
    """Double-activation on the widget body toggles full-screen."""
    with http_errors("activate widget"):
        return canvas_store.activate(current_user.id, widget_id)


@router.post("/pointer", response_model=PointerEventResult)
async def pointer_event(
    event: PointerEventRequest,
    current_user: User = Depends(get_current_user),
    canvas_store: CanvasStore = Depends(get_canvas_store),
):
    result = canvas_store.pointer(current_user.id, event)
    if event.phase != "move":
        logger.debug(f"Pointer {event.phase} for user {current_user.id}: {result.handled}")
    return result


@router.post("/escape", response_model=List[Widget])
async def escape(
    current_user: User = Depends(get_current_user),
    canvas_store: CanvasStore = Depends(get_canvas_store),
):
    """Leave full-screen."""
    return canvas_store.escape(current_user.id)
