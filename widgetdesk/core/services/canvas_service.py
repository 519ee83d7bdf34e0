"""Per-user canvas state held in process memory."""

from contextlib import contextmanager
from dataclasses import asdict
from functools import lru_cache
from typing import Any, Dict, List, Mapping, Optional, Union

from loguru import logger

from ...schemas.canvas import (
    CanvasView,
    FrameView,
    InteractionView,
    PointerEventRequest,
    PointerEventResult,
    Viewport,
    WidgetView,
)
from ..canvas import (
    WIDGET_CATALOG,
    ActiveInteraction,
    InvalidWidgetUpdate,
    LayoutContainer,
    UnknownWidgetType,
    Widget,
    WidgetNotFoundError,
    WidgetType,
    render,
    starter_widgets,
)
from ..canvas.registry import WidgetCatalogEntry
from ..config import get_server_settings
from .errors import NotFoundError, ValidationError


@contextmanager
def canvas_errors():
    """Re-raise canvas errors as service errors."""
    try:
        yield
    except WidgetNotFoundError as e:
        raise NotFoundError("Widget", e.widget_id)
    except (InvalidWidgetUpdate, UnknownWidgetType) as e:
        raise ValidationError(str(e))


def interaction_view(interaction: Optional[ActiveInteraction]) -> Optional[InteractionView]:
    if interaction is None:
        return None
    return InteractionView(
        widget_id=interaction.widget_id,
        kind=interaction.kind,
        handle=interaction.handle,
    )


class CanvasStore:
    """One layout container per user, seeded with the starter widgets.

    Nothing here is persisted; a restart or sign-out starts the user over
    from the starter layout.
    """

    def __init__(self, jitter: Optional[float] = None):
        settings = get_server_settings()
        self.jitter = settings.placement_jitter if jitter is None else jitter
        self._containers: Dict[str, LayoutContainer] = {}

    def __contains__(self, user_id: object) -> bool:
        return user_id in self._containers

    def container(self, user_id: str) -> LayoutContainer:
        container = self._containers.get(user_id)
        if container is None:
            container = LayoutContainer(starter_widgets(), jitter=self.jitter)
            self._containers[user_id] = container
            logger.debug(f"Seeded canvas for user {user_id}")
        return container

    def discard(self, user_id: str) -> bool:
        container = self._containers.pop(user_id, None)
        if container is None:
            return False
        container.engine.cancel()
        logger.debug(f"Discarded canvas for user {user_id}")
        return True

    def stats(self) -> Dict[str, int]:
        """Open canvases, in-flight drags or resizes, and pointer listeners they hold."""
        containers = list(self._containers.values())
        return {
            "open_canvases": len(containers),
            "active_interactions": sum(not c.engine.is_idle for c in containers),
            "pointer_listeners": sum(c.surface.listener_count() for c in containers),
        }

    @staticmethod
    def catalog() -> List[WidgetCatalogEntry]:
        return [entry.model_copy() for entry in WIDGET_CATALOG]

    def render(
        self,
        user_id: str,
        viewport_width: Optional[int] = None,
        viewport_height: Optional[int] = None,
    ) -> CanvasView:
        """The canvas as drawn: bottom-most first, with frames and content."""
        settings = get_server_settings()
        viewport = Viewport(
            width=viewport_width or settings.viewport_width,
            height=viewport_height or settings.viewport_height,
        )
        container = self.container(user_id)
        views = []
        for widget in container.render_order():
            frame = container.frame(widget, viewport.width, viewport.height)
            views.append(
                WidgetView(
                    widget=widget,
                    frame=FrameView(**asdict(frame)),
                    content=render(widget, user_id),
                )
            )
        return CanvasView(
            widgets=views,
            interaction=interaction_view(container.active_interaction),
            viewport=viewport,
            empty=not views,
        )

    def list_widgets(self, user_id: str) -> List[Widget]:
        return self.container(user_id).list()

    def add_widget(self, user_id: str, widget_type: Union[str, WidgetType]) -> Widget:
        with canvas_errors():
            widget = self.container(user_id).add(widget_type)
        logger.info(f"User {user_id} added {widget.type.value} widget {widget.id}")
        return widget

    def update_widget(
        self, user_id: str, widget_id: str, fields: Mapping[str, Any]
    ) -> Widget:
        with canvas_errors():
            return self.container(user_id).update(widget_id, fields)

    def remove_widget(self, user_id: str, widget_id: str) -> Widget:
        with canvas_errors():
            widget = self.container(user_id).remove(widget_id)
        logger.info(f"User {user_id} removed widget {widget_id}")
        return widget

    def toggle_minimized(self, user_id: str, widget_id: str) -> Widget:
        with canvas_errors():
            return self.container(user_id).toggle_minimized(widget_id)

    def toggle_full_screen(self, user_id: str, widget_id: str) -> Widget:
        with canvas_errors():
            return self.container(user_id).toggle_full_screen(widget_id)

    def activate(self, user_id: str, widget_id: str) -> Widget:
        with canvas_errors():
            return self.container(user_id).activate(widget_id)

    def escape(self, user_id: str) -> List[Widget]:
        return self.container(user_id).escape()

    def pointer(self, user_id: str, event: PointerEventRequest) -> PointerEventResult:
        """Route one pointer event. Unroutable input is ignored, never rejected."""
        container = self.container(user_id)
        if event.phase == "down":
            handled = False
            if event.widget_id is not None:
                try:
                    handled = container.pointer_down(
                        event.widget_id, event.target, event.x, event.y
                    )
                except WidgetNotFoundError:
                    logger.debug(f"Pointer-down on unknown widget {event.widget_id}")
        elif event.phase == "move":
            handled = container.pointer_move(event.x, event.y) > 0
        else:
            handled = container.pointer_up(event.x, event.y) > 0

        return PointerEventResult(
            handled=handled,
            interaction=interaction_view(container.active_interaction),
        )


@lru_cache
def get_canvas_store() -> CanvasStore:
    """Process-wide canvas store dependency."""
    return CanvasStore()
