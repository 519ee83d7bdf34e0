"""The layout container: sole owner and mutator of a canvas's widgets."""

import random
from dataclasses import dataclass
from typing import Iterable, List, Mapping, Optional, Union

from loguru import logger
from pydantic import BaseModel
from pydantic import ValidationError as PydanticValidationError

from .errors import InvalidWidgetUpdate, WidgetNotFoundError
from .interaction import (
    ActiveInteraction,
    InputSurface,
    InteractionEngine,
    InteractionKind,
    Point,
    PointerTarget,
)
from .registry import DEFAULT_PLACEMENT_JITTER, Widget, WidgetType, create_default

BASE_Z_INDEX = 10
FULL_SCREEN_Z_INDEX = 40
DRAGGING_Z_INDEX = 50

# Rendered height of a minimized widget: the header bar only
MINIMIZED_HEIGHT = 60

UPDATABLE_FIELDS = frozenset({"title", "position", "size", "isMinimized", "isFullScreen"})


@dataclass(frozen=True)
class Frame:
    """Where and how a widget is drawn, after minimized/full-screen overrides."""

    x: float
    y: float
    width: float
    height: float
    z_index: int
    resizable: bool


class LayoutContainer:
    """Ordered widget collection with add/update/remove/list and pointer routing.

    Insertion order is render order. All operations are synchronous; each
    either fully applies or raises before anything changes.

    Full-screen policy: entering full-screen on any widget first cancels the
    in-flight drag or resize, whichever widget it targets, and takes any other
    widget out of full-screen. Minimizing a widget cancels a resize of that
    widget.
    """

    def __init__(
        self,
        widgets: Optional[Iterable[Widget]] = None,
        surface: Optional[InputSurface] = None,
        rng: Optional[random.Random] = None,
        jitter: float = DEFAULT_PLACEMENT_JITTER,
    ):
        self._widgets: List[Widget] = []
        for widget in widgets or []:
            if self._index(widget.id) is not None:
                raise ValueError(f"Duplicate widget id: {widget.id}")
            self._widgets.append(widget.model_copy(deep=True))
        self._rng = rng
        self._jitter = jitter
        self.surface = surface or InputSurface()
        self.engine = InteractionEngine(self.surface, self.get, self.update)

    def __len__(self) -> int:
        return len(self._widgets)

    def __contains__(self, widget_id: object) -> bool:
        return self._index(widget_id) is not None

    # Collection mutators

    def add(self, widget_type: Union[str, WidgetType]) -> Widget:
        """Create a default widget of ``widget_type`` and append it on top."""
        widget = create_default(widget_type, rng=self._rng, jitter=self._jitter)
        while self._index(widget.id) is not None:
            widget = create_default(widget_type, rng=self._rng, jitter=self._jitter)
        self._widgets.append(widget)
        logger.info(f"Added {widget.type.value} widget {widget.id}")
        return widget.model_copy(deep=True)

    def update(self, widget_id: str, fields: Mapping[str, object]) -> Widget:
        """Merge ``fields`` into the widget with ``widget_id``.

        ``position`` and ``size`` may be given partially, e.g.
        ``{"size": {"width": 500}}``.

        Raises:
            WidgetNotFoundError: If no widget has ``widget_id``
            InvalidWidgetUpdate: If a field is immutable or out of bounds
        """
        index = self._require_index(widget_id)
        unknown = set(fields) - UPDATABLE_FIELDS
        if unknown:
            raise InvalidWidgetUpdate(
                f"Cannot update widget fields: {', '.join(sorted(unknown))}"
            )

        current = self._widgets[index]
        data = current.model_dump()
        for key, value in fields.items():
            if isinstance(value, BaseModel):
                value = value.model_dump()
            if isinstance(value, Mapping) and isinstance(data.get(key), dict):
                data[key] = {**data[key], **value}
            else:
                data[key] = value

        try:
            updated = Widget.model_validate(data)
        except PydanticValidationError as e:
            raise InvalidWidgetUpdate(str(e)) from e

        if updated.isFullScreen and not current.isFullScreen:
            self._enter_full_screen(widget_id)
        if updated.isMinimized and not current.isMinimized:
            active = self.engine.active
            if (
                active is not None
                and active.widget_id == widget_id
                and active.kind == InteractionKind.RESIZING
            ):
                self.engine.cancel(widget_id)

        self._widgets[index] = updated
        return updated.model_copy(deep=True)

    def remove(self, widget_id: str) -> Widget:
        """Delete the widget, ending any drag or resize that targets it."""
        index = self._require_index(widget_id)
        self.engine.cancel(widget_id)
        removed = self._widgets.pop(index)
        logger.info(f"Removed {removed.type.value} widget {removed.id}")
        return removed

    def list(self) -> List[Widget]:
        """Copies of the widgets in insertion order."""
        return [widget.model_copy(deep=True) for widget in self._widgets]

    def get(self, widget_id: str) -> Widget:
        return self._widgets[self._require_index(widget_id)].model_copy(deep=True)

    # Toggles

    def toggle_minimized(self, widget_id: str) -> Widget:
        widget = self._widgets[self._require_index(widget_id)]
        return self.update(widget_id, {"isMinimized": not widget.isMinimized})

    def toggle_full_screen(self, widget_id: str) -> Widget:
        widget = self._widgets[self._require_index(widget_id)]
        return self.update(widget_id, {"isFullScreen": not widget.isFullScreen})

    def activate(self, widget_id: str) -> Widget:
        """Double-activation gesture on a widget body."""
        return self.toggle_full_screen(widget_id)

    def escape(self) -> List[Widget]:
        """Cancellation signal: take every full-screen widget out of full-screen."""
        return [
            self.toggle_full_screen(widget.id)
            for widget in list(self._widgets)
            if widget.isFullScreen
        ]

    # Pointer routing

    @property
    def active_interaction(self) -> Optional[ActiveInteraction]:
        return self.engine.active

    def pointer_down(
        self, widget_id: str, target: Union[str, PointerTarget], x: float, y: float
    ) -> bool:
        self._require_index(widget_id)
        return self.engine.pointer_down(widget_id, PointerTarget(target), Point(x, y))

    def pointer_move(self, x: float, y: float) -> int:
        return self.surface.dispatch(InputSurface.MOVE, Point(x, y))

    def pointer_up(self, x: float, y: float) -> int:
        return self.surface.dispatch(InputSurface.UP, Point(x, y))

    # Rendering

    def z_index(self, widget: Widget) -> int:
        if self.engine.is_dragging(widget.id):
            return DRAGGING_Z_INDEX
        if widget.isFullScreen:
            return FULL_SCREEN_Z_INDEX
        return BASE_Z_INDEX

    def render_order(self) -> List[Widget]:
        """Widgets bottom to top; stable, so ties keep insertion order."""
        return sorted(self.list(), key=self.z_index)

    def frame(self, widget: Widget, viewport_width: float, viewport_height: float) -> Frame:
        z_index = self.z_index(widget)
        if widget.isFullScreen:
            return Frame(0, 0, viewport_width, viewport_height, z_index, resizable=False)
        height = MINIMIZED_HEIGHT if widget.isMinimized else widget.size.height
        return Frame(
            widget.position.x,
            widget.position.y,
            widget.size.width,
            height,
            z_index,
            resizable=not widget.isMinimized,
        )

    def _enter_full_screen(self, widget_id: str) -> None:
        if self.engine.active is not None:
            self.engine.cancel()
        for index, other in enumerate(self._widgets):
            if other.id != widget_id and other.isFullScreen:
                self._widgets[index] = other.model_copy(update={"isFullScreen": False})

    def _index(self, widget_id: object) -> Optional[int]:
        for index, widget in enumerate(self._widgets):
            if widget.id == widget_id:
                return index
        return None

    def _require_index(self, widget_id: str) -> int:
        index = self._index(widget_id)
        if index is None:
            raise WidgetNotFoundError(widget_id)
        return index
