"""Pointer-driven drag and resize of canvas widgets.

Only one widget can be dragged or resized at a time. The engine holds a
single ``ActiveInteraction`` slot; while it is occupied, move/up listeners are
held on the ``InputSurface`` through a ``PointerCapture``, and they are
released on every path back to idle (pointer-up, cancellation, removal of
the target widget).

The engine never touches the widget collection itself. Geometry changes go
through the ``apply`` callback, which the layout container binds to its own
``update``.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Callable, Dict, List, Optional

from loguru import logger

from .registry import MIN_WIDGET_SIZE, Position, Size, Widget


class InteractionKind(str, Enum):
    DRAGGING = "dragging"
    RESIZING = "resizing"


class PointerTarget(str, Enum):
    """The part of a widget a pointer-down landed on."""

    HEADER = "header"
    CONTROL = "control"  # a button or menu inside the header
    BODY = "body"
    CORNER = "corner"
    RIGHT = "right"
    BOTTOM = "bottom"


RESIZE_HANDLES = frozenset({PointerTarget.CORNER, PointerTarget.RIGHT, PointerTarget.BOTTOM})


@dataclass(frozen=True)
class Point:
    x: float
    y: float


@dataclass(frozen=True)
class ActiveInteraction:
    """The one drag or resize in progress on a canvas.

    For a drag, ``anchor`` is the pointer's offset from the widget position.
    For a resize, it is the pointer position at pointer-down and
    ``start_size`` is the widget size at that moment.
    """

    widget_id: str
    kind: InteractionKind
    anchor: Point
    start_size: Optional[Size] = None
    handle: Optional[PointerTarget] = None


def drag_position(pointer: Point, anchor: Point) -> Position:
    """Position for a drag; clamped at zero, unbounded right and down."""
    return Position(x=max(0, pointer.x - anchor.x), y=max(0, pointer.y - anchor.y))


def resize_size(
    pointer: Point, anchor: Point, start_size: Size, handle: PointerTarget
) -> Size:
    """Size for a resize; edge handles only change their own axis."""
    width = start_size.width
    height = start_size.height
    if handle in (PointerTarget.CORNER, PointerTarget.RIGHT):
        width = max(MIN_WIDGET_SIZE, start_size.width + pointer.x - anchor.x)
    if handle in (PointerTarget.CORNER, PointerTarget.BOTTOM):
        height = max(MIN_WIDGET_SIZE, start_size.height + pointer.y - anchor.y)
    return Size(width=width, height=height)


PointerListener = Callable[[Point], None]


class InputSurface:
    """Canvas-wide pointer event surface, the equivalent of the browser document."""

    MOVE = "pointermove"
    UP = "pointerup"

    def __init__(self):
        self._listeners: Dict[str, List[PointerListener]] = {self.MOVE: [], self.UP: []}

    def add_listener(self, event: str, listener: PointerListener) -> None:
        self._listeners[event].append(listener)

    def remove_listener(self, event: str, listener: PointerListener) -> None:
        try:
            self._listeners[event].remove(listener)
        except ValueError:
            pass

    def listener_count(self, event: Optional[str] = None) -> int:
        if event is not None:
            return len(self._listeners[event])
        return sum(len(listeners) for listeners in self._listeners.values())

    def dispatch(self, event: str, point: Point) -> int:
        """Deliver ``point`` to the listeners of ``event`` in registration order.

        Returns the number of listeners notified.
        """
        # Listeners may deregister themselves while being notified
        listeners = list(self._listeners[event])
        for listener in listeners:
            listener(point)
        return len(listeners)


class PointerCapture:
    """Move/up listeners held on an input surface for one interaction."""

    def __init__(
        self,
        surface: InputSurface,
        on_move: PointerListener,
        on_up: PointerListener,
    ):
        self.surface = surface
        self.on_move = on_move
        self.on_up = on_up
        self._held = False

    @property
    def held(self) -> bool:
        return self._held

    def acquire(self) -> "PointerCapture":
        if not self._held:
            self.surface.add_listener(InputSurface.MOVE, self.on_move)
            self.surface.add_listener(InputSurface.UP, self.on_up)
            self._held = True
        return self

    def release(self) -> None:
        if self._held:
            self.surface.remove_listener(InputSurface.MOVE, self.on_move)
            self.surface.remove_listener(InputSurface.UP, self.on_up)
            self._held = False

    def __enter__(self) -> "PointerCapture":
        return self.acquire()

    def __exit__(self, exc_type, exc, tb) -> None:
        self.release()


class InteractionEngine:
    """Translates pointer events into geometry updates for one widget at a time."""

    def __init__(
        self,
        surface: InputSurface,
        lookup: Callable[[str], Widget],
        apply: Callable[[str, dict], Widget],
    ):
        self.surface = surface
        self._lookup = lookup
        self._apply = apply
        self._active: Optional[ActiveInteraction] = None
        self._capture: Optional[PointerCapture] = None

    @property
    def active(self) -> Optional[ActiveInteraction]:
        return self._active

    @property
    def is_idle(self) -> bool:
        return self._active is None

    def is_dragging(self, widget_id: str) -> bool:
        return (
            self._active is not None
            and self._active.widget_id == widget_id
            and self._active.kind == InteractionKind.DRAGGING
        )

    def pointer_down(self, widget_id: str, target: PointerTarget, point: Point) -> bool:
        """Start a drag or resize on ``widget_id`` if the target allows it.

        Returns True when an interaction started. Pointer-downs on controls or
        the body, on a full-screen widget, on the resize handles of a
        minimized widget, or while another interaction holds the pointer are
        ignored.
        """
        if self._active is not None:
            logger.debug(
                f"Ignoring pointer-down on {widget_id}: "
                f"{self._active.widget_id} is {self._active.kind.value}"
            )
            return False

        widget = self._lookup(widget_id)
        if widget.isFullScreen:
            return False

        if target == PointerTarget.HEADER:
            anchor = Point(point.x - widget.position.x, point.y - widget.position.y)
            self._begin(ActiveInteraction(widget.id, InteractionKind.DRAGGING, anchor))
            return True

        if target in RESIZE_HANDLES:
            if widget.isMinimized:
                return False
            self._begin(
                ActiveInteraction(
                    widget.id,
                    InteractionKind.RESIZING,
                    point,
                    start_size=widget.size.model_copy(),
                    handle=target,
                )
            )
            return True

        return False

    def cancel(self, widget_id: Optional[str] = None) -> bool:
        """End the active interaction, optionally only if it targets ``widget_id``.

        Geometry already applied is kept. Returns True if an interaction ended.
        """
        if self._active is None:
            return False
        if widget_id is not None and self._active.widget_id != widget_id:
            return False
        logger.debug(
            f"Cancelled {self._active.kind.value} of widget {self._active.widget_id}"
        )
        self._end()
        return True

    def _begin(self, interaction: ActiveInteraction) -> None:
        self._active = interaction
        self._capture = PointerCapture(self.surface, self._on_move, self._on_up).acquire()
        logger.debug(f"Widget {interaction.widget_id} entered {interaction.kind.value}")

    def _end(self) -> None:
        if self._capture is not None:
            self._capture.release()
        self._capture = None
        self._active = None

    def _on_move(self, point: Point) -> None:
        interaction = self._active
        if interaction is None:
            return
        if interaction.kind == InteractionKind.DRAGGING:
            position = drag_position(point, interaction.anchor)
            self._apply(interaction.widget_id, {"position": position})
        else:
            size = resize_size(
                point, interaction.anchor, interaction.start_size, interaction.handle
            )
            self._apply(interaction.widget_id, {"size": size})

    def _on_up(self, point: Point) -> None:
        self._end()
