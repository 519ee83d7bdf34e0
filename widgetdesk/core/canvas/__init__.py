"""Canvas layout core: widget registry, interaction engine, layout container, content dispatch."""

from .container import Frame, LayoutContainer
from .content import ContentDescriptor, render
from .errors import (
    CanvasError,
    InvalidWidgetUpdate,
    UnknownWidgetType,
    WidgetNotFoundError,
)
from .interaction import (
    ActiveInteraction,
    InputSurface,
    InteractionEngine,
    InteractionKind,
    Point,
    PointerCapture,
    PointerTarget,
)
from .registry import (
    MIN_WIDGET_SIZE,
    WIDGET_CATALOG,
    Position,
    Size,
    Widget,
    WidgetType,
    create_default,
    starter_widgets,
)

__all__ = [
    "ActiveInteraction",
    "CanvasError",
    "ContentDescriptor",
    "Frame",
    "InputSurface",
    "InteractionEngine",
    "InteractionKind",
    "InvalidWidgetUpdate",
    "LayoutContainer",
    "MIN_WIDGET_SIZE",
    "Point",
    "PointerCapture",
    "PointerTarget",
    "Position",
    "Size",
    "UnknownWidgetType",
    "WIDGET_CATALOG",
    "Widget",
    "WidgetNotFoundError",
    "WidgetType",
    "create_default",
    "render",
    "starter_widgets",
]
