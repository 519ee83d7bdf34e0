"""Widget types, the widget model, and the default-widget factory."""

import random
import time
import uuid
from enum import Enum
from typing import Dict, List, Optional, Union

from pydantic import BaseModel, Field

from .errors import UnknownWidgetType

MIN_WIDGET_SIZE = 200
DEFAULT_WIDTH = 400
DEFAULT_HEIGHT = 300
DEFAULT_PLACEMENT_JITTER = 200


class WidgetType(str, Enum):
    """The closed set of widget kinds a canvas can host."""

    TODO = "todo"
    NOTES = "notes"
    CALENDAR = "calendar"
    FILES = "files"


WIDGET_TITLES: Dict[WidgetType, str] = {
    WidgetType.TODO: "Tasks",
    WidgetType.NOTES: "Notes",
    WidgetType.CALENDAR: "Calendar",
    WidgetType.FILES: "Files",
}


class Position(BaseModel):
    """Top-left corner of a widget on the canvas."""

    x: float = Field(default=0, ge=0, allow_inf_nan=False)
    y: float = Field(default=0, ge=0, allow_inf_nan=False)


class Size(BaseModel):
    """Widget dimensions, bounded below in both axes."""

    width: float = Field(default=DEFAULT_WIDTH, ge=MIN_WIDGET_SIZE, allow_inf_nan=False)
    height: float = Field(default=DEFAULT_HEIGHT, ge=MIN_WIDGET_SIZE, allow_inf_nan=False)


class Widget(BaseModel):
    """A positioned, resizable panel on the canvas."""

    id: str
    type: WidgetType
    title: str
    position: Position = Field(default_factory=Position)
    size: Size = Field(default_factory=Size)
    isMinimized: bool = False
    isFullScreen: bool = False


class WidgetCatalogEntry(BaseModel):
    """Side-panel metadata for a widget type. Icon and color are presentational."""

    type: WidgetType
    title: str
    description: str
    icon: str
    color: str


WIDGET_CATALOG: List[WidgetCatalogEntry] = [
    WidgetCatalogEntry(
        type=WidgetType.TODO,
        title="Todo List",
        description="AI-powered task management",
        icon="check-square",
        color="emerald",
    ),
    WidgetCatalogEntry(
        type=WidgetType.NOTES,
        title="Notes",
        description="Rich text editor with AI",
        icon="file-text",
        color="cyan",
    ),
    WidgetCatalogEntry(
        type=WidgetType.CALENDAR,
        title="Calendar",
        description="Smart scheduling assistant",
        icon="calendar",
        color="purple",
    ),
    WidgetCatalogEntry(
        type=WidgetType.FILES,
        title="File Manager",
        description="Intelligent file organization",
        icon="folder-open",
        color="orange",
    ),
]

# Fixed slots for the widgets a fresh canvas starts with: a 2x2 grid
STARTER_SLOTS: Dict[WidgetType, Position] = {
    WidgetType.TODO: Position(x=0, y=0),
    WidgetType.NOTES: Position(x=420, y=0),
    WidgetType.CALENDAR: Position(x=0, y=320),
    WidgetType.FILES: Position(x=420, y=320),
}


def coerce_widget_type(value: Union[str, WidgetType]) -> WidgetType:
    """Return the ``WidgetType`` for ``value`` or raise ``UnknownWidgetType``."""
    try:
        return WidgetType(value)
    except ValueError:
        raise UnknownWidgetType(value)


def new_widget_id(widget_type: WidgetType) -> str:
    """Build a ``<type>-<timestamp>-<suffix>`` id.

    The millisecond timestamp alone collides when two widgets of the same
    type are created in the same millisecond, so a random suffix is appended.
    """
    return f"{widget_type.value}-{int(time.time() * 1000)}-{uuid.uuid4().hex[:8]}"


def random_position(
    rng: Optional[random.Random] = None, jitter: float = DEFAULT_PLACEMENT_JITTER
) -> Position:
    """Pick a start position in ``[0, jitter)`` on both axes.

    This avoids stacking new widgets exactly on top of each other but does
    not guarantee they do not overlap.
    """
    rng = rng or random
    return Position(x=rng.random() * jitter, y=rng.random() * jitter)


def create_default(
    widget_type: Union[str, WidgetType],
    position: Optional[Position] = None,
    widget_id: Optional[str] = None,
    rng: Optional[random.Random] = None,
    jitter: float = DEFAULT_PLACEMENT_JITTER,
) -> Widget:
    """Create a widget of ``widget_type`` with default geometry.

    Args:
        widget_type: One of the ``WidgetType`` values
        position: Fixed start position; a random offset is used when omitted
        widget_id: Explicit id; a fresh unique id is generated when omitted
        rng: Random source for the start position
        jitter: Upper bound of the random start offset

    Returns:
        A widget that is neither minimized nor full-screen

    Raises:
        UnknownWidgetType: If ``widget_type`` is not in the enumeration
    """
    widget_type = coerce_widget_type(widget_type)
    return Widget(
        id=widget_id or new_widget_id(widget_type),
        type=widget_type,
        title=WIDGET_TITLES[widget_type],
        position=position if position is not None else random_position(rng, jitter),
        size=Size(width=DEFAULT_WIDTH, height=DEFAULT_HEIGHT),
    )


def starter_widgets() -> List[Widget]:
    """The four widgets a new canvas is seeded with, one per type."""
    return [
        create_default(
            widget_type,
            position=slot.model_copy(),
            widget_id=f"{widget_type.value}-1",
        )
        for widget_type, slot in STARTER_SLOTS.items()
    ]
