from typing import Any, Dict, List, Literal, Optional

from pydantic import BaseModel, Field

from ..core.canvas import ContentDescriptor, PointerTarget, Widget, WidgetType
from ..core.canvas.interaction import InteractionKind


class AddWidgetRequest(BaseModel):
    type: WidgetType


class WidgetUpdateRequest(BaseModel):
    """Partial widget update; ``position`` and ``size`` may be partial too."""

    title: Optional[str] = None
    position: Optional[Dict[str, float]] = None
    size: Optional[Dict[str, float]] = None
    isMinimized: Optional[bool] = None
    isFullScreen: Optional[bool] = None

    def fields(self) -> Dict[str, Any]:
        return self.model_dump(exclude_unset=True)


class PointerEventRequest(BaseModel):
    phase: Literal["down", "move", "up"]
    x: float = Field(allow_inf_nan=False)
    y: float = Field(allow_inf_nan=False)
    widget_id: Optional[str] = Field(None, description="Required for pointer-down")
    target: PointerTarget = PointerTarget.HEADER


class InteractionView(BaseModel):
    widget_id: str
    kind: InteractionKind
    handle: Optional[PointerTarget] = None


class PointerEventResult(BaseModel):
    handled: bool
    interaction: Optional[InteractionView] = None


class FrameView(BaseModel):
    x: float
    y: float
    width: float
    height: float
    z_index: int
    resizable: bool


class WidgetView(BaseModel):
    widget: Widget
    frame: FrameView
    content: ContentDescriptor


class Viewport(BaseModel):
    width: int = Field(gt=0)
    height: int = Field(gt=0)


class CanvasView(BaseModel):
    """The canvas as it should be drawn, bottom-most widget first."""

    widgets: List[WidgetView] = Field(default_factory=list)
    interaction: Optional[InteractionView] = None
    viewport: Viewport
    empty: bool = False
