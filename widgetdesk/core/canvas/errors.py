"""Errors raised by the canvas layout core."""


class CanvasError(Exception):
    """Base class for canvas errors."""


class UnknownWidgetType(CanvasError, ValueError):
    """Raised when a widget type outside the closed set is requested."""

    def __init__(self, widget_type: object):
        self.widget_type = widget_type
        super().__init__(f"Unknown widget type: {widget_type!r}")


class WidgetNotFoundError(CanvasError, KeyError):
    """Raised when no widget in the collection has the given id."""

    def __init__(self, widget_id: str):
        self.widget_id = widget_id
        super().__init__(widget_id)

    def __str__(self) -> str:
        return f"Widget not found: {self.widget_id}"


class InvalidWidgetUpdate(CanvasError, ValueError):
    """Raised when an update names immutable fields or breaks geometry bounds."""
