"""WidgetDesk: a personal dashboard of draggable, resizable widgets."""

__version__ = "0.1.0"
