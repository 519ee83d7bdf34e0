"""Maps a widget's type to the content it hosts."""

from typing import Any, Callable, Dict, Literal, Optional

from loguru import logger
from pydantic import BaseModel, Field

from .registry import Widget, WidgetType

ContentKind = Literal["todo", "notes", "calendar", "files", "loading", "placeholder"]


class ContentDescriptor(BaseModel):
    """What a widget body should show and which collaborator feeds it."""

    kind: ContentKind
    title: Optional[str] = None
    description: Optional[str] = None
    source: Optional[str] = None  # API path of the backing collaborator
    props: Dict[str, Any] = Field(default_factory=dict)


def _todo_content(user_id: str) -> ContentDescriptor:
    return ContentDescriptor(kind="todo", source="/api/todos", props={"userId": user_id})


def _notes_content(user_id: str) -> ContentDescriptor:
    return ContentDescriptor(kind="notes", source="/api/notes", props={"userId": user_id})


def _calendar_content(user_id: Optional[str]) -> ContentDescriptor:
    return ContentDescriptor(
        kind="calendar",
        title="Smart Calendar",
        description="Intelligent scheduling with conflict detection and AI suggestions",
        props={"status": "coming-soon"},
    )


def _files_content(user_id: Optional[str]) -> ContentDescriptor:
    return ContentDescriptor(
        kind="files",
        title="File Intelligence",
        description="Smart file organization with AI-powered search and tagging",
        props={"status": "coming-soon"},
    )


# Types whose collaborator needs the authenticated user's id
_USER_BOUND: Dict[WidgetType, Callable[[str], ContentDescriptor]] = {
    WidgetType.TODO: _todo_content,
    WidgetType.NOTES: _notes_content,
}

_STATIC: Dict[WidgetType, Callable[[Optional[str]], ContentDescriptor]] = {
    WidgetType.CALENDAR: _calendar_content,
    WidgetType.FILES: _files_content,
}

LOADING = ContentDescriptor(kind="loading")
GENERIC_PLACEHOLDER = ContentDescriptor(kind="placeholder", title="Widget content")


def render(widget: Widget, user_id: Optional[str] = None) -> ContentDescriptor:
    """Pick the content for ``widget``.

    Todo and notes content shows a loading placeholder until ``user_id`` is
    known. A type outside the enumeration yields a generic placeholder.
    """
    try:
        widget_type = WidgetType(getattr(widget, "type", None))
    except ValueError:
        logger.warning(f"No content for widget type {getattr(widget, 'type', None)!r}")
        return GENERIC_PLACEHOLDER.model_copy()

    if widget_type in _USER_BOUND:
        if not user_id:
            return LOADING.model_copy()
        return _USER_BOUND[widget_type](user_id)
    return _STATIC[widget_type](user_id)
