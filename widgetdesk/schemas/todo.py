from datetime import datetime
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field, computed_field

from ..core.suggestions import priority_label as _priority_label


class TodoCreate(BaseModel):
    """Todo creation request model."""

    title: str = ""
    description: Optional[str] = None
    due_date: Optional[datetime] = None


class TodoUpdate(BaseModel):
    """Todo update request model; unset fields are left alone."""

    title: Optional[str] = None
    description: Optional[str] = None
    completed: Optional[bool] = None
    priority: Optional[int] = Field(default=None, ge=1, le=3)
    due_date: Optional[datetime] = None
    tags: Optional[List[str]] = None
    estimated_duration: Optional[int] = Field(default=None, ge=0)
    actual_duration: Optional[int] = Field(default=None, ge=0)


class Todo(BaseModel):
    """Todo response model."""

    model_config = ConfigDict(from_attributes=True)

    id: str
    user_id: str
    title: str
    description: Optional[str] = None
    completed: bool
    priority: int
    ai_priority_score: float
    ai_suggestions: Optional[Dict[str, Any]] = None
    due_date: Optional[datetime] = None
    tags: List[str] = Field(default_factory=list)
    estimated_duration: Optional[int] = None
    actual_duration: Optional[int] = None
    created_at: datetime
    updated_at: datetime

    @computed_field
    @property
    def priority_label(self) -> str:
        return _priority_label(self.priority)


class TodoList(BaseModel):
    todos: List[Todo]
    active_count: int
