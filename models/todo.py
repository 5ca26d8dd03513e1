"""Todo data models using Pydantic."""

from __future__ import annotations

from typing import Optional
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field

EXAMPLE_TODO_ID = "d290f1ee-6c54-4b01-90e6-d701748f0851"


class NewTodo(BaseModel):
    """Request body for creating a todo."""

    title: str = Field(..., examples=["buy milk"])

    model_config = ConfigDict(strict=True)


class UpdateTodo(BaseModel):
    """Request body for a partial update; missing fields are left unchanged."""

    title: Optional[str] = Field(None, examples=["buy oat milk"])
    completed: Optional[bool] = Field(None, examples=[True])

    model_config = ConfigDict(strict=True)


class Todo(BaseModel):
    """Stored todo record."""

    id: UUID = Field(..., examples=[EXAMPLE_TODO_ID])
    title: str = Field(..., examples=["buy milk"])
    completed: bool = Field(..., examples=[False])

    model_config = ConfigDict(from_attributes=True)
