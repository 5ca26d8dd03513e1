"""Todo service - business logic layer."""

from __future__ import annotations

import uuid
from typing import List, Optional

from models.todo import NewTodo, Todo, UpdateTodo
from repositories.todo_repository import InMemoryTodoRepository, TodoRepository


class TodoService:
    """Service for todo business logic.

    Every operation currently forwards to the repository unchanged; this is
    where validation and cross-entity rules belong.
    """

    def __init__(self, repository: Optional[TodoRepository] = None) -> None:
        self.repository = repository or InMemoryTodoRepository()

    async def get_todos(self) -> List[Todo]:
        """Get all todo items."""
        return await self.repository.list()

    async def get_todo_by_id(self, todo_id: uuid.UUID) -> Optional[Todo]:
        """Get a specific todo by ID."""
        return await self.repository.get(todo_id)

    async def create_todo(self, todo_data: NewTodo) -> Todo:
        """Create a new todo item."""
        return await self.repository.create(todo_data)

    async def update_todo(self, todo_id: uuid.UUID, todo_data: UpdateTodo) -> Optional[Todo]:
        """Update an existing todo item."""
        return await self.repository.update(todo_id, todo_data)

    async def delete_todo(self, todo_id: uuid.UUID) -> bool:
        """Delete a todo item."""
        return await self.repository.delete(todo_id)
