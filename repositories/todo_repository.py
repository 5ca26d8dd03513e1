"""Todo repository - data access layer."""

from __future__ import annotations

import uuid
from typing import Dict, List, Optional, Protocol

from models.todo import NewTodo, Todo, UpdateTodo


class TodoRepository(Protocol):
    """Operations every todo store provides."""

    async def list(self) -> List[Todo]:
        ...

    async def create(self, new: NewTodo) -> Todo:
        ...

    async def get(self, todo_id: uuid.UUID) -> Optional[Todo]:
        ...

    async def update(self, todo_id: uuid.UUID, changes: UpdateTodo) -> Optional[Todo]:
        ...

    async def delete(self, todo_id: uuid.UUID) -> bool:
        ...


def merge_update(current: Todo, changes: UpdateTodo) -> Todo:
    """Apply the fields present in ``changes`` on top of ``current``."""
    return Todo(
        id=current.id,
        title=changes.title if changes.title is not None else current.title,
        completed=changes.completed if changes.completed is not None else current.completed,
    )


class InMemoryTodoRepository:
    """Repository for todo data access with in-memory storage."""

    def __init__(self) -> None:
        self._todos: Dict[uuid.UUID, Todo] = {}

    async def list(self) -> List[Todo]:
        return [todo.model_copy() for todo in self._todos.values()]

    async def create(self, new: NewTodo) -> Todo:
        todo = Todo(id=uuid.uuid4(), title=new.title, completed=False)
        self._todos[todo.id] = todo
        return todo.model_copy()

    async def get(self, todo_id: uuid.UUID) -> Optional[Todo]:
        todo = self._todos.get(todo_id)
        return todo.model_copy() if todo else None

    async def update(self, todo_id: uuid.UUID, changes: UpdateTodo) -> Optional[Todo]:
        current = self._todos.get(todo_id)
        if current is None:
            return None
        stored = merge_update(current, changes)
        self._todos[todo_id] = stored
        return stored.model_copy()

    async def delete(self, todo_id: uuid.UUID) -> bool:
        if todo_id in self._todos:
            del self._todos[todo_id]
            return True
        return False

    def clear(self) -> None:
        """Clear all stored todos (testing helper)."""
        self._todos.clear()
