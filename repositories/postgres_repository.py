"""PostgreSQL-backed todo repository."""

from __future__ import annotations

import uuid
from typing import List, Optional

import asyncpg

from db import StoreError
from models.todo import NewTodo, Todo, UpdateTodo
from repositories.todo_repository import merge_update

_DB_ERRORS = (asyncpg.PostgresError, asyncpg.InterfaceError, OSError)


def _row_to_todo(row: Optional[asyncpg.Record]) -> Optional[Todo]:
    if row is None:
        return None
    return Todo(id=row["id"], title=row["title"], completed=row["completed"])


def _store_error(action: str, exc: Exception) -> StoreError:
    return StoreError(f"Database {action} failed: {exc}")


class PostgresTodoRepository:
    """Owns all SQL for the ``todos`` table."""

    def __init__(self, pool: asyncpg.Pool) -> None:
        self.pool = pool

    async def list(self) -> List[Todo]:
        try:
            async with self.pool.acquire() as conn:
                rows = await conn.fetch("SELECT id, title, completed FROM todos")
        except _DB_ERRORS as exc:
            raise _store_error("list", exc) from exc
        return [_row_to_todo(row) for row in rows]

    async def create(self, new: NewTodo) -> Todo:
        todo_id = uuid.uuid4()
        try:
            async with self.pool.acquire() as conn:
                row = await conn.fetchrow(
                    """
                    INSERT INTO todos (id, title, completed)
                    VALUES ($1, $2, $3)
                    RETURNING id, title, completed
                    """,
                    todo_id,
                    new.title,
                    False,
                )
        except _DB_ERRORS as exc:
            raise _store_error("create", exc) from exc
        return _row_to_todo(row)

    async def get(self, todo_id: uuid.UUID) -> Optional[Todo]:
        try:
            async with self.pool.acquire() as conn:
                row = await conn.fetchrow(
                    "SELECT id, title, completed FROM todos WHERE id = $1",
                    todo_id,
                )
        except _DB_ERRORS as exc:
            raise _store_error("get", exc) from exc
        return _row_to_todo(row)

    async def update(self, todo_id: uuid.UUID, changes: UpdateTodo) -> Optional[Todo]:
        # Read and write share one transaction; the row lock serializes concurrent PUTs.
        try:
            async with self.pool.acquire() as conn:
                async with conn.transaction():
                    current = _row_to_todo(
                        await conn.fetchrow(
                            "SELECT id, title, completed FROM todos WHERE id = $1 FOR UPDATE",
                            todo_id,
                        )
                    )
                    if current is None:
                        return None
                    merged = merge_update(current, changes)
                    row = await conn.fetchrow(
                        """
                        UPDATE todos
                        SET title = $1, completed = $2
                        WHERE id = $3
                        RETURNING id, title, completed
                        """,
                        merged.title,
                        merged.completed,
                        todo_id,
                    )
        except _DB_ERRORS as exc:
            raise _store_error("update", exc) from exc
        return _row_to_todo(row)

    async def delete(self, todo_id: uuid.UUID) -> bool:
        try:
            async with self.pool.acquire() as conn:
                status = await conn.execute("DELETE FROM todos WHERE id = $1", todo_id)
        except _DB_ERRORS as exc:
            raise _store_error("delete", exc) from exc
        # asyncpg returns the command tag, e.g. "DELETE 1".
        return int(status.split()[-1]) > 0
