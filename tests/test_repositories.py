"""Repository tests."""

import uuid

import pytest

from db import StoreError
from fakes import FakeConnection, FakePool
from models.todo import NewTodo, Todo, UpdateTodo
from repositories.postgres_repository import PostgresTodoRepository
from repositories.todo_repository import InMemoryTodoRepository, merge_update


def make_row(todo_id, title="buy milk", completed=False):
    return {"id": todo_id, "title": title, "completed": completed}


@pytest.mark.asyncio
async def test_in_memory_repository_crud() -> None:
    """Repository can create, update, and delete todos."""
    repository = InMemoryTodoRepository()

    todo = await repository.create(NewTodo(title="Repo todo"))
    assert await repository.get(todo.id) == todo

    updated = await repository.update(todo.id, UpdateTodo(completed=True))
    assert updated is not None
    assert updated.completed is True

    assert await repository.delete(todo.id) is True
    assert await repository.get(todo.id) is None
    assert await repository.list() == []


@pytest.mark.asyncio
async def test_in_memory_returns_copies() -> None:
    repository = InMemoryTodoRepository()
    todo = await repository.create(NewTodo(title="Original"))

    todo.title = "Mutated by caller"

    stored = await repository.get(todo.id)
    assert stored is not None
    assert stored.title == "Original"


@pytest.mark.asyncio
async def test_in_memory_clear() -> None:
    repository = InMemoryTodoRepository()
    await repository.create(NewTodo(title="One"))

    repository.clear()

    assert await repository.list() == []


def test_merge_update_keeps_missing_fields() -> None:
    current = Todo(id=uuid.uuid4(), title="Old", completed=True)

    assert merge_update(current, UpdateTodo()) == current
    assert merge_update(current, UpdateTodo(title="New")) == Todo(
        id=current.id, title="New", completed=True
    )
    assert merge_update(current, UpdateTodo(completed=False)) == Todo(
        id=current.id, title="Old", completed=False
    )


class TestPostgresTodoRepository:
    @pytest.mark.asyncio
    async def test_list_maps_rows(self) -> None:
        first, second = uuid.uuid4(), uuid.uuid4()
        conn = FakeConnection(rows=[make_row(first), make_row(second, "walk dog", True)])
        repository = PostgresTodoRepository(FakePool(conn))

        todos = await repository.list()

        assert todos == [
            Todo(id=first, title="buy milk", completed=False),
            Todo(id=second, title="walk dog", completed=True),
        ]
        assert conn.calls == [("fetch", "SELECT id, title, completed FROM todos", ())]

    @pytest.mark.asyncio
    async def test_create_inserts_new_uuid_and_false(self) -> None:
        conn = FakeConnection(
            fetchrow_results=[lambda todo_id, title, completed: make_row(todo_id, title, completed)]
        )
        repository = PostgresTodoRepository(FakePool(conn))

        todo = await repository.create(NewTodo(title="buy milk"))

        method, sql, args = conn.calls[0]
        assert method == "fetchrow"
        assert sql.startswith("INSERT INTO todos (id, title, completed)")
        assert "RETURNING id, title, completed" in sql
        assert isinstance(args[0], uuid.UUID)
        assert args[1:] == ("buy milk", False)
        assert todo == Todo(id=args[0], title="buy milk", completed=False)

    @pytest.mark.asyncio
    async def test_get_missing_returns_none(self) -> None:
        todo_id = uuid.uuid4()
        conn = FakeConnection(fetchrow_results=[None])
        repository = PostgresTodoRepository(FakePool(conn))

        assert await repository.get(todo_id) is None
        assert conn.calls == [
            ("fetchrow", "SELECT id, title, completed FROM todos WHERE id = $1", (todo_id,))
        ]

    @pytest.mark.asyncio
    async def test_update_merges_and_binds_id(self) -> None:
        todo_id = uuid.uuid4()
        conn = FakeConnection(
            fetchrow_results=[
                make_row(todo_id, "buy milk", False),
                lambda title, completed, row_id: make_row(row_id, title, completed),
            ]
        )
        repository = PostgresTodoRepository(FakePool(conn))

        todo = await repository.update(todo_id, UpdateTodo(completed=True))

        assert todo == Todo(id=todo_id, title="buy milk", completed=True)
        select_call, update_call = conn.calls
        assert select_call[1].endswith("WHERE id = $1 FOR UPDATE")
        assert update_call[1].startswith("UPDATE todos SET title = $1, completed = $2 WHERE id = $3")
        assert update_call[2] == ("buy milk", True, todo_id)
        assert conn.transactions == 1
        assert conn.commits == 1

    @pytest.mark.asyncio
    async def test_update_missing_row_skips_write(self) -> None:
        conn = FakeConnection(fetchrow_results=[None])
        repository = PostgresTodoRepository(FakePool(conn))

        assert await repository.update(uuid.uuid4(), UpdateTodo(title="x")) is None
        assert len(conn.calls) == 1

    @pytest.mark.asyncio
    async def test_empty_update_rewrites_current_values(self) -> None:
        todo_id = uuid.uuid4()
        conn = FakeConnection(
            fetchrow_results=[
                make_row(todo_id, "same", True),
                lambda title, completed, row_id: make_row(row_id, title, completed),
            ]
        )
        repository = PostgresTodoRepository(FakePool(conn))

        todo = await repository.update(todo_id, UpdateTodo())

        assert todo == Todo(id=todo_id, title="same", completed=True)
        assert conn.calls[1][2] == ("same", True, todo_id)

    @pytest.mark.asyncio
    @pytest.mark.parametrize("status, expected", [("DELETE 1", True), ("DELETE 0", False)])
    async def test_delete_reports_affected_rows(self, status: str, expected: bool) -> None:
        todo_id = uuid.uuid4()
        conn = FakeConnection(execute_result=status)
        repository = PostgresTodoRepository(FakePool(conn))

        assert await repository.delete(todo_id) is expected
        assert conn.calls == [("execute", "DELETE FROM todos WHERE id = $1", (todo_id,))]

    @pytest.mark.asyncio
    async def test_database_errors_become_store_errors(self) -> None:
        conn = FakeConnection(error=OSError("connection refused"))
        repository = PostgresTodoRepository(FakePool(conn))

        with pytest.raises(StoreError, match="connection refused"):
            await repository.list()
        with pytest.raises(StoreError, match="Database update failed"):
            await repository.update(uuid.uuid4(), UpdateTodo())
