"""Test configuration for repo-root tests."""

import sys
from pathlib import Path

import pytest
from fastapi.testclient import TestClient

ROOT = Path(__file__).resolve().parents[1]
sys.path.insert(0, str(ROOT))

from repositories.todo_repository import InMemoryTodoRepository  # noqa: E402
from services.todo_service import TodoService  # noqa: E402
from todo_main import create_app  # noqa: E402


@pytest.fixture
def repository() -> InMemoryTodoRepository:
    return InMemoryTodoRepository()


@pytest.fixture
def todo_service(repository: InMemoryTodoRepository) -> TodoService:
    return TodoService(repository)


@pytest.fixture
def client(todo_service: TodoService) -> TestClient:
    """Provide a TestClient wired to an in-memory service."""
    return TestClient(create_app(service=todo_service))
