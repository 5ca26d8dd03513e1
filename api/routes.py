"""API routes for todo management."""

import logging
from typing import Annotated, List
from uuid import UUID

from fastapi import APIRouter, Depends, HTTPException, Path, Response, status

from api.dependencies import get_todo_service
from db import StoreError
from models.todo import EXAMPLE_TODO_ID, NewTodo, Todo, UpdateTodo
from services.todo_service import TodoService

logger = logging.getLogger(__name__)

router = APIRouter(tags=["todos"])

NOT_FOUND = "Not found"
_not_found_response = {404: {"description": NOT_FOUND, "content": {"text/plain": {"example": NOT_FOUND}}}}
_failure_response = {500: {"description": "Store failure", "content": {"text/plain": {}}}}

TodoId = Annotated[UUID, Path(description="Todo id", examples=[EXAMPLE_TODO_ID])]


def _store_failure(action: str, exc: StoreError) -> HTTPException:
    logger.exception("Failed to %s: %s", action, exc)
    return HTTPException(status_code=500, detail=str(exc))


@router.get("/todos", response_model=List[Todo], responses=_failure_response, summary="List todos")
async def list_todos(service: TodoService = Depends(get_todo_service)) -> List[Todo]:
    """Return every stored todo; order is not guaranteed."""
    try:
        return await service.get_todos()
    except StoreError as exc:
        raise _store_failure("list todos", exc) from exc


@router.post(
    "/todos",
    response_model=Todo,
    status_code=status.HTTP_201_CREATED,
    responses=_failure_response,
    summary="Create a todo",
)
async def create_todo(
    todo_data: NewTodo,
    service: TodoService = Depends(get_todo_service),
) -> Todo:
    """Create a todo with a server-assigned id and ``completed=false``."""
    try:
        return await service.create_todo(todo_data)
    except StoreError as exc:
        raise _store_failure("create todo", exc) from exc


@router.get(
    "/todos/{todo_id}",
    response_model=Todo,
    responses={**_not_found_response, **_failure_response},
    summary="Get a todo",
)
async def get_todo(
    todo_id: TodoId,
    service: TodoService = Depends(get_todo_service),
) -> Todo:
    try:
        todo = await service.get_todo_by_id(todo_id)
    except StoreError as exc:
        raise _store_failure("get todo", exc) from exc
    if todo is None:
        raise HTTPException(status_code=404, detail=NOT_FOUND)
    return todo


@router.put(
    "/todos/{todo_id}",
    response_model=Todo,
    responses={**_not_found_response, **_failure_response},
    summary="Update a todo",
)
async def update_todo(
    todo_id: TodoId,
    todo_data: UpdateTodo,
    service: TodoService = Depends(get_todo_service),
) -> Todo:
    """Apply a partial update; fields missing from the body keep their values."""
    try:
        todo = await service.update_todo(todo_id, todo_data)
    except StoreError as exc:
        raise _store_failure("update todo", exc) from exc
    if todo is None:
        raise HTTPException(status_code=404, detail=NOT_FOUND)
    return todo


@router.delete(
    "/todos/{todo_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    response_class=Response,
    responses={**_not_found_response, **_failure_response},
    summary="Delete a todo",
)
async def delete_todo(
    todo_id: TodoId,
    service: TodoService = Depends(get_todo_service),
) -> Response:
    try:
        deleted = await service.delete_todo(todo_id)
    except StoreError as exc:
        raise _store_failure("delete todo", exc) from exc
    if not deleted:
        raise HTTPException(status_code=404, detail=NOT_FOUND)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
