"""API dependencies for todo management."""

from fastapi import HTTPException, Request

from services.todo_service import TodoService


def get_todo_service(request: Request) -> TodoService:
    """Dependency for the process-wide todo service instance."""
    service = getattr(request.app.state, "todo_service", None)
    if service is None:
        raise HTTPException(status_code=500, detail="Todo service is not initialized")
    return service
