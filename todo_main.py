"""Main FastAPI application for the todo API."""

from __future__ import annotations

import logging
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI, Request
from fastapi.responses import PlainTextResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

import db
from api.openapi import (
    API_DESCRIPTION,
    API_TITLE,
    API_VERSION,
    OPENAPI_URL,
    SWAGGER_UI_URL,
    TAGS,
)
from api.routes import router as api_router
from config import get_settings
from logging_utils import REQUEST_ID_HEADER, request_scope
from repositories.postgres_repository import PostgresTodoRepository
from services.todo_service import TodoService

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Open the database, apply migrations and wire the service."""
    if getattr(app.state, "todo_service", None) is not None:
        logger.info("Todo service provided; skipping database setup")
        yield
        return

    settings = get_settings()
    pool = await db.init_db(
        settings.database_url,
        min_size=settings.db_pool_min_size,
        max_size=settings.db_pool_max_size,
    )
    try:
        await db.run_migrations(pool, settings.migrations_dir)
        app.state.todo_service = TodoService(PostgresTodoRepository(pool))
        logger.info("Todo API ready")
        yield
    finally:
        app.state.todo_service = None
        await db.close_db()


def create_app(service: Optional[TodoService] = None) -> FastAPI:
    """Build the application; pass ``service`` to bypass database setup."""
    app = FastAPI(
        title=API_TITLE,
        description=API_DESCRIPTION,
        version=API_VERSION,
        openapi_url=OPENAPI_URL,
        docs_url=SWAGGER_UI_URL,
        redoc_url=None,
        openapi_tags=TAGS,
        lifespan=lifespan,
    )
    app.state.todo_service = service

    @app.exception_handler(StarletteHTTPException)
    async def plain_text_http_exception_handler(request: Request, exc: StarletteHTTPException):
        return PlainTextResponse(
            str(exc.detail),
            status_code=exc.status_code,
            headers=exc.headers,
        )

    @app.middleware("http")
    async def request_id_middleware(request: Request, call_next):
        with request_scope(request.headers.get(REQUEST_ID_HEADER)) as request_id:
            response = await call_next(request)
        response.headers[REQUEST_ID_HEADER] = request_id
        return response

    @app.get("/", include_in_schema=False)
    def root() -> dict[str, str]:
        """Root endpoint with basic API info."""
        return {
            "message": API_TITLE,
            "endpoints": "/todos",
            "docs": SWAGGER_UI_URL,
        }

    app.include_router(api_router)
    return app


app = create_app()
