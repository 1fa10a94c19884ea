"""FastAPI application entrypoint."""

from __future__ import annotations

import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from typing import Any

from fastapi import FastAPI, Request
from fastapi.exception_handlers import request_validation_exception_handler
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from pymongo import MongoClient
from pymongo.errors import PyMongoError

from blog_api.core.config import get_settings
from blog_api.core.log_utils import configure_logging, safe_log_identifier
from blog_api.errors import ApiError
from blog_api.routes import posts_router
from blog_api.schemas.error import ErrorResponse

logger = logging.getLogger(__name__)

_BAD_REQUEST_VALIDATION_PATHS: set[tuple[str, str]] = {
    ("POST", "/posts"),
    ("PUT", "/posts/{postId}"),
}


def _error_fields(exc: RequestValidationError) -> list[str]:
    return [".".join(str(part) for part in error.get("loc", ()) if part != "body") for error in exc.errors()]


def create_app(client: Any | None = None, database_name: str | None = None) -> FastAPI:
    """Build the API around ``client``, or a ``MongoClient`` for the configured database URL."""
    settings = get_settings()
    configure_logging(settings.log_level)

    owns_client = client is None
    if client is None:
        client = MongoClient(settings.database_url)

    @asynccontextmanager
    async def lifespan(_: FastAPI) -> AsyncIterator[None]:
        logger.info("server.started database=%s", app.state.database.name)
        yield
        if owns_client:
            client.close()
        logger.info("server.stopped database=%s", app.state.database.name)

    app = FastAPI(title="Blog Posts API", version="1.0.0", lifespan=lifespan)
    app.state.mongo_client = client
    app.state.database = client[database_name or settings.database_name]

    @app.exception_handler(ApiError)
    async def handle_api_error(_, exc: ApiError) -> JSONResponse:
        return JSONResponse(
            status_code=exc.status_code,
            content=exc.payload.model_dump(mode="json", exclude_none=True),
        )

    @app.exception_handler(RequestValidationError)
    async def handle_validation_error(request: Request, exc: RequestValidationError) -> JSONResponse:
        route = request.scope.get("route")
        route_path = getattr(route, "path", request.url.path)
        if (request.method.upper(), route_path) in _BAD_REQUEST_VALIDATION_PATHS:
            payload = ErrorResponse(
                code="VALIDATION_ERROR",
                message="Invalid post payload",
                details={"fields": _error_fields(exc)},
            )
            return JSONResponse(status_code=400, content=payload.model_dump())

        return await request_validation_exception_handler(request, exc)

    @app.exception_handler(PyMongoError)
    async def handle_database_error(request: Request, exc: PyMongoError) -> JSONResponse:
        logger.error(
            "database.failed correlation_id=%s method=%s path=%s reason=%s",
            safe_log_identifier(getattr(request.state, "correlation_id", None), prefix="cid"),
            request.method,
            request.url.path,
            type(exc).__name__,
        )
        payload = ErrorResponse(code="DATABASE_ERROR", message="Internal server error")
        return JSONResponse(status_code=500, content=payload.model_dump(exclude_none=True))

    app.include_router(posts_router)

    return app


app = create_app()
