"""
FastAPI application for the Bookshelf API.
"""

import time
from contextlib import asynccontextmanager
from typing import Optional

import structlog
from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from bookshelf import messages
from bookshelf.config import APISettings, settings as default_settings
from bookshelf.models import ErrorResponse, FailResponse
from bookshelf.routes import router
from bookshelf.store import BookStore, generate_book_id

# Setup logging
logger = structlog.get_logger(__name__)


def create_app(store: Optional[BookStore] = None, settings: Optional[APISettings] = None) -> FastAPI:
    """
    Create and configure the Bookshelf application.

    Args:
        store: Book store to serve; a fresh empty store is created when omitted
        settings: API settings; the global settings are used when omitted

    Returns:
        Configured FastAPI application
    """
    settings = settings or default_settings
    if store is None:
        store = BookStore(id_generator=lambda: generate_book_id(settings.id_length))

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        """Application lifespan manager."""
        logger.info("Server running", uri=settings.server_uri, version=settings.api_version)
        yield
        logger.info("Shutting down Bookshelf API", books=len(app.state.book_store))

    app = FastAPI(
        title=settings.api_title,
        description="In-memory REST API for managing a personal bookshelf.",
        version=settings.api_version,
        lifespan=lifespan
    )
    app.state.book_store = store
    app.state.settings = settings

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.middleware("http")
    async def log_requests(request: Request, call_next):
        """Log one line per request, including requests that end in an exception."""
        started = time.perf_counter()
        status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
        with structlog.contextvars.bound_contextvars(method=request.method, path=request.url.path):
            try:
                response = await call_next(request)
                status_code = response.status_code
                return response
            finally:
                logger.info(
                    "Request handled",
                    client=request.client.host if request.client else None,
                    method=request.method,
                    path=request.url.path,
                    query=str(request.url.query) or None,
                    status_code=status_code,
                    duration_ms=round((time.perf_counter() - started) * 1000, 2)
                )

    @app.exception_handler(StarletteHTTPException)
    async def http_exception_handler(request: Request, exc: StarletteHTTPException):
        """Render framework HTTP errors (unknown route, wrong method) as fail responses."""
        return JSONResponse(
            status_code=exc.status_code,
            content=FailResponse(message=str(exc.detail)).model_dump(mode="json"),
            headers=getattr(exc, "headers", None)
        )

    @app.exception_handler(RequestValidationError)
    async def validation_exception_handler(request: Request, exc: RequestValidationError):
        """Reject malformed bodies and parameters with 400 instead of 422."""
        logger.warning("Request validation failed", path=request.url.path, errors=exc.errors())
        return JSONResponse(
            status_code=status.HTTP_400_BAD_REQUEST,
            content=FailResponse(message=messages.INVALID_REQUEST).model_dump(mode="json")
        )

    @app.exception_handler(Exception)
    async def general_exception_handler(request: Request, exc: Exception):
        """Handle unexpected exceptions."""
        logger.error("Unhandled exception", error=str(exc), path=request.url.path, exc_info=exc)
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content=ErrorResponse(
                message=messages.INTERNAL_ERROR,
                detail=str(exc) if settings.debug else None
            ).model_dump(mode="json", exclude_none=True)
        )

    app.include_router(router)
    return app


app = create_app()
