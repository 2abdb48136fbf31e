"""
GutCheck FastAPI Application
Main entry point: application context, middleware, error handlers and routers
"""

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.exceptions import RequestValidationError
from fastapi.staticfiles import StaticFiles
from starlette.exceptions import HTTPException as StarletteHTTPException
import logging
import uvicorn
from contextlib import asynccontextmanager
import anyio

from api.routes import auth, meals, poops, health

from app.config import settings, StorageBackendType
from app.context import AppContext
from app.exceptions import ServiceError

from api.middleware import (
    RequestLoggingMiddleware,
    validation_exception_handler,
    http_exception_handler,
    service_exception_handler,
    general_exception_handler,
)

# Setup logging with configured level and format
logging.basicConfig(
    level=getattr(logging, settings.log_level.upper()), format=settings.log_format
)
_logger = logging.getLogger("gutcheck.main")


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Lifespan context manager for application startup and shutdown.
    Builds the AppContext (MongoDB connection with retries, indexes, storage backend).
    """
    _logger.info(f"Starting GutCheck in {settings.environment.value} mode")

    # Blocking connect/retry loop runs in a worker thread
    context = await anyio.to_thread.run_sync(AppContext.create, settings)
    app.state.context = context

    try:
        yield
    finally:
        _logger.info("Shutting down GutCheck")
        try:
            context.close()
        except Exception as e:
            _logger.exception("Error closing application context during shutdown: %s", e)


app = FastAPI(
    title=settings.api_title,
    version=settings.app_version,
    description=settings.api_description,
    lifespan=lifespan,
    debug=settings.debug,
    openapi_url=(
        f"{settings.api_prefix}/openapi.json" if not settings.is_production() else None
    ),
    docs_url=f"{settings.api_prefix}/docs" if not settings.is_production() else None,
    redoc_url=f"{settings.api_prefix}/redoc" if not settings.is_production() else None,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=settings.cors_allow_credentials,
    allow_methods=settings.cors_allow_methods,
    allow_headers=settings.cors_allow_headers,
)

app.add_middleware(RequestLoggingMiddleware)

app.add_exception_handler(RequestValidationError, validation_exception_handler)
app.add_exception_handler(StarletteHTTPException, http_exception_handler)
app.add_exception_handler(ServiceError, service_exception_handler)
app.add_exception_handler(Exception, general_exception_handler)

app.include_router(health.router)
app.include_router(auth.router, prefix=settings.api_prefix)
app.include_router(meals.router, prefix=settings.api_prefix)
app.include_router(poops.router, prefix=settings.api_prefix)

# Locally stored images are served straight from disk; the directory is
# created by AppContext.create at startup.
if settings.storage_backend == StorageBackendType.LOCAL:
    app.mount(
        settings.uploads_url_path,
        StaticFiles(directory=settings.uploads_dir, check_dir=False),
        name="uploads",
    )


if __name__ == "__main__":
    uvicorn.run(
        "main:app",
        host=settings.host,
        port=settings.port,
        reload=settings.is_development(),
        log_level=settings.log_level.lower(),
    )
