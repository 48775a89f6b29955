"""
FastAPI Application Factory

This module builds the FastAPI application and configures:
- The URL store (loaded from the snapshot before the app is returned)
- API routes
- Middleware (logging)
- Exception handlers mapping service errors to HTTP responses

Design Decisions:
- No module-level app or store: create_app() constructs both, so every
  test and every process owns its own store
- A corrupt snapshot propagates out of create_app() and aborts startup
"""

import logging
from typing import Optional

from fastapi import FastAPI, Request, status
from fastapi.responses import PlainTextResponse

from urlpresser import __version__
from urlpresser.api import endpoints
from urlpresser.core.exceptions import InvalidRequestError, StorageError
from urlpresser.core.setting import Settings
from urlpresser.middleware.logging import add_logging_middleware
from urlpresser.services.keygen import KeyGenerator
from urlpresser.services.url_store import URLStore
from urlpresser.storage.json_file import get_snapshot_storage

logger = logging.getLogger(__name__)


async def invalid_request_handler(request: Request, exc: InvalidRequestError) -> PlainTextResponse:
    logger.debug(f"Rejected {request.method} {request.url.path}: {exc}")
    return PlainTextResponse("Invalid request", status_code=status.HTTP_400_BAD_REQUEST)


async def storage_error_handler(request: Request, exc: StorageError) -> PlainTextResponse:
    logger.error(f"Storage failure on {request.method} {request.url.path}: {exc}")
    return PlainTextResponse(
        "Internal server error",
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR
    )


def build_store(settings: Settings) -> URLStore:
    """
    Create the URL store described by `settings`.

    Raises:
        SnapshotCorruptedError: If the snapshot file is malformed
        StorageError: If the snapshot file cannot be read or created
    """
    return URLStore.open(
        storage=get_snapshot_storage(settings.FILE_STORAGE_PATH),
        generator=KeyGenerator(length=settings.SHORT_CODE_LENGTH),
        fail_on_persist_error=settings.FAIL_ON_PERSIST_ERROR
    )


def create_app(settings: Optional[Settings] = None, store: Optional[URLStore] = None) -> FastAPI:
    """
    Create and configure the FastAPI application.

    Args:
        settings: Configuration (default: read from the environment)
        store: Pre-built store; built from settings when omitted

    Returns:
        Configured FastAPI app with a ready store
    """
    settings = settings or Settings()
    if store is None:
        store = build_store(settings)

    app = FastAPI(
        title="URL Shortener Service",
        description="Shortens URLs and redirects short links back to them",
        version=__version__,
        docs_url="/docs",
        redoc_url="/redoc",
    )

    app.state.settings = settings
    app.state.store = store

    app.add_exception_handler(InvalidRequestError, invalid_request_handler)
    app.add_exception_handler(StorageError, storage_error_handler)

    add_logging_middleware(app)

    # Root endpoint defined before the router's POST / and GET /{short_code}
    @app.get("/", tags=["Health"])
    async def root():
        """
        Root endpoint for health checks.
        """
        return {
            "message": "URL Shortener Service",
            "version": __version__
        }

    app.include_router(endpoints.router, tags=["URL Shortener"])

    return app
