"""FastAPI application factory."""

import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse

from journal_gallery.api.gallery import router as gallery_router
from journal_gallery.app_logging import configure_logging
from journal_gallery.containers import AppContainer
from journal_gallery.domain.errors import (
    ConcurrentReorder,
    GalleryError,
    NotFound,
    ValidationFailure,
)


def create_app(container: AppContainer) -> FastAPI:
    """Create a FastAPI app configured with dependencies."""
    configure_logging(container.settings.log_level)
    logger = logging.getLogger(__name__)

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        logger.info("Starting journal gallery: env=%s", container.settings.environment)
        yield

    app = FastAPI(lifespan=lifespan)
    app.state.container = container

    app.include_router(gallery_router)

    @app.exception_handler(GalleryError)
    async def gallery_error_handler(
        request: Request, exc: GalleryError
    ) -> JSONResponse:
        status_code = _status_for(exc)
        if status_code >= status.HTTP_500_INTERNAL_SERVER_ERROR:
            logger.warning("Request failed: path=%s error=%s", request.url.path, exc)
        return JSONResponse(status_code=status_code, content={"detail": str(exc)})

    @app.get("/health")
    async def health() -> dict[str, str]:
        """Simple health check endpoint."""
        return {"status": "ok"}

    return app


def _status_for(exc: GalleryError) -> int:
    if isinstance(exc, ValidationFailure):
        return status.HTTP_400_BAD_REQUEST
    if isinstance(exc, NotFound):
        return status.HTTP_404_NOT_FOUND
    if isinstance(exc, ConcurrentReorder):
        return status.HTTP_409_CONFLICT
    return status.HTTP_502_BAD_GATEWAY
