"""
Main entrypoint for the Playlist Server.

This module assembles the FastAPI application: it sets up logging,
builds the process-scoped state (JSON store, session table and the
services using them), installs the error handlers and mounts the API
router and static file directories.  ``create_app`` accepts explicit
settings so tests can build fully isolated instances; the module-level
``app`` uses the environment-derived defaults and can be served with::

    uvicorn playlist_server.app.main:app --reload
"""

import logging
import os
from typing import Optional

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from fastapi.staticfiles import StaticFiles

from .api.router import router as api_router
from .core.config import Settings, settings as default_settings
from .core.errors import ServiceError, StorageError
from .core.logging_config import setup_logging
from .core.session import SessionManager
from .core.store import Store
from .services.account_service import AccountService
from .services.playlist_service import PlaylistService
from .services.upload_service import UploadService


logger = logging.getLogger(__name__)


def _describe_validation_error(exc: RequestValidationError) -> str:
    errors = exc.errors()
    if not errors:
        return "Invalid request"
    first = errors[0]
    location = ".".join(str(part) for part in first.get("loc", ()) if part != "body")
    message = first.get("msg", "invalid value")
    return f"{location}: {message}" if location else message


class UploadFiles(StaticFiles):
    """Static files from a directory that may not exist yet."""

    async def check_config(self) -> None:
        if self.directory is not None and not os.path.isdir(self.directory):
            return
        await super().check_config()


def create_app(settings: Optional[Settings] = None) -> FastAPI:
    """Create and configure a FastAPI application.

    Parameters
    ----------
    settings : Optional[Settings]
        Configuration to use.  Defaults to the settings read from the
        environment at import time.

    Returns
    -------
    FastAPI
        A configured FastAPI application instance.
    """
    settings = settings or default_settings
    setup_logging(settings)

    app = FastAPI(title=settings.project_name, version=settings.api_version, debug=settings.debug)

    store = Store(settings.data_path)
    sessions = SessionManager(ttl_seconds=settings.session_ttl_minutes * 60)
    app.state.settings = settings
    app.state.store = store
    app.state.sessions = sessions
    app.state.account_service = AccountService(store, sessions)
    app.state.playlist_service = PlaylistService(store)
    app.state.upload_service = UploadService(store, settings.upload_path, settings.upload_url_prefix)

    @app.exception_handler(ServiceError)
    async def service_error_handler(request: Request, exc: ServiceError) -> JSONResponse:
        if isinstance(exc, StorageError):
            logger.error("%s %s failed: %s", request.method, request.url.path, exc.message)
        else:
            logger.debug("%s %s rejected: %s", request.method, request.url.path, exc.message)
        return JSONResponse(status_code=exc.status_code, content={"error": exc.message})

    @app.exception_handler(RequestValidationError)
    async def request_validation_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
        return JSONResponse(
            status_code=status.HTTP_400_BAD_REQUEST,
            content={"error": _describe_validation_error(exc)},
        )

    app.include_router(api_router, prefix="/api")

    @app.get("/health")
    async def health_check() -> dict:
        return {"status": "healthy"}

    # The upload directory is created by the first upload.
    app.mount(
        settings.upload_url_prefix,
        UploadFiles(directory=str(settings.upload_path), check_dir=False),
        name="uploads",
    )
    if settings.public_path.is_dir():
        app.mount("/", StaticFiles(directory=str(settings.public_path), html=True), name="public")

    logger.info("Store at %s, uploads in %s", settings.data_path, settings.upload_path)
    return app


app = create_app()
