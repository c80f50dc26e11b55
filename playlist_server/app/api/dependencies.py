"""
FastAPI dependencies giving endpoints access to process-scoped state.

``create_app`` stores the store, the session table and the services on
``app.state``; these helpers fetch them for the current request so that
each application instance (for example one per test) stays isolated.
"""

from fastapi import Request

from ..services.account_service import AccountService
from ..services.playlist_service import PlaylistService
from ..services.upload_service import UploadService


def get_account_service(request: Request) -> AccountService:
    return request.app.state.account_service


def get_playlist_service(request: Request) -> PlaylistService:
    return request.app.state.playlist_service


def get_upload_service(request: Request) -> UploadService:
    return request.app.state.upload_service
