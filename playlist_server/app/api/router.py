"""
Top‑level API router.

Aggregates the account and playlist routers.  The account routes sit
directly under the API prefix (``/api/register``, ``/api/login``, ...)
while playlist routes live under ``/api/playlists``.
"""

from fastapi import APIRouter

from .endpoints import auth, playlists

router = APIRouter()

router.include_router(auth.router, tags=["auth"])
router.include_router(playlists.router, prefix="/playlists", tags=["playlists"])
