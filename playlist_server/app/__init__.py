"""
Application package initializer.

This package contains the main entrypoint for the API and all of its
submodules.  Accounts and playlists each expose a router defined in
``api/endpoints``; the business rules live in ``services`` and all
state is kept in a single JSON document managed by ``core.store``.
"""

from .main import app  # noqa: F401
