"""
Top‑level package for the Playlist Server.

This file makes ``playlist_server`` a Python package so that modules
within ``app`` can be imported using fully qualified names like
``playlist_server.app.main``.  Relative data paths in the settings
(the JSON store, the upload directory and the client assets) are
resolved against this directory.

The package provides no public exports; all functionality lives in
submodules under ``app``.
"""

__all__ = []
