"""
Simple configuration management.

The ``Settings`` dataclass reads configuration directly from
environment variables.  Defaults are provided for all fields so the
server starts without any configuration.  Relative paths (store file,
upload directory, client assets) are resolved against the
``playlist_server`` package directory by :meth:`Settings.resolve_path`.
"""

import os
from dataclasses import dataclass
from pathlib import Path


BASE_DIR = Path(__file__).resolve().parent.parent.parent  # playlist_server/


@dataclass
class Settings:
    """Application settings loaded from environment variables."""

    project_name: str = os.getenv("PROJECT_NAME", "Playlist Server")
    api_version: str = os.getenv("API_VERSION", "1.0.0")
    debug: bool = os.getenv("DEBUG", "false").lower() in {"1", "true", "yes"}
    log_level: str = os.getenv("LOG_LEVEL", "INFO")
    log_file: str = os.getenv("LOG_FILE", "")
    # Per-request lines from uvicorn.access.
    access_log: bool = os.getenv("ACCESS_LOG", "true").lower() in {"1", "true", "yes"}

    host: str = os.getenv("HOST", "0.0.0.0")
    port: int = int(os.getenv("PORT", "3000"))

    # The whole database: a JSON array of users with their nested
    # playlists.
    data_file: str = os.getenv("DATA_FILE", os.path.join("db", "users.json"))

    # Uploaded audio files live here and are served read-only under
    # ``upload_url_prefix``.  The directory is created on first upload.
    upload_dir: str = os.getenv("UPLOAD_DIR", "uploads")
    upload_url_prefix: str = os.getenv("UPLOAD_URL_PREFIX", "/uploads")

    # Static client assets.  Mounted at ``/`` only when the directory exists.
    public_dir: str = os.getenv("PUBLIC_DIR", "public")

    session_cookie_name: str = os.getenv("SESSION_COOKIE_NAME", "sid")
    # Idle lifetime of a session in minutes.  ``0`` keeps sessions until
    # logout or process exit.
    session_ttl_minutes: int = int(os.getenv("SESSION_TTL_MINUTES", "0"))

    def resolve_path(self, value: str) -> Path:
        """Return ``value`` as an absolute path.

        Absolute paths are returned unchanged; relative ones are resolved
        against the package directory.
        """
        path = Path(value)
        if path.is_absolute():
            return path
        return (BASE_DIR / path).resolve()

    @property
    def data_path(self) -> Path:
        return self.resolve_path(self.data_file)

    @property
    def upload_path(self) -> Path:
        return self.resolve_path(self.upload_dir)

    @property
    def public_path(self) -> Path:
        return self.resolve_path(self.public_dir)


# Instantiate settings once so other modules can import it without
# repeatedly reading environment variables.  Because the dataclass
# computes defaults at import time, environment variables should be set
# before importing this module.
settings = Settings()
