"""Playlist Server API client.

A thin wrapper around the Playlist Server HTTP API built on the
``requests`` library.  The session cookie returned by ``login`` is kept
in the underlying :class:`requests.Session`, so after a successful
login every later call is authenticated automatically.

The client exposes one method per endpoint:

* :meth:`register`, :meth:`login`, :meth:`logout`, :meth:`me`
* :meth:`list_playlists`, :meth:`create_playlist`, :meth:`delete_playlist`
* :meth:`add_video`, :meth:`remove_video`, :meth:`upload_mp3`

Every method returns a tuple ``(data, error)``.  On success ``error``
is ``None``; on failure ``data`` is ``None`` and ``error`` is a
dictionary with the keys ``status_code`` and ``message``.
"""

from __future__ import annotations

import logging
import os
from typing import Any, BinaryIO, Dict, List, Optional, Tuple
from urllib.parse import quote

import requests


logger = logging.getLogger(__name__)

Result = Tuple[Optional[Any], Optional[Dict[str, Any]]]


class PlaylistClient:
    """Client for the Playlist Server API."""

    def __init__(
        self,
        *,
        base_url: str,
        session: Optional[requests.Session] = None,
        timeout: float = 15,
    ) -> None:
        """Initialise the API client.

        Args:
            base_url: Server root, e.g. ``http://localhost:3000``.
            session: Optional requests session.  If not supplied a
                session will be created automatically.
            timeout: Per-request timeout in seconds.
        """
        self.base_url = base_url.rstrip("/")
        self.session = session or requests.Session()
        self.timeout = timeout

    # ------------------------------------------------------------------
    # Low level HTTP helpers
    # ------------------------------------------------------------------
    def _request(
        self,
        method: str,
        path: str,
        *,
        json_body: Any | None = None,
        files: Dict[str, Any] | None = None,
    ) -> Result:
        """Perform an HTTP request to the API.

        Args:
            method: HTTP method (``GET``, ``POST``, ``DELETE``).
            path: Path relative to :attr:`base_url` (e.g. ``/api/me``).
            json_body: JSON body to send with the request.
            files: Multipart files to upload.
        Returns:
            A tuple ``(data, error)``.
        """
        url = f"{self.base_url}{path}"
        try:
            logger.debug("Sending %s request to %s", method, url)
            response = self.session.request(
                method=method,
                url=url,
                json=json_body,
                files=files,
                timeout=self.timeout,
            )
            response.raise_for_status()
            if response.content:
                return response.json(), None
            return None, None
        except requests.HTTPError as exc:
            status = exc.response.status_code if exc.response is not None else None
            message = ""
            if exc.response is not None:
                try:
                    err_json = exc.response.json()
                    message = err_json.get("error") or err_json.get("detail") or str(err_json)
                except ValueError:
                    message = exc.response.text
            if not message:
                message = str(exc)
            logger.error("API request failed (%s): %s", status, message)
            return None, {"status_code": status, "message": message}
        except requests.RequestException as exc:
            logger.error("API request failed: %s", exc)
            return None, {"status_code": None, "message": str(exc)}

    @staticmethod
    def _segment(value: str) -> str:
        return quote(str(value), safe="")

    # ------------------------------------------------------------------
    # Accounts
    # ------------------------------------------------------------------
    def register(
        self,
        username: str,
        password: str,
        email: str,
        first_name: str,
        last_name: str,
        image_url: str,
    ) -> Result:
        return self._request(
            "POST",
            "/api/register",
            json_body={
                "username": username,
                "password": password,
                "email": email,
                "firstName": first_name,
                "lastName": last_name,
                "imageUrl": image_url,
            },
        )

    def login(self, username: str, password: str) -> Result:
        """Log in; on success ``data["user"]`` holds the profile."""
        return self._request("POST", "/api/login", json_body={"username": username, "password": password})

    def logout(self) -> Result:
        return self._request("POST", "/api/logout")

    def me(self) -> Result:
        return self._request("GET", "/api/me")

    # ------------------------------------------------------------------
    # Playlists
    # ------------------------------------------------------------------
    def list_playlists(self) -> Tuple[List[Dict[str, Any]], Optional[Dict[str, Any]]]:
        data, error = self._request("GET", "/api/playlists")
        if error:
            return [], error
        return data or [], None

    def create_playlist(self, name: str) -> Result:
        return self._request("POST", "/api/playlists", json_body={"name": name})

    def delete_playlist(self, playlist_id: str) -> Result:
        return self._request("DELETE", f"/api/playlists/{self._segment(playlist_id)}")

    def add_video(self, playlist_id: str, video: Dict[str, Any]) -> Result:
        """Add a video.  ``video`` needs at least ``videoId`` and ``title``."""
        return self._request(
            "POST",
            f"/api/playlists/{self._segment(playlist_id)}/videos",
            json_body=video,
        )

    def remove_video(self, playlist_id: str, video_id: str) -> Result:
        return self._request(
            "DELETE",
            f"/api/playlists/{self._segment(playlist_id)}/videos/{self._segment(video_id)}",
        )

    def upload_mp3(self, playlist_id: str, fileobj: BinaryIO, filename: Optional[str] = None) -> Result:
        """Upload an audio file into a playlist.

        Args:
            playlist_id: Target playlist.
            fileobj: Open binary file.
            filename: Name reported to the server; defaults to the
                basename of ``fileobj.name``.
        """
        name = filename or os.path.basename(getattr(fileobj, "name", "upload.mp3"))
        return self._request(
            "POST",
            f"/api/playlists/{self._segment(playlist_id)}/mp3",
            files={"mp3": (name, fileobj, "audio/mpeg")},
        )
