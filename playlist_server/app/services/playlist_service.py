"""
Business logic for playlists and their video items.

Every playlist belongs to exactly one user and is addressed by an id
that is unique within that user's list.  Names are unique per owner,
case-insensitively, and a video can appear at most once per playlist.
Deletions are idempotent: removing something that is not there is
reported as success.
"""

import logging
import secrets
import time
from typing import List, Optional

from ..core.errors import AuthError, ConflictError, NotFoundError, ValidationError
from ..core.store import Store, find_user
from ..schemas.playlist import Playlist, VideoCreate, VideoItem
from ..schemas.user import User


logger = logging.getLogger(__name__)


def new_playlist_id() -> str:
    """Return a time-based id with a random suffix, e.g. ``1718000000000_9f3a1c2b4d5e``."""
    return f"{int(time.time() * 1000)}_{secrets.token_hex(6)}"


def owned_user(users: List[User], username: str) -> User:
    """Return the caller's record or fail as if the session were gone."""
    user = find_user(users, username)
    if user is None:
        raise AuthError("Not logged in")
    return user


def owned_playlist(user: User, playlist_id: str) -> Playlist:
    for playlist in user.playlists:
        if playlist.id == playlist_id:
            return playlist
    raise NotFoundError("Playlist not found")


class PlaylistService:
    """CRUD over a user's playlists and their video items."""

    def __init__(self, store: Store) -> None:
        self.store = store

    def list_playlists(self, username: str) -> List[Playlist]:
        user = find_user(self.store.load(), username)
        return user.playlists if user else []

    def create_playlist(self, username: str, name: Optional[str]) -> Playlist:
        """Create an empty playlist named ``name`` (trimmed)."""
        name = (name or "").strip()
        if not name:
            raise ValidationError("Playlist name required")
        wanted = name.lower()
        with self.store.transaction() as users:
            user = owned_user(users, username)
            if any(p.name.strip().lower() == wanted for p in user.playlists):
                raise ConflictError("Playlist already exists")
            playlist = Playlist(id=new_playlist_id(), name=name, items=[])
            user.playlists.append(playlist)
        logger.info("User %s created playlist %s (%s)", username, playlist.id, name)
        return playlist

    def delete_playlist(self, username: str, playlist_id: str) -> None:
        with self.store.transaction() as users:
            user = owned_user(users, username)
            before = len(user.playlists)
            user.playlists = [p for p in user.playlists if p.id != playlist_id]
            deleted = len(user.playlists) < before
        if deleted:
            logger.info("User %s deleted playlist %s", username, playlist_id)

    def add_video(self, username: str, playlist_id: str, video: VideoCreate) -> bool:
        """Append a video to the playlist.

        Returns ``False`` when the video was already present; nothing is
        written in that case.
        """
        if not video.videoId or not video.title:
            raise ValidationError("videoId and title required")
        item = VideoItem(
            videoId=video.videoId,
            title=video.title,
            thumbnail=video.thumbnail or "",
            channelTitle=video.channelTitle or "",
            views=video.views or "0",
            duration=video.duration or "",
        )
        with self.store.transaction() as users:
            playlist = owned_playlist(owned_user(users, username), playlist_id)
            if any(isinstance(x, VideoItem) and x.videoId == item.videoId for x in playlist.items):
                return False
            playlist.items.append(item)
        return True

    def remove_video(self, username: str, playlist_id: str, video_id: str) -> None:
        with self.store.transaction() as users:
            playlist = owned_playlist(owned_user(users, username), playlist_id)
            playlist.items = [
                x for x in playlist.items
                if not (isinstance(x, VideoItem) and x.videoId == video_id)
            ]
