"""
Audio upload handling.

Uploaded files are written to the upload directory under a generated
name ``<prefix>_<sanitized original name>``, where the prefix is a
strictly increasing millisecond timestamp.  The file is fully written
before the playlist entry referencing it is saved, so a crash in
between leaves an orphaned file rather than a dangling reference.
Files are never removed, even when their playlist is deleted.
"""

import logging
import re
import shutil
import threading
import time
from pathlib import Path
from typing import BinaryIO, Optional

from ..core.errors import StorageError, ValidationError
from ..core.store import Store
from ..schemas.playlist import AudioItem
from .playlist_service import owned_playlist, owned_user


logger = logging.getLogger(__name__)

_UNSAFE_CHARS = re.compile(r"[^A-Za-z0-9._-]")
_COPY_CHUNK_SIZE = 1024 * 1024


def sanitize_filename(name: str) -> str:
    """Replace every character outside ``[A-Za-z0-9._-]`` with ``_``."""
    return _UNSAFE_CHARS.sub("_", name)


class _UniquePrefix:
    """Millisecond timestamps that never repeat within the process."""

    def __init__(self) -> None:
        self._last = 0
        self._lock = threading.Lock()

    def next(self) -> str:
        with self._lock:
            self._last = max(self._last + 1, int(time.time() * 1000))
            return str(self._last)


class UploadService:
    """Stores audio files and links them into playlists."""

    def __init__(self, store: Store, upload_dir: Path, url_prefix: str = "/uploads") -> None:
        self.store = store
        self.upload_dir = Path(upload_dir)
        self.url_prefix = url_prefix.rstrip("/")
        self._prefix = _UniquePrefix()

    def generate_name(self, original_filename: str) -> str:
        return f"{self._prefix.next()}_{sanitize_filename(original_filename)}"

    def upload_audio(
        self,
        username: str,
        playlist_id: str,
        stream: Optional[BinaryIO],
        original_filename: Optional[str],
    ) -> AudioItem:
        """Persist ``stream`` and append an audio item to the playlist.

        Ownership is checked before any bytes are written and again when
        the item is saved, since the playlist may have been deleted while
        the file was being copied.
        """
        if stream is None or not original_filename:
            raise ValidationError("Missing mp3 file")
        owned_playlist(owned_user(self.store.load(), username), playlist_id)

        filename = self.generate_name(original_filename)
        target = self.upload_dir / filename
        try:
            self.upload_dir.mkdir(parents=True, exist_ok=True)
            with open(target, "wb") as out:
                shutil.copyfileobj(stream, out, _COPY_CHUNK_SIZE)
        except OSError as exc:
            logger.exception("Failed to write upload %s", target)
            raise StorageError("Could not store file") from exc

        item = AudioItem(
            filename=filename,
            originalName=original_filename,
            url=f"{self.url_prefix}/{filename}",
        )
        with self.store.transaction() as users:
            owned_playlist(owned_user(users, username), playlist_id).items.append(item)
        logger.info("User %s uploaded %s to playlist %s", username, filename, playlist_id)
        return item
