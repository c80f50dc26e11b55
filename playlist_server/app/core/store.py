"""
JSON document store.

The whole database is one JSON array of users, each carrying its
playlists and their items.  Every mutating operation performs a full
read, an in-memory change and a full write; there are no partial
updates.  ``Store.transaction`` wraps that cycle in a process-wide
lock so that two concurrent requests cannot overwrite each other's
changes, and writes go through a temporary file followed by
``os.replace`` so readers never see a half-written document.
"""

import json
import logging
import os
import tempfile
import threading
from contextlib import contextmanager
from pathlib import Path
from typing import Iterator, List, Union

from pydantic import TypeAdapter
from pydantic import ValidationError as SchemaValidationError

from .errors import StorageError
from ..schemas.user import User


logger = logging.getLogger(__name__)

_users_adapter = TypeAdapter(List[User])


class Store:
    """Loads and persists the user collection."""

    def __init__(self, path: Union[str, Path]) -> None:
        self.path = Path(path)
        self._lock = threading.RLock()

    def load(self) -> List[User]:
        """Read every user from the document.

        A missing, empty or unparseable document yields an empty list.

        Raises
        ------
        StorageError
            If the document is valid JSON but does not describe a list of
            users.
        """
        try:
            raw = self.path.read_text(encoding="utf-8")
        except FileNotFoundError:
            return []
        except OSError as exc:
            logger.warning("Cannot read store %s: %s", self.path, exc)
            return []
        if not raw.strip():
            return []
        try:
            data = json.loads(raw)
        except ValueError as exc:
            logger.warning("Store %s is not valid JSON: %s", self.path, exc)
            return []
        try:
            return _users_adapter.validate_python(data)
        except SchemaValidationError as exc:
            logger.error("Store %s does not match the user schema: %s", self.path, exc)
            raise StorageError("Stored data is invalid") from exc

    def save(self, users: List[User]) -> None:
        """Overwrite the document with ``users``.

        Raises
        ------
        StorageError
            If the document cannot be written.  The previous document is
            left untouched in that case.
        """
        payload = json.dumps(_users_adapter.dump_python(users, mode="json"), indent=2, ensure_ascii=False)
        tmp_name = None
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            fd, tmp_name = tempfile.mkstemp(
                prefix=f".{self.path.name}.", suffix=".tmp", dir=str(self.path.parent)
            )
            with os.fdopen(fd, "w", encoding="utf-8") as fh:
                fh.write(payload)
                fh.flush()
                os.fsync(fh.fileno())
            os.replace(tmp_name, self.path)
        except OSError as exc:
            logger.exception("Failed to write store %s", self.path)
            if tmp_name and os.path.exists(tmp_name):
                os.unlink(tmp_name)
            raise StorageError("Could not save data") from exc

    @contextmanager
    def transaction(self) -> Iterator[List[User]]:
        """Yield the loaded users for mutation and save them on success.

        The store lock is held from load to save.  The document is only
        rewritten when the block actually changed something.  If the block
        raises, nothing is written and the exception propagates.
        """
        with self._lock:
            users = self.load()
            before = _users_adapter.dump_json(users)
            yield users
            if _users_adapter.dump_json(users) != before:
                self.save(users)


def find_user(users: List[User], username: str):
    """Return the user whose stored name equals ``username`` exactly."""
    for user in users:
        if user.username == username:
            return user
    return None
