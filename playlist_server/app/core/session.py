"""
In-memory session table.

A session binds an opaque random token, carried by the session cookie,
to the canonical username of the account that logged in.  Sessions are
never persisted: they live until logout, until the optional idle
timeout elapses, or until the process exits.
"""

import logging
import secrets
import threading
import time
from typing import Dict, Iterable, Optional, Tuple

from .errors import AuthError
from .security import verify_password
from ..schemas.user import User


logger = logging.getLogger(__name__)


class SessionManager:
    """Maps session tokens to usernames."""

    def __init__(self, ttl_seconds: int = 0) -> None:
        self.ttl_seconds = ttl_seconds
        self._sessions: Dict[str, Tuple[str, float]] = {}
        self._lock = threading.Lock()

    def authenticate(self, users: Iterable[User], username: str, password: str) -> Tuple[str, User]:
        """Check credentials against ``users`` and open a session.

        The username is matched case-insensitively, the password exactly.
        The session records the stored spelling of the username.
        """
        wanted = username.lower()
        for user in users:
            if user.username.lower() == wanted and verify_password(password, user.password):
                return self.create(user.username), user
        raise AuthError("Invalid username or password")

    def create(self, username: str) -> str:
        token = secrets.token_urlsafe(32)
        with self._lock:
            self._sessions[token] = (username, time.monotonic())
        return token

    def resolve(self, token: Optional[str]) -> str:
        """Return the username bound to ``token``.

        Raises ``AuthError`` if the token is missing, unknown or has been
        idle for longer than the configured lifetime.  A successful
        lookup refreshes the idle timer.
        """
        if not token:
            raise AuthError("Not logged in")
        now = time.monotonic()
        with self._lock:
            entry = self._sessions.get(token)
            if entry is None:
                raise AuthError("Not logged in")
            username, last_seen = entry
            if self.ttl_seconds and now - last_seen > self.ttl_seconds:
                del self._sessions[token]
                logger.info("Session for %s expired", username)
                raise AuthError("Session expired")
            self._sessions[token] = (username, now)
        return username

    def terminate(self, token: Optional[str]) -> None:
        if not token:
            return
        with self._lock:
            self._sessions.pop(token, None)

    def __len__(self) -> int:
        with self._lock:
            return len(self._sessions)
