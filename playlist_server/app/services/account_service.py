"""
Business logic for accounts.

Registration, login, logout and profile lookup.  Usernames are
compared case-insensitively, while the session always records the
canonical spelling stored at registration.
"""

import logging
import re
from typing import Optional, Tuple

from ..core.errors import AuthError, ConflictError, ValidationError
from ..core.security import hash_password
from ..core.session import SessionManager
from ..core.store import Store, find_user
from ..schemas.user import Profile, RegisterRequest, User


logger = logging.getLogger(__name__)

MIN_PASSWORD_LENGTH = 6
_LETTER_RE = re.compile(r"[A-Za-z]")
_DIGIT_RE = re.compile(r"[0-9]")


def check_password_rules(password: str) -> None:
    """Raise ``ValidationError`` unless ``password`` is acceptable.

    A password needs at least six characters, one letter and one digit.
    """
    if (
        len(password) < MIN_PASSWORD_LENGTH
        or not _LETTER_RE.search(password)
        or not _DIGIT_RE.search(password)
    ):
        raise ValidationError("Password must be >= 6 and include 1 letter and 1 number")


class AccountService:
    """Registration, login, logout and profile retrieval."""

    def __init__(self, store: Store, sessions: SessionManager) -> None:
        self.store = store
        self.sessions = sessions

    def register(self, data: RegisterRequest) -> None:
        """Create a new account with an empty playlist list.

        No session is created; the caller logs in separately.
        """
        fields = data.model_dump()
        if not all(fields.values()):
            raise ValidationError("All fields are required")
        check_password_rules(data.password)

        wanted = data.username.lower()
        hashed = hash_password(data.password)
        with self.store.transaction() as users:
            if any(u.username.lower() == wanted for u in users):
                raise ConflictError("Username already exists")
            users.append(
                User(
                    username=data.username,
                    password=hashed,
                    email=data.email,
                    firstName=data.firstName,
                    lastName=data.lastName,
                    imageUrl=data.imageUrl,
                    playlists=[],
                )
            )
        logger.info("Registered user %s", data.username)

    def login(self, username: Optional[str], password: Optional[str]) -> Tuple[str, Profile]:
        """Check credentials and open a session.

        Returns the session token and the public profile.
        """
        if not username or not password:
            raise ValidationError("Missing credentials")
        try:
            token, user = self.sessions.authenticate(self.store.load(), username, password)
        except AuthError:
            logger.info("Failed login for %s", username)
            raise
        logger.info("User %s logged in", user.username)
        return token, user.to_profile()

    def logout(self, token: Optional[str]) -> None:
        self.sessions.terminate(token)

    def me(self, username: str) -> Profile:
        user = find_user(self.store.load(), username)
        if user is None:
            raise AuthError("Not logged in")
        return user.to_profile()
