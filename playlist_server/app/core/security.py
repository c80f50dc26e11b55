"""
Security helpers: password hashing and the session gate.

Passwords are hashed with PBKDF2‑HMAC using SHA‑256 and a random
16‑byte salt.  The stored string contains the salt and hash separated
by ``$`` (salt in hex, then hash in hex).  Documents written by older
deployments hold clear‑text passwords; ``verify_password`` still
accepts those so existing accounts can log in.

``require_session`` is the FastAPI dependency guarding every endpoint
except registration and login.  It runs before any service code and
therefore before the store is touched.
"""

import hashlib
import hmac
import os
from typing import TYPE_CHECKING, Optional

from fastapi import Request

if TYPE_CHECKING:
    from .session import SessionManager


PBKDF2_ITERATIONS = 100_000


def hash_password(password: str) -> str:
    """Hash a password using PBKDF2‑HMAC with SHA‑256.

    Parameters
    ----------
    password : str
        The plain text password to hash.

    Returns
    -------
    str
        Salt and hash concatenated with ``$``.
    """
    salt = os.urandom(16)
    dk = hashlib.pbkdf2_hmac("sha256", password.encode("utf-8"), salt, PBKDF2_ITERATIONS)
    return f"{salt.hex()}${dk.hex()}"


def verify_password(plain_password: str, stored_password: str) -> bool:
    """Verify a plain password against a stored value.

    The stored value is normally ``salthex$hashhex``.  Anything that does
    not parse as such is treated as a legacy clear‑text password and
    compared in constant time.
    """
    try:
        salt_hex, hash_hex = stored_password.split("$", 1)
        salt = bytes.fromhex(salt_hex)
        stored_hash = bytes.fromhex(hash_hex)
    except ValueError:
        return hmac.compare_digest(plain_password.encode("utf-8"), stored_password.encode("utf-8"))
    dk = hashlib.pbkdf2_hmac("sha256", plain_password.encode("utf-8"), salt, PBKDF2_ITERATIONS)
    return hmac.compare_digest(dk, stored_hash)


def get_session_token(request: Request) -> Optional[str]:
    """Read the session token from the cookie configured for this app."""
    cookie_name = request.app.state.settings.session_cookie_name
    return request.cookies.get(cookie_name)


def get_sessions(request: Request) -> "SessionManager":
    return request.app.state.sessions


def require_session(request: Request) -> str:
    """Dependency returning the username of the logged‑in caller.

    Raises ``AuthError`` (HTTP 401) when there is no live session.
    """
    return get_sessions(request).resolve(get_session_token(request))
