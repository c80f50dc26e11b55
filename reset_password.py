#!/usr/bin/env python3
"""
Reset a user's password in the Playlist Server JSON store.

This script DOES NOT read or reveal any existing passwords.  It simply
stores a new password hash (PBKDF2‑HMAC‑SHA256, format
"salthex$hashhex") for the given username.  The username is matched
case-insensitively, as on login.  Run it while the server is stopped or
idle: it takes the same in-process lock as the server but cannot
coordinate with another process.

Usage:
    python reset_password.py --data ./playlist_server/db/users.json --username alice --password "abc123"

If --password is omitted, you will be prompted to enter it securely.
"""

import argparse
import getpass
import sys
from typing import List, Optional

from playlist_server.app.core.config import settings
from playlist_server.app.core.errors import ServiceError
from playlist_server.app.core.security import hash_password
from playlist_server.app.core.store import Store
from playlist_server.app.services.account_service import check_password_rules


def reset_password(store: Store, username: str, password: str) -> str:
    """Store a new hashed password and return the canonical username.

    Raises ``ValidationError`` for a weak password and ``LookupError`` if
    no such user exists.
    """
    check_password_rules(password)
    hashed = hash_password(password)
    wanted = username.lower()
    with store.transaction() as users:
        for user in users:
            if user.username.lower() == wanted:
                user.password = hashed
                return user.username
    raise LookupError(f"User {username} not found")


def main(argv: Optional[List[str]] = None) -> int:
    parser = argparse.ArgumentParser(description="Reset a user's password in the JSON store.")
    parser.add_argument("--data", default=str(settings.data_path), help="Path to users.json")
    parser.add_argument("--username", required=True, help="User whose password to reset")
    parser.add_argument("--password", help="New password (prompted if omitted)")
    args = parser.parse_args(argv)

    password = args.password
    if password is None:
        password = getpass.getpass("New password: ")
        confirm = getpass.getpass("Repeat password: ")
        if password != confirm:
            print("Passwords do not match", file=sys.stderr)
            return 2

    try:
        canonical = reset_password(Store(args.data), args.username, password)
    except (ServiceError, LookupError) as exc:
        print(f"Error: {exc}", file=sys.stderr)
        return 1
    print(f"Password updated for {canonical}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
