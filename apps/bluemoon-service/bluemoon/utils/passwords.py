"""
Password hashing and session token helpers.

Passwords are hashed with Argon2id. Session tokens are opaque url-safe
strings handed to clients at login; the API does not verify them.
"""
from __future__ import annotations

import secrets

from argon2 import PasswordHasher
from argon2.exceptions import InvalidHashError, VerificationError
from argon2.low_level import Type

_hasher = PasswordHasher(time_cost=2, memory_cost=102400, parallelism=8, hash_len=32, type=Type.ID)


def hash_password(password: str) -> str:
    return _hasher.hash(password)


def verify_password(password: str, password_hash: str) -> bool:
    """Constant-time check of a password against its stored hash."""
    if not password_hash:
        return False
    try:
        return _hasher.verify(password_hash, password)
    except (VerificationError, InvalidHashError):
        return False


def generate_session_token(length: int = 32) -> str:
    """Return a high-entropy url-safe token string."""
    return secrets.token_urlsafe(length)
