"""Password hashing (bcrypt) and access token signing (JWT via python-jose)."""

import uuid
from datetime import timedelta
from typing import Any

import bcrypt
from jose import jwt

from libs.common.datetime_utils import utc_now

# Compared against when the email is unknown so both login failures cost one
# bcrypt check.
_DUMMY_HASH = bcrypt.hashpw(b"not-a-real-password", bcrypt.gensalt(rounds=10)).decode()


def hash_password(password: str, rounds: int = 10) -> str:
    return bcrypt.hashpw(password.encode("utf-8"), bcrypt.gensalt(rounds=rounds)).decode(
        "utf-8"
    )


def verify_password(password: str, password_hash: str | None) -> bool:
    """Constant-time check of ``password`` against a stored bcrypt hash."""
    candidate = (password_hash or _DUMMY_HASH).encode("utf-8")
    try:
        matches = bcrypt.checkpw(password.encode("utf-8"), candidate)
    except ValueError:
        # Malformed stored hash
        return False
    return matches and password_hash is not None


def create_access_token(
    user_id: uuid.UUID | str,
    is_admin: bool,
    *,
    secret: str,
    algorithm: str = "HS256",
    expires_delta: timedelta = timedelta(days=1),
) -> str:
    """Sign a token carrying the user id and admin flag."""
    issued_at = utc_now()
    claims = {
        "sub": str(user_id),
        "user_id": str(user_id),
        "is_admin": bool(is_admin),
        "iat": issued_at,
        "exp": issued_at + expires_delta,
    }
    return jwt.encode(claims, secret, algorithm=algorithm)


def decode_access_token(
    token: str, *, secret: str, algorithm: str = "HS256"
) -> dict[str, Any]:
    """Decode and verify a token; raises ``jose.JWTError`` when invalid or expired."""
    return jwt.decode(token, secret, algorithms=[algorithm])
