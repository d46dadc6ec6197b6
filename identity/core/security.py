"""Password hashing and JWT creation/verification for authentication."""

import base64
import hashlib
from datetime import UTC, datetime, timedelta
from typing import Any

import bcrypt
import jwt

from identity.core.config import settings

# Min/max lengths for username and password validation.
USERNAME_MIN_LEN = 1
USERNAME_MAX_LEN = 255
PASSWORD_MIN_LEN = 8
PASSWORD_MAX_LEN = 128


def _prehash(plain_password: str) -> bytes:
    # SHA-256 then base64 gives 44 bytes, under bcrypt's 72-byte input limit,
    # so every character of a long password affects the hash.
    digest = hashlib.sha256(plain_password.encode("utf-8")).digest()
    return base64.b64encode(digest)


def hash_password(plain_password: str) -> str:
    """Hash a plain-text password for storage. Do not store plain passwords."""
    return bcrypt.hashpw(
        _prehash(plain_password),
        bcrypt.gensalt(rounds=settings.BCRYPT_ROUNDS),
    ).decode("utf-8")


def verify_password(plain_password: str, hashed: str) -> bool:
    """Verify a plain password against a stored hash."""
    try:
        return bcrypt.checkpw(_prehash(plain_password), hashed.encode("utf-8"))
    except (ValueError, TypeError):
        return False


def create_access_token(
    sub: str,
    roles: list[str],
    extra_claims: dict[str, Any] | None = None,
) -> tuple[str, datetime]:
    """Create a JWT access token with sub (user id), roles, iat and exp; return (token, expiry)."""
    now = datetime.now(UTC)
    expire = now + timedelta(minutes=settings.JWT_EXPIRE_MINUTES)
    payload: dict[str, Any] = dict(extra_claims or {})
    payload.update(
        {
            "sub": str(sub),
            "roles": list(roles),
            "exp": expire,
            "iat": now,
        }
    )
    secret = settings.JWT_SECRET.get_secret_value()
    token = jwt.encode(
        payload,
        secret,
        algorithm=settings.JWT_ALGORITHM,
    )
    return token, expire


def decode_access_token(token: str) -> dict[str, Any]:
    """
    Decode and validate JWT; return payload (sub, roles, exp, iat).
    Raises jwt.PyJWTError on invalid or expired token.
    """
    secret = settings.JWT_SECRET.get_secret_value()
    return jwt.decode(
        token,
        secret,
        algorithms=[settings.JWT_ALGORITHM],
        options={"require": ["sub", "exp", "iat"]},
    )
