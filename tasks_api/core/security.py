"""Password hashing and JWT creation/verification for authentication."""

from datetime import UTC, datetime, timedelta
from typing import Any

import bcrypt
import jwt

from tasks_api.core.config import Settings, get_settings

# Bcrypt cost (rounds).
BCRYPT_ROUNDS = 10

# Min/max lengths for password and display name validation.
PASSWORD_MIN_LEN = 6
PASSWORD_MAX_LEN = 128
NAME_MIN_LEN = 1
NAME_MAX_LEN = 255


def hash_password(plain_password: str) -> str:
    """Hash a plain-text password for storage. Do not store plain passwords."""
    # bcrypt has a 72-byte limit; truncate to avoid errors (validation already limits length).
    pw_bytes = plain_password.encode("utf-8")[:72]
    return bcrypt.hashpw(pw_bytes, bcrypt.gensalt(rounds=BCRYPT_ROUNDS)).decode("utf-8")


def verify_password(plain_password: str, hashed: str) -> bool:
    """Verify a plain password against a stored hash."""
    pw_bytes = plain_password.encode("utf-8")[:72]
    try:
        return bcrypt.checkpw(pw_bytes, hashed.encode("utf-8"))
    except (ValueError, TypeError):
        return False


def create_access_token(sub: str, email: str, settings: Settings | None = None) -> str:
    """Create a JWT access token with sub (user id), email, iat and exp."""
    settings = settings or get_settings()
    now = datetime.now(UTC)
    expire = now + timedelta(minutes=settings.JWT_EXPIRE_MINUTES)
    payload: dict[str, Any] = {
        "sub": sub,
        "email": email,
        "exp": expire,
        "iat": now,
    }
    secret = settings.JWT_SECRET.get_secret_value()
    return jwt.encode(
        payload,
        secret,
        algorithm=settings.JWT_ALGORITHM,
    )


def decode_access_token(token: str, settings: Settings | None = None) -> dict[str, Any]:
    """
    Decode and validate JWT; return payload (sub, email, exp, iat).
    Uses the process settings unless an app passes its own.
    Raises jwt.PyJWTError on invalid or expired token.
    """
    settings = settings or get_settings()
    secret = settings.JWT_SECRET.get_secret_value()
    return jwt.decode(
        token,
        secret,
        algorithms=[settings.JWT_ALGORITHM],
        options={"require": ["sub", "exp"]},
    )
