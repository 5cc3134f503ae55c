"""Verification of bearer tokens issued by the external identity provider."""

from typing import Any

from jose import JWTError, jwt

from app.core.config import settings


def decode_access_token(token: str) -> dict[str, Any] | None:
    """Decode and verify a bearer token. Returns None if invalid."""
    try:
        return jwt.decode(
            token,
            settings.AUTH_SECRET_KEY,
            algorithms=[settings.AUTH_ALGORITHM],
        )
    except JWTError:
        return None
