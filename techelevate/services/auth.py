"""Access token issuance and verification."""
from datetime import datetime, timedelta, timezone
from typing import Optional

import jwt

from techelevate.settings import settings


def create_access_token(email: str, expires_minutes: Optional[int] = None) -> str:
    """
    Create a signed access token for ``email``.

    Args:
        email: Principal the token identifies
        expires_minutes: Lifetime override (defaults to settings)

    Returns:
        Encoded JWT
    """
    if expires_minutes is None:
        expires_minutes = settings.ACCESS_TOKEN_EXPIRE_MINUTES

    now = datetime.now(timezone.utc)
    payload = {
        "email": email,
        "iat": now,
        "exp": now + timedelta(minutes=expires_minutes),
    }
    return jwt.encode(payload, settings.JWT_SECRET_KEY, algorithm=settings.JWT_ALGORITHM)


def decode_access_token(token: str) -> Optional[str]:
    """
    Verify a token and return its email.

    Returns:
        Email if the token is valid and unexpired, None otherwise
    """
    try:
        payload = jwt.decode(token, settings.JWT_SECRET_KEY, algorithms=[settings.JWT_ALGORITHM])
    except jwt.InvalidTokenError:
        return None

    email = payload.get("email")
    if not isinstance(email, str) or not email:
        return None
    return email
