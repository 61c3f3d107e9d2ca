"""FastAPI dependencies for resolving the authenticated principal."""
from typing import Optional
from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.orm import Session

from techelevate.db import get_db
from techelevate.models.user import User
from techelevate.services.auth import decode_access_token
from techelevate.services.users import get_user_by_email

bearer_scheme = HTTPBearer(auto_error=False)


async def get_principal(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(bearer_scheme),
) -> Optional[str]:
    """
    Resolve the bearer token to a principal email (optional).

    Returns:
        Email if a valid token was presented, None otherwise
    """
    if credentials is None:
        return None
    return decode_access_token(credentials.credentials)


async def require_principal(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(bearer_scheme),
) -> str:
    """
    Require a valid bearer token.

    Raises:
        HTTPException 401 if the token is missing or invalid
    """
    if credentials is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Unauthorized access",
            headers={"WWW-Authenticate": "Bearer"},
        )

    email = decode_access_token(credentials.credentials)
    if email is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid or expired token",
            headers={"WWW-Authenticate": "Bearer"},
        )

    return email


async def require_user(
    principal: str = Depends(require_principal),
    db: Session = Depends(get_db),
) -> User:
    """
    Require the principal to have a user record.

    Raises:
        HTTPException 401 if the principal has never signed in
    """
    user = get_user_by_email(db, principal)
    if user is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="User not registered"
        )
    return user


async def require_moderator(user: User = Depends(require_user)) -> User:
    """
    Require moderator or admin role.

    Raises:
        HTTPException 403 if the user is neither
    """
    if not user.is_moderator:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Moderator access required"
        )
    return user


async def require_admin(user: User = Depends(require_user)) -> User:
    """
    Require admin role.

    Raises:
        HTTPException 403 if not admin
    """
    if not user.is_admin:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Admin access required"
        )
    return user
